"""Fact-check gateway: a thin, timeout-guarded adapter over the Bedrock chat model.

The gateway holds no room or poll state. ``check`` backs the real-time
``checkFact`` event and ``verify`` backs the ``/api/fact-check`` endpoint.
Both raise :class:`FactCheckError` on any failure; callers decide what the
participant sees.
"""
from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import Any, Callable, Dict, List, Optional

from langchain_core.prompts import PromptTemplate

from debatehub.config import Config
from debatehub.utils.json_utils import extract_json_object

logger = logging.getLogger(__name__)

CHECK_PROMPT = PromptTemplate.from_template(
    "As a fact-checker, please verify or answer this: {text}"
)

VERIFY_PROMPT = PromptTemplate.from_template(
    """
    You are a neutral fact-checker supporting a live debate about "{topic}".
    Assess whether the statement below is factually accurate.

    Statement:
    {statement}

    Format:
    Output MUST be valid JSON with the keys:
    - isFactual: true or false
    - explanation: one short paragraph
    - sources: a list of source names or URLs (may be empty)

    Response:
    """
)


class FactCheckError(Exception):
    """The gateway could not produce a verification."""


class FactCheckTimeout(FactCheckError):
    pass


def _response_text(raw: Any) -> str:
    # Normalize LangChain message / dict / str responses to plain text
    text = raw
    if hasattr(raw, "content"):
        text = raw.content
    elif isinstance(raw, dict) and "content" in raw:
        text = raw["content"]
    if isinstance(text, list):
        text = "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in text)
    if not isinstance(text, str):
        text = str(text or "")
    return text.strip()


class FactChecker:
    def __init__(
        self,
        llm_factory: Optional[Callable[[Dict[str, Any]], Any]] = None,
        *,
        timeout_seconds: Optional[float] = None,
        max_workers: Optional[int] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> None:
        if llm_factory is None:
            from debatehub.utils.llm_bedrock import get_chat_llm

            llm_factory = get_chat_llm
        self._llm_factory = llm_factory
        self._llm: Any = None
        self.timeout_seconds = max(0.1, float(timeout_seconds or Config.FACT_CHECK_TIMEOUT_SECONDS))
        self.max_tokens = int(max_tokens or Config.FACT_CHECK_MAX_TOKENS)
        self.temperature = Config.FACT_CHECK_TEMPERATURE if temperature is None else float(temperature)
        self.executor = ThreadPoolExecutor(max_workers=max(1, int(max_workers or Config.FACT_CHECK_MAX_WORKERS)))

    def _get_llm(self) -> Any:
        if self._llm is None:
            self._llm = self._llm_factory({"temperature": self.temperature, "max_tokens": self.max_tokens})
        return self._llm

    def _invoke(self, prompt: str) -> str:
        future = self.executor.submit(lambda: self._get_llm().invoke(prompt))
        try:
            raw = future.result(timeout=self.timeout_seconds)
        except FuturesTimeoutError as exc:
            future.cancel()
            logger.warning("Fact-check request timed out after %.1fs", self.timeout_seconds)
            raise FactCheckTimeout(f"Fact-check timed out ({self.timeout_seconds:.1f}s)") from exc
        except Exception as exc:
            logger.error("Error querying fact-check model: %s", exc)
            raise FactCheckError(str(exc)) from exc
        text = _response_text(raw)
        if not text:
            raise FactCheckError("Empty response from fact-check model")
        return text

    def check(self, text: str) -> str:
        """Return the model's free-text verification of ``text``."""
        logger.info("Sending fact-check request (%d chars)", len(text))
        return self._invoke(CHECK_PROMPT.format(text=text))

    def verify(self, statement: str, topic: Optional[str] = None) -> Dict[str, Any]:
        """Return ``{isFactual, explanation, sources}`` for ``statement``."""
        text = self._invoke(VERIFY_PROMPT.format(statement=statement, topic=topic or "general"))
        blob = extract_json_object(text)
        if not blob:
            raise FactCheckError("Fact-check model did not return JSON")
        try:
            parsed = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise FactCheckError("Fact-check model returned invalid JSON") from exc
        return _normalize_verdict(parsed)

    def shutdown(self, wait: bool = False) -> None:
        self.executor.shutdown(wait=wait)


def _normalize_verdict(parsed: Dict[str, Any]) -> Dict[str, Any]:
    raw_flag = parsed.get("isFactual", parsed.get("is_factual"))
    if isinstance(raw_flag, str):
        is_factual = raw_flag.strip().lower() in {"true", "yes", "1"}
    else:
        is_factual = bool(raw_flag)
    sources: List[str] = []
    raw_sources = parsed.get("sources") or []
    if isinstance(raw_sources, str):
        raw_sources = [raw_sources]
    if isinstance(raw_sources, list):
        sources = [str(s).strip() for s in raw_sources if str(s).strip()]
    return {
        "isFactual": is_factual,
        "explanation": str(parsed.get("explanation") or "").strip(),
        "sources": sources,
    }
