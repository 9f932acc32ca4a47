"""Bedrock client helpers with resilient retry behavior.

Builds the boto3 Bedrock Runtime client and the LangChain chat model used by
the fact-check gateway, with adaptive botocore retries plus an application
level exponential backoff for throttling (HTTP 429/503).
"""
from __future__ import annotations

import logging
import random
import time
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError
from langchain_aws import ChatBedrock
from pydantic import PrivateAttr

from debatehub.config import Config

logger = logging.getLogger(__name__)


def get_bedrock_runtime_client():
    """Return a configured boto3 Bedrock Runtime client.

    Uses explicit credentials from Config if provided, else falls back
    to standard AWS credential resolution (env vars, profiles, etc.).
    """
    kwargs: Dict[str, Any] = {"region_name": Config.AWS_REGION}

    if Config.AWS_ACCESS_KEY_ID and Config.AWS_SECRET_ACCESS_KEY:
        kwargs.update(
            dict(
                aws_access_key_id=Config.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=Config.AWS_SECRET_ACCESS_KEY,
            )
        )
        if Config.AWS_SESSION_TOKEN:
            kwargs["aws_session_token"] = Config.AWS_SESSION_TOKEN

    kwargs["config"] = BotoConfig(
        retries={
            "mode": "adaptive",
            "max_attempts": Config.BEDROCK_BOTO_MAX_ATTEMPTS,
        }
    )

    return boto3.client("bedrock-runtime", **kwargs)


def is_bedrock_configured() -> bool:
    """Best-effort check (no network call) that a region and credentials are available."""
    try:
        if not Config.AWS_REGION:
            return False
        if Config.AWS_ACCESS_KEY_ID and Config.AWS_SECRET_ACCESS_KEY:
            return True
        return boto3.Session().get_credentials() is not None
    except Exception:
        return False


class RetryingChatBedrock(ChatBedrock):
    """ChatBedrock variant that backs off and retries throttled ``invoke`` calls."""

    _max_attempts: int = PrivateAttr(default=1)
    _base_delay: float = PrivateAttr(default=0.5)
    _max_delay: float = PrivateAttr(default=0.5)

    _retryable_codes: ClassVar[Sequence[str]] = (
        "ServiceUnavailableException",
        "ThrottlingException",
        "TooManyRequestsException",
        "ModelNotReadyException",
    )
    _retryable_status: ClassVar[Sequence[int]] = (429, 500, 502, 503, 504)

    def __init__(
        self,
        *,
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        **data: Any,
    ) -> None:
        super().__init__(**data)
        base = max(0.01, base_delay or Config.BEDROCK_RETRY_BASE_DELAY_SECONDS)
        object.__setattr__(self, "_max_attempts", max(1, max_attempts or Config.BEDROCK_RETRY_MAX_ATTEMPTS))
        object.__setattr__(self, "_base_delay", base)
        object.__setattr__(self, "_max_delay", max(base, max_delay or Config.BEDROCK_RETRY_MAX_DELAY_SECONDS))

    def invoke(self, input: Any, config: Optional[Any] = None, *, stop: Optional[list[str]] = None, **kwargs: Any) -> Any:
        attempt = 1
        while True:
            try:
                return super().invoke(input, config=config, stop=stop, **kwargs)
            except Exception as exc:  # pragma: no cover - network dependent
                if attempt >= self._max_attempts or not self._should_retry(exc):
                    raise
                delay = self._backoff_delay(attempt)
                code, status = _error_details(exc)
                logger.warning(
                    "Bedrock request throttled (code=%s, status=%s) - attempt %s/%s, backing off %.2fs",
                    code or "unknown",
                    status or "n/a",
                    attempt,
                    self._max_attempts,
                    delay,
                )
                time.sleep(delay)
                attempt += 1

    def _should_retry(self, exc: Exception) -> bool:
        code, status = _error_details(exc)
        if code and code in self._retryable_codes:
            return True
        if status and status in self._retryable_status:
            return True
        lowered = str(exc).lower()
        return "throttl" in lowered or "too many requests" in lowered

    def _backoff_delay(self, attempt: int) -> float:
        capped = min(self._max_delay, self._base_delay * (2 ** (attempt - 1)))
        return min(self._max_delay, capped + random.uniform(0, capped * 0.5))


def _error_details(exc: Exception) -> Tuple[Optional[str], Optional[int]]:
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code")
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return code, status
    return None, None


def get_chat_llm(model_kwargs: Optional[Dict[str, Any]] = None) -> RetryingChatBedrock:
    """Return the Bedrock chat model used for fact checking.

    model_kwargs will be passed to the underlying provider (temperature, max_tokens, etc.).
    """
    return RetryingChatBedrock(
        model=Config.BEDROCK_MODEL_ID,
        client=get_bedrock_runtime_client(),
        model_kwargs=model_kwargs or {},
    )
