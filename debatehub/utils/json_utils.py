# debatehub/utils/json_utils.py
import json
import logging
import re

logger = logging.getLogger(__name__)


def _find_balanced_object(text: str) -> str:
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escape = False
        for idx in range(start, len(text)):
            ch = text[idx]
            if escape:
                escape = False
                continue
            if ch == "\\":
                escape = True
                continue
            if ch == '"':
                in_string = not in_string
                continue
            if in_string:
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    candidate = text[start : idx + 1]
                    try:
                        json.loads(candidate)
                        return candidate
                    except json.JSONDecodeError:
                        break
        start = text.find("{", start + 1)
    return ""


def extract_json_object(text: str) -> str:
    """
    Extracts the first complete JSON object from model output, preferring a
    ```json fenced block when one is present.
    Returns an empty string if no valid object is found.
    """
    if not text:
        return ""

    fence_match = re.search(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", text, re.IGNORECASE | re.DOTALL)
    if fence_match:
        potential_json = fence_match.group(1).strip()
        try:
            json.loads(potential_json)
            return potential_json
        except json.JSONDecodeError:
            logger.warning("[extract_json_object] Fenced block is not valid JSON. Falling back.")

    candidate = _find_balanced_object(text)
    if not candidate:
        logger.warning("[extract_json_object] No JSON object found in the text.")
    return candidate
