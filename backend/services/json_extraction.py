"""Recover JSON payloads from free-text language-model responses.

Providers wrap JSON in code fences or surround it with prose
("Sure! Here is the data: {...} Let me know..."). These helpers cut the
payload out before parsing.
"""

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```[a-zA-Z]*\n?")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences (```json ... ```) anywhere in the text."""
    return _FENCE_RE.sub("", text).strip()


def _slice(text: str, open_char: str, close_char: str) -> str:
    start = text.find(open_char)
    end = text.rfind(close_char)
    if start == -1 or end <= start:
        raise ValueError(f"No JSON {open_char}...{close_char} found in response")
    return text[start:end + 1]


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the span between the first ``{`` and the last ``}``.

    Raises ValueError when there is no such span, it is not valid JSON,
    or it does not decode to an object.
    """
    payload = _slice(strip_code_fences(text or ""), "{", "}")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON object: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("JSON payload is not an object")
    return data


def extract_json_array(text: str) -> list[Any]:
    """Parse a JSON array, or an object wrapping one under ``"questions"``."""
    cleaned = strip_code_fences(text or "")
    array_start = cleaned.find("[")
    object_start = cleaned.find("{")

    if object_start != -1 and (array_start == -1 or object_start < array_start):
        data = extract_json_object(cleaned)
        questions = data.get("questions")
        if isinstance(questions, list):
            return questions
        raise ValueError("JSON object has no 'questions' list")

    payload = _slice(cleaned, "[", "]")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON array: {e}") from e
    if not isinstance(data, list):
        raise ValueError("JSON payload is not an array")
    return data
