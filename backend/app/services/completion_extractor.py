"""Extraction and cleanup of Gemini completions"""
import json
import logging
import re
from typing import Any, Dict, Iterable

from app.errors import BlockedOrEmptyCompletionError, MalformedCompletionError

logger = logging.getLogger(__name__)

# ```json ... ``` or bare ``` ... ```
_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_+-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?[ \t]*```\s*$")


def extract_completion_text(response: Any) -> str:
    """
    Pull the completion text out of a Gemini response.

    Args:
        response: GenerateContentResponse (or any object with the same
            candidates/content/parts shape)

    Returns:
        The concatenated text parts of the first candidate

    Raises:
        BlockedOrEmptyCompletionError: No candidate, no content parts, or only
            empty text, which usually means the provider's safety filter
            withheld the output
    """
    candidates = list(getattr(response, "candidates", None) or [])
    if not candidates:
        block_reason = _block_reason(response)
        logger.error(f"Gemini returned no candidates (block_reason={block_reason})")
        raise BlockedOrEmptyCompletionError(
            details=f"Prompt blocked: {block_reason}" if block_reason else "No candidates returned"
        )

    candidate = candidates[0]
    content = getattr(candidate, "content", None)
    parts = list(getattr(content, "parts", None) or [])
    finish_reason = _enum_name(getattr(candidate, "finish_reason", None))
    if not parts:
        logger.error(f"Gemini candidate has no content parts (finish_reason={finish_reason})")
        raise BlockedOrEmptyCompletionError(
            details=f"Finish reason: {finish_reason}" if finish_reason else "Candidate has no content"
        )

    text = "".join(getattr(part, "text", "") or "" for part in parts)
    if not text.strip():
        logger.error(f"Gemini candidate contained no text (finish_reason={finish_reason})")
        raise BlockedOrEmptyCompletionError(details="Candidate text is empty")

    return text


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, tagged (```json) or bare (```)."""
    stripped = _LEADING_FENCE.sub("", text, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def parse_json_completion(text: str, required_fields: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Parse a completion that is expected to be a JSON object.

    Code fences are the only repair applied before a strict json.loads.

    Args:
        text: Raw completion text
        required_fields: Keys that must be present as non-empty strings

    Returns:
        The parsed object

    Raises:
        MalformedCompletionError: The text is not a JSON object or a required
            field is missing or empty
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse model JSON: {e}")
        logger.debug(f"Unparseable completion:\n{text}")
        raise MalformedCompletionError(details=f"Model response was not valid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise MalformedCompletionError(details="Model response was not a JSON object")

    missing = [
        field for field in required_fields
        if not isinstance(data.get(field), str) or not data[field].strip()
    ]
    if missing:
        logger.error(f"Model JSON missing fields {missing}: keys={sorted(data)}")
        raise MalformedCompletionError(details=f"Model response missing fields: {', '.join(missing)}")

    return data


def _block_reason(response: Any) -> str:
    feedback = getattr(response, "prompt_feedback", None)
    return _enum_name(getattr(feedback, "block_reason", None))


def _enum_name(value: Any) -> str:
    if not value:
        return ""
    return getattr(value, "name", None) or str(value)
