"""
Turn raw model output into a VisualTestResult.

Two modes, chosen by the backend's structured_output flag:

- structured: the provider already enforced the response shape, so this is
  the identity plus defaulting.
- free text: parse the text as JSON; if that fails, fall back to a keyword
  heuristic.

Known limitation of the heuristic: it only looks for the words "true",
"yes" or "correct" anywhere in the text, so a negated answer such as
"It is not true that the banner is shown" counts as a pass. It is kept as
is; prefer structured output where the provider supports it.
"""

import json
from typing import Any, List

from loguru import logger
from pydantic import BaseModel

from .backends.base import DEFAULT_REASON, RawModelOutput, VisualTestResult
from .errors import InterpretationError

SUCCESS_TOKENS = ("true", "yes", "correct")


def interpret(raw: RawModelOutput, structured_output: bool = True) -> VisualTestResult:
    """
    Interpret a backend response.

    Models and mappings are always mapped field by field; only text goes
    through JSON parsing and the keyword heuristic.

    Args:
        raw: What ModelBackend.invoke() returned
        structured_output: Whether the backend enforces the response schema

    Raises:
        InterpretationError: If a structured backend returned something that is
            neither a model nor a mapping
    """
    # Already-structured objects never go through the text heuristic
    if structured_output or isinstance(raw, (BaseModel, dict)):
        return interpret_structured(raw)
    return interpret_text(raw if isinstance(raw, str) else str(raw))


def interpret_structured(raw: RawModelOutput) -> VisualTestResult:
    """Map a schema-conforming response onto a VisualTestResult."""
    if isinstance(raw, BaseModel):
        data = raw.model_dump()
    elif isinstance(raw, dict):
        data = raw
    else:
        raise InterpretationError(
            f"Expected a structured response, got {type(raw).__name__}"
        )

    return VisualTestResult(
        success=_coerce_bool(data.get("success", False)),
        reason=_coerce_reason(data.get("reason")),
        locators=_coerce_locators(data.get("locators")),
    )


def interpret_text(text: str) -> VisualTestResult:
    """Parse a free-text response, falling back to the keyword heuristic."""
    parsed = _parse_json_object(text)
    if parsed is not None:
        return VisualTestResult(
            success=_coerce_bool(parsed.get("success", False)),
            reason=_coerce_reason(parsed.get("reason")),
            locators=_coerce_locators(parsed.get("locators")),
        )

    logger.debug("Model response is not JSON, using keyword heuristic")
    lowered = text.lower()
    return VisualTestResult(
        success=any(token in lowered for token in SUCCESS_TOKENS),
        reason=text,
        locators=[],
    )


def _parse_json_object(text: str):
    # Models often wrap JSON in a markdown fence
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("```")[1]
        if cleaned.startswith("json"):
            cleaned = cleaned[4:]
        cleaned = cleaned.strip()

    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, ValueError):
        return None

    if not isinstance(parsed, dict):
        return None
    return parsed


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _coerce_reason(value: Any) -> str:
    if value is None or value == "":
        return DEFAULT_REASON
    return value if isinstance(value, str) else str(value)


def _coerce_locators(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item]
    return []
