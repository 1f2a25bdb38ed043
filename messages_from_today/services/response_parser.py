"""
Response Parser - pulls the insight payload out of free-form model output.

Models wrap JSON in prose or markdown fences often enough that we never
``json.loads`` the raw text directly.  Instead we take the span from the
first ``{`` to the last ``}`` and parse that.  The span is greedy: trailing
JSON-like text after the intended object is captured too, which then fails
as invalid JSON rather than being silently trimmed.
"""

import json
import logging
import re

from messages_from_today.errors import ParseError
from messages_from_today.models import Insight

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 3

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def _as_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _to_insight(item) -> Insight:
    if not isinstance(item, dict):
        return Insight(message="", description="")
    return Insight(
        message=_as_text(item.get("message")),
        description=_as_text(item.get("description")),
    )


def parse_ai_response(raw_text: str) -> list[Insight]:
    """Return at most ``MAX_INSIGHTS`` insights found in ``raw_text``."""
    match = _JSON_OBJECT_RE.search(raw_text or "")
    if not match:
        logger.error("Failed to parse AI response - no JSON found: %s", (raw_text or "")[:500])
        raise ParseError("Failed to parse AI response: No JSON found in response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse AI response JSON - raw: %s", raw_text[:500])
        raise ParseError(f"Failed to parse AI response: {exc}") from exc

    insights = data.get("insights") if isinstance(data, dict) else None
    if not isinstance(insights, list):
        logger.error("AI response has no insights array - raw: %s", raw_text[:500])
        raise ParseError(
            "Failed to parse AI response: Invalid response format: missing insights array"
        )

    return [_to_insight(item) for item in insights[:MAX_INSIGHTS]]
