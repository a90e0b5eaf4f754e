"""Documentation quality scoring for the interview flow."""

from collections.abc import Mapping, Sequence
from typing import Any

from narrato.models.analysis import QualityReport

# Documentation topics that raise the score when mentioned in the conversation
QUALITY_KEYWORDS = (
    "installation",
    "setup",
    "usage",
    "features",
    "dependencies",
    "requirements",
    "api",
    "configuration",
    "examples",
    "contributing",
)

POINTS_PER_MESSAGE = 10
MAX_MESSAGE_POINTS = 30
POINTS_PER_KEYWORD = 5
DETAILED_RESPONSE_LENGTH = 100
DETAILED_RESPONSE_POINTS = 10
CODE_BLOCK_POINTS = 5
CODE_FENCE = "```"

# (minimum score, level, hint), highest band first
QUALITY_LEVELS: list[tuple[int, str, str]] = [
    (80, "Excellent", "Excellent documentation quality!"),
    (60, "Good", "Almost there! Include examples"),
    (40, "Fair", "Good progress! Add more details"),
    (0, "Needs Work", "Keep answering questions to improve quality"),
]


def _message_text(message: Any) -> str:
    if isinstance(message, Mapping):
        content = message.get("content")
    else:
        content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


def score(messages: Sequence[Any] | None, latest_response: str | None) -> int:
    """Score documentation quality from the conversation so far.

    Args:
        messages: Conversation history; dicts or objects with ``content``.
        latest_response: The most recent assistant reply.

    Returns:
        Integer score clamped to [0, 100].
    """
    messages = messages or []
    latest_response = latest_response or ""

    total = min(len(messages) * POINTS_PER_MESSAGE, MAX_MESSAGE_POINTS)

    history = " ".join(_message_text(m).lower() for m in messages)
    total += sum(POINTS_PER_KEYWORD for keyword in QUALITY_KEYWORDS if keyword in history)

    if len(latest_response) > DETAILED_RESPONSE_LENGTH:
        total += DETAILED_RESPONSE_POINTS
    if CODE_FENCE in latest_response:
        total += CODE_BLOCK_POINTS

    return max(0, min(total, 100))


def quality_level(value: int) -> QualityReport:
    """Map a score to its display level and hint."""
    value = max(0, min(value, 100))
    _, level, hint = next(band for band in QUALITY_LEVELS if value >= band[0])
    return QualityReport(score=value, level=level, hint=hint)
