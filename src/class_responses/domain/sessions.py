"""Domain models for response sessions."""

from dataclasses import dataclass

RESPONSE_SLOTS = 30
DRAFT_STATUS = "draft"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted single-respondent session."""

    id: str
    created_at: int
    expires_at: int
    status: str
    responses: tuple[str, ...]


def empty_responses() -> tuple[str, ...]:
    """Return the initial answer set for a new session."""
    return ("",) * RESPONSE_SLOTS
