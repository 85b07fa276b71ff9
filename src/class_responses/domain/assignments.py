"""Domain models for shared class assignments."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AssignmentEntry:
    """One respondent's submission under an assignment id."""

    id: str
    name: str
    response: str
    submitted_at: int


def name_key(name: str) -> str:
    """Return the case-insensitive uniqueness key for a respondent name."""
    return name.strip().lower()
