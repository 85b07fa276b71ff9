"""Shared assignment submissions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from class_responses.domain.assignments import AssignmentEntry, name_key
from class_responses.domain.errors import AlreadySubmittedError, InvalidInputError
from class_responses.services.clock import now_ms
from class_responses.services.collation import CollationKey, default_collation_key

logger = logging.getLogger(__name__)


class AssignmentRepository(Protocol):
    """Persistence interface for assignment entries."""

    def find_entry(self, assignment_id: str, key: str) -> AssignmentEntry | None:
        """Return the entry for a lowercased name under an assignment, if any."""

    def create_entry(self, entry: AssignmentEntry) -> None:
        """Insert an entry, raising AlreadySubmittedError on a uniqueness conflict."""

    def list_entries(self, assignment_id: str) -> list[AssignmentEntry]:
        """Return all entries for an assignment in submission order."""


@dataclass
class AssignmentService:
    """Accepts one submission per respondent and lists them for export."""

    repository: AssignmentRepository
    collation_key: CollationKey = field(default=default_collation_key)
    clock: Callable[[], int] = field(default=now_ms)

    def submit(
        self, assignment_id: str, name: str | None, response: str | None
    ) -> AssignmentEntry:
        """Store a respondent's submission unless they already submitted."""
        cleaned_name = (name or "").strip()
        cleaned_response = (response or "").strip()
        if not cleaned_name or not cleaned_response:
            raise InvalidInputError("Missing fields")

        key = name_key(cleaned_name)
        if self.repository.find_entry(assignment_id, key) is not None:
            logger.info(
                "Rejected duplicate submission",
                extra={"assignment_id": assignment_id},
            )
            raise AlreadySubmittedError(cleaned_name)

        entry = AssignmentEntry(
            id=assignment_id,
            name=cleaned_name,
            response=cleaned_response,
            submitted_at=self.clock(),
        )
        self.repository.create_entry(entry)
        logger.info("Stored submission", extra={"assignment_id": assignment_id})
        return entry

    def list_submissions(self, assignment_id: str) -> list[AssignmentEntry]:
        """Return entries ordered by collated name, ties in submission order."""
        entries = self.repository.list_entries(assignment_id)
        return sorted(entries, key=lambda entry: self.collation_key(entry.name or ""))
