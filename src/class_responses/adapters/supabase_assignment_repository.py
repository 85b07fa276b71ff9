"""Supabase-backed assignment entry repository."""

from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from class_responses.domain.assignments import AssignmentEntry, name_key
from class_responses.domain.errors import AlreadySubmittedError, StorageError
from class_responses.services.assignments import AssignmentRepository

_TABLE = "assignment_entries"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseAssignmentRepository(AssignmentRepository):
    """Supabase implementation for assignment entries.

    The table carries a unique index on ``(assignment_id, name_key)``, so a
    concurrent duplicate that slips past ``find_entry`` is rejected on insert.
    """

    client: Client
    page_size: int = 1000

    def find_entry(self, assignment_id: str, key: str) -> AssignmentEntry | None:
        """Return the entry for a lowercased name, if present."""
        response = (
            self.client.table(_TABLE)
            .select("assignment_id, name, response, submitted_at")
            .eq("assignment_id", assignment_id)
            .eq("name_key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_entry(response.data[0])

    def create_entry(self, entry: AssignmentEntry) -> None:
        """Insert an entry, mapping unique violations to AlreadySubmittedError."""
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "assignment_id": entry.id,
                        "name": entry.name,
                        "name_key": name_key(entry.name),
                        "response": entry.response,
                        "submitted_at": entry.submitted_at,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise AlreadySubmittedError(entry.name) from exc
            raise
        if not response.data:
            raise StorageError("Failed to create assignment entry")

    def list_entries(self, assignment_id: str) -> list[AssignmentEntry]:
        """Return all entries for an assignment in submission order.

        Reads page by page so the PostgREST row cap never truncates the list.
        """
        entries: list[AssignmentEntry] = []
        start = 0
        while True:
            response = (
                self.client.table(_TABLE)
                .select("assignment_id, name, response, submitted_at")
                .eq("assignment_id", assignment_id)
                .order("submitted_at")
                .order("name_key")
                .range(start, start + self.page_size - 1)
                .execute()
            )
            rows = response.data or []
            entries.extend(_row_to_entry(row) for row in rows)
            if len(rows) < self.page_size:
                return entries
            start += self.page_size


def _row_to_entry(row: dict[str, object]) -> AssignmentEntry:
    return AssignmentEntry(
        id=str(row["assignment_id"]),
        name=str(row.get("name") or ""),
        response=str(row.get("response") or ""),
        submitted_at=int(row["submitted_at"]),
    )
