"""Supabase-backed session repository."""

import json
from dataclasses import dataclass

from supabase import Client

from class_responses.domain.errors import StorageError
from class_responses.domain.sessions import SessionRecord
from class_responses.services.sessions import SessionRepository

_TABLE = "response_sessions"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for response sessions."""

    client: Client

    def create_session(self, session: SessionRecord) -> None:
        """Insert a session row."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "id": session.id,
                    "created_at": session.created_at,
                    "expires_at": session.expires_at,
                    "status": session.status,
                    "responses": _encode_responses(session.responses),
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create session")

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("id, created_at, expires_at, status, responses")
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return SessionRecord(
            id=row["id"],
            created_at=int(row["created_at"]),
            expires_at=int(row["expires_at"]),
            status=row["status"],
            responses=_decode_responses(row["responses"]),
        )

    def update_responses(self, session_id: str, responses: tuple[str, ...]) -> bool:
        """Replace the responses column and report whether a row matched."""
        response = (
            self.client.table(_TABLE)
            .update({"responses": _encode_responses(responses)})
            .eq("id", session_id)
            .execute()
        )
        return bool(response.data)


def _encode_responses(responses: tuple[str, ...]) -> str:
    return json.dumps(list(responses), ensure_ascii=False)


def _decode_responses(raw: object) -> tuple[str, ...]:
    values = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(values, list):
        raise StorageError("Stored responses are not a list")
    return tuple(str(value) for value in values)
