"""Single-respondent session lifecycle."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Protocol
from uuid import uuid4

from class_responses.domain.errors import InvalidInputError, NotFoundError
from class_responses.domain.sessions import (
    DRAFT_STATUS,
    RESPONSE_SLOTS,
    SessionRecord,
    empty_responses,
)
from class_responses.services.clock import now_ms

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=30)


class SessionRepository(Protocol):
    """Persistence interface for response sessions."""

    def create_session(self, session: SessionRecord) -> None:
        """Insert a new session row."""

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""

    def update_responses(self, session_id: str, responses: tuple[str, ...]) -> bool:
        """Replace the stored answer set and return whether a row matched."""


@dataclass
class SessionService:
    """Application service for creating and filling in sessions."""

    repository: SessionRepository
    ttl: timedelta = DEFAULT_SESSION_TTL
    clock: Callable[[], int] = field(default=now_ms)

    def create_session(self) -> str:
        """Create a draft session with an empty answer set and return its id."""
        created_at = self.clock()
        session = SessionRecord(
            id=str(uuid4()),
            created_at=created_at,
            expires_at=created_at + int(self.ttl.total_seconds() * 1000),
            status=DRAFT_STATUS,
            responses=empty_responses(),
        )
        self.repository.create_session(session)
        logger.info("Created session", extra={"session_id": session.id})
        return session.id

    def get_session(self, session_id: str) -> SessionRecord:
        """Return a session or raise NotFoundError."""
        session = self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError(session_id)
        return session

    def save_responses(self, session_id: str, responses: Sequence[str]) -> None:
        """Replace the whole answer set of a session.

        Saving to an unknown id is accepted without error, matching the
        permissive behavior clients rely on; it is only logged.
        """
        if isinstance(responses, str) or len(responses) != RESPONSE_SLOTS:
            raise InvalidInputError(f"Expected {RESPONSE_SLOTS} responses")
        if not all(isinstance(value, str) for value in responses):
            raise InvalidInputError("Responses must be strings")
        updated = self.repository.update_responses(session_id, tuple(responses))
        if not updated:
            logger.warning(
                "Saved responses for unknown session",
                extra={"session_id": session_id},
            )
