"""Pydantic models for request and response payloads."""

from pydantic import BaseModel, Field

from class_responses.domain.sessions import RESPONSE_SLOTS, SessionRecord


class SaveResponsesRequest(BaseModel):
    """Full replacement of a session's answer set."""

    responses: list[str] = Field(min_length=RESPONSE_SLOTS, max_length=RESPONSE_SLOTS)


class SubmitResponseRequest(BaseModel):
    """A respondent's assignment submission; emptiness is checked by the service."""

    name: str | None = None
    response: str | None = None


class SessionPayload(BaseModel):
    """Session state as returned to clients."""

    id: str
    createdAt: int  # noqa: N815
    expiresAt: int  # noqa: N815
    status: str
    responses: list[str]

    @classmethod
    def from_record(cls, session: SessionRecord) -> "SessionPayload":
        return cls(
            id=session.id,
            createdAt=session.created_at,
            expiresAt=session.expires_at,
            status=session.status,
            responses=list(session.responses),
        )
