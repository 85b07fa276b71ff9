"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from class_responses.adapters.reportlab_renderer import ReportLabRenderer
from class_responses.config import Settings
from class_responses.containers import AppContainer
from class_responses.domain.assignments import AssignmentEntry, name_key
from class_responses.domain.errors import AlreadySubmittedError
from class_responses.domain.sessions import SessionRecord
from class_responses.services.assignments import (
    AssignmentRepository,
    AssignmentService,
)
from class_responses.services.reports import ReportService
from class_responses.services.sessions import SessionRepository, SessionService


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)

    def create_session(self, session: SessionRecord) -> None:
        self.sessions[session.id] = session

    def get_session(self, session_id: str) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def update_responses(self, session_id: str, responses: tuple[str, ...]) -> bool:
        session = self.sessions.get(session_id)
        if session is None:
            return False
        self.sessions[session_id] = SessionRecord(
            id=session.id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            status=session.status,
            responses=responses,
        )
        return True


@dataclass
class InMemoryAssignmentRepository(AssignmentRepository):
    """In-memory assignment repository enforcing the unique name index."""

    entries: list[AssignmentEntry] = field(default_factory=list)

    def find_entry(self, assignment_id: str, key: str) -> AssignmentEntry | None:
        for entry in self.entries:
            if entry.id == assignment_id and name_key(entry.name) == key:
                return entry
        return None

    def create_entry(self, entry: AssignmentEntry) -> None:
        key = name_key(entry.name)
        if any(
            existing.id == entry.id and name_key(existing.name) == key
            for existing in self.entries
        ):
            raise AlreadySubmittedError(entry.name)
        self.entries.append(entry)

    def list_entries(self, assignment_id: str) -> list[AssignmentEntry]:
        return [entry for entry in self.entries if entry.id == assignment_id]


@dataclass
class StepClock:
    """Deterministic clock advancing one second per call."""

    now: int = 1_700_000_000_000
    step: int = 1_000

    def __call__(self) -> int:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        report_dir=str(tmp_path / "pdfs"),
    )


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def session_service(clock: StepClock) -> SessionService:
    return SessionService(InMemorySessionRepository(), clock=clock)


@pytest.fixture
def assignment_service(clock: StepClock) -> AssignmentService:
    return AssignmentService(InMemoryAssignmentRepository(), clock=clock)


@pytest.fixture
def report_service(
    settings: Settings,
    session_service: SessionService,
    assignment_service: AssignmentService,
) -> ReportService:
    return ReportService(
        session_service=session_service,
        assignment_service=assignment_service,
        renderer=ReportLabRenderer(),
        report_dir=Path(settings.report_dir),
        timezone=ZoneInfo(settings.report_timezone),
    )


@pytest.fixture
def container(
    settings: Settings,
    session_service: SessionService,
    assignment_service: AssignmentService,
    report_service: ReportService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        session_service=session_service,
        assignment_service=assignment_service,
        report_service=report_service,
    )
