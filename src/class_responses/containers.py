"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from class_responses.adapters.reportlab_renderer import ReportLabRenderer
from class_responses.adapters.supabase_assignment_repository import (
    SupabaseAssignmentRepository,
)
from class_responses.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from class_responses.config import Settings
from class_responses.services.assignments import AssignmentService
from class_responses.services.reports import ReportService
from class_responses.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    assignment_service: AssignmentService
    report_service: ReportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_service = SessionService(
        SupabaseSessionRepository(supabase_client),
        ttl=timedelta(days=resolved_settings.session_ttl_days),
    )
    assignment_service = AssignmentService(
        SupabaseAssignmentRepository(supabase_client)
    )
    report_service = ReportService(
        session_service=session_service,
        assignment_service=assignment_service,
        renderer=ReportLabRenderer(),
        report_dir=Path(resolved_settings.report_dir),
        timezone=ZoneInfo(resolved_settings.report_timezone),
    )
    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        assignment_service=assignment_service,
        report_service=report_service,
    )
