"""Report layout and export orchestration."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol
from zoneinfo import ZoneInfo

from class_responses.domain.assignments import AssignmentEntry
from class_responses.domain.errors import InvalidInputError, NoSubmissionsError
from class_responses.domain.reports import (
    ASSIGNMENT_LAYOUT,
    SESSION_LAYOUT,
    PageBreakCheck,
    PageLayout,
    RenderResult,
    ReportArtifact,
    ReportBlock,
    Rule,
    Spacer,
    TextBlock,
    assignment_artifact_name,
    session_artifact_name,
)
from class_responses.services.assignments import AssignmentService
from class_responses.services.sessions import SessionService

logger = logging.getLogger(__name__)

SESSION_TITLE = "Responses"
ASSIGNMENT_TITLE = "Class Responses"
EMPTY_RESPONSE = "(No response)"
UNNAMED = "Unnamed"
SEPARATOR = "-" * 45
SESSION_DOWNLOAD_NAME = "session.pdf"


class ReportRenderer(Protocol):
    """Writes laid-out report blocks to a durable document."""

    def render(
        self, blocks: Sequence[ReportBlock], layout: PageLayout, output_path: Path
    ) -> RenderResult:
        """Render blocks and return only once the file is flushed in place."""


def build_session_report(responses: Sequence[str]) -> list[ReportBlock]:
    """Lay out a session's answers, one section per slot."""
    blocks: list[ReportBlock] = [
        TextBlock(SESSION_TITLE, font_size=18, align="center"),
        Spacer(),
    ]
    for index, response in enumerate(responses, start=1):
        blocks.extend(
            [
                TextBlock(f"Response {index}", font_size=14),
                Spacer(0.5),
                TextBlock(response or EMPTY_RESPONSE, font_size=12),
                Spacer(),
                TextBlock(SEPARATOR, font_size=12),
                Spacer(),
            ]
        )
    return blocks


def build_assignment_report(
    entries: Sequence[AssignmentEntry], timezone: ZoneInfo
) -> list[ReportBlock]:
    """Lay out pre-sorted submissions with dividers between entries."""
    blocks: list[ReportBlock] = [
        TextBlock(ASSIGNMENT_TITLE, font_size=20, align="center"),
        Spacer(2),
    ]
    for index, entry in enumerate(entries):
        blocks.extend(
            [
                TextBlock(entry.name or UNNAMED, font_size=14, underline=True),
                TextBlock(
                    format_submitted_at(entry.submitted_at, timezone),
                    font_size=10,
                    muted=True,
                ),
                Spacer(0.5),
                TextBlock(entry.response or "", font_size=12),
            ]
        )
        if index != len(entries) - 1:
            blocks.extend([Spacer(), Rule(), Spacer()])
        blocks.append(PageBreakCheck())
    return blocks


def format_submitted_at(submitted_at: int, timezone: ZoneInfo) -> str:
    """Format epoch milliseconds like 10/17/2026, 3:04:05 PM."""
    moment = datetime.fromtimestamp(submitted_at / 1000, tz=timezone)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


@dataclass
class ReportService:
    """Builds export artifacts for sessions and assignments."""

    session_service: SessionService
    assignment_service: AssignmentService
    renderer: ReportRenderer
    report_dir: Path
    timezone: ZoneInfo

    def export_session(self, session_id: str) -> ReportArtifact:
        """Render a session report; raises NotFoundError for unknown ids."""
        session = self.session_service.get_session(session_id)
        output_path = self._artifact_path(session_artifact_name(session.id))
        result = self.renderer.render(
            build_session_report(session.responses), SESSION_LAYOUT, output_path
        )
        logger.info(
            "Wrote session report",
            extra={"session_id": session.id, "pages": result.page_count},
        )
        return ReportArtifact(
            path=output_path,
            download_name=SESSION_DOWNLOAD_NAME,
            page_count=result.page_count,
            forced_breaks=result.forced_breaks,
        )

    def export_assignment(self, assignment_id: str) -> ReportArtifact:
        """Render the combined report; raises NoSubmissionsError when empty."""
        entries = self.assignment_service.list_submissions(assignment_id)
        if not entries:
            raise NoSubmissionsError(assignment_id)
        output_path = self._artifact_path(assignment_artifact_name(assignment_id))
        result = self.renderer.render(
            build_assignment_report(entries, self.timezone),
            ASSIGNMENT_LAYOUT,
            output_path,
        )
        logger.info(
            "Wrote class report",
            extra={
                "assignment_id": assignment_id,
                "entries": len(entries),
                "pages": result.page_count,
            },
        )
        return ReportArtifact(
            path=output_path,
            download_name=output_path.name,
            page_count=result.page_count,
            forced_breaks=result.forced_breaks,
        )

    def _artifact_path(self, name: str) -> Path:
        if not name or Path(name).name != name or name.startswith("."):
            raise InvalidInputError(f"Unsafe report name: {name!r}")
        return self.report_dir / f"{name}.pdf"
