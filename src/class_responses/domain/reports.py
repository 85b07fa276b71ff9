"""Domain models for report layout and rendered artifacts."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True)
class PageLayout:
    """Page geometry in points, measured from the top-left corner."""

    page_width: float = 612.0
    page_height: float = 792.0
    margin: float = 72.0
    rule_end_x: float = 550.0
    break_threshold: float = 700.0
    line_spacing: float = 1.2

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_bottom(self) -> float:
        return self.page_height - self.margin


SESSION_LAYOUT = PageLayout()
ASSIGNMENT_LAYOUT = PageLayout(margin=50.0)


@dataclass(frozen=True)
class TextBlock:
    """A run of text, wrapped to the content width."""

    text: str
    font_size: float
    align: Literal["left", "center"] = "left"
    muted: bool = False
    underline: bool = False


@dataclass(frozen=True)
class Spacer:
    """Vertical gap in multiples of the current line height."""

    lines: float = 1.0


@dataclass(frozen=True)
class Rule:
    """Horizontal divider drawn at the current position."""


@dataclass(frozen=True)
class PageBreakCheck:
    """Start a new page when the position has passed the layout threshold."""


ReportBlock = TextBlock | Spacer | Rule | PageBreakCheck


@dataclass(frozen=True)
class RenderResult:
    page_count: int
    forced_breaks: int


@dataclass(frozen=True)
class ReportArtifact:
    """A fully written report document that is safe to read back."""

    path: Path
    download_name: str
    page_count: int
    forced_breaks: int = 0


def session_artifact_name(session_id: str) -> str:
    return session_id


def assignment_artifact_name(assignment_id: str) -> str:
    return f"class-{assignment_id}"
