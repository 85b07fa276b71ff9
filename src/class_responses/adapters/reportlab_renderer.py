"""ReportLab-backed PDF renderer for response reports."""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from class_responses.domain.reports import (
    PageBreakCheck,
    PageLayout,
    RenderResult,
    ReportBlock,
    Rule,
    Spacer,
    TextBlock,
)
from class_responses.services.reports import ReportRenderer

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 12.0
UNDERLINE_OFFSET = 2.0


class Paginator:
    """Tracks the vertical position on a canvas and starts pages as needed.

    ``y`` is measured from the top of the page, so thresholds read the same
    way as the layout constants. Text that would cross the bottom margin
    starts a new page on its own; ``break_if_past`` is the explicit break
    used between entries.
    """

    def __init__(self, pdf: canvas.Canvas, layout: PageLayout) -> None:
        self.pdf = pdf
        self.layout = layout
        self.y = layout.margin
        self.page_count = 1
        self.forced_breaks = 0
        self._font_size = DEFAULT_FONT_SIZE

    @property
    def line_height(self) -> float:
        return self._font_size * self.layout.line_spacing

    def add_text(self, block: TextBlock) -> None:
        """Append wrapped text, breaking onto new pages on overflow."""
        self._font_size = block.font_size
        self.pdf.setFont(FONT_NAME, block.font_size)
        self.pdf.setFillColor(colors.grey if block.muted else colors.black)
        for line in self._wrap(block.text, block.font_size):
            if self.y + self.line_height > self.layout.content_bottom:
                self.new_page()
                self.pdf.setFont(FONT_NAME, block.font_size)
                self.pdf.setFillColor(colors.grey if block.muted else colors.black)
            self._draw_line(line, block)
            self.y += self.line_height
        self.pdf.setFillColor(colors.black)

    def move_down(self, lines: float = 1.0) -> None:
        self.y += lines * self.line_height

    def rule(self) -> None:
        """Draw a divider from the left margin to the layout's rule end."""
        baseline = self.layout.page_height - self.y
        self.pdf.setStrokeColor(colors.black)
        self.pdf.line(self.layout.margin, baseline, self.layout.rule_end_x, baseline)

    def new_page(self) -> None:
        self.pdf.showPage()
        self.page_count += 1
        self.y = self.layout.margin

    def break_if_past(self, threshold: float) -> bool:
        """Start a new page when the position has passed ``threshold``."""
        if self.y <= threshold:
            return False
        self.new_page()
        self.forced_breaks += 1
        return True

    def apply(self, block: ReportBlock) -> None:
        if isinstance(block, TextBlock):
            self.add_text(block)
        elif isinstance(block, Spacer):
            self.move_down(block.lines)
        elif isinstance(block, Rule):
            self.rule()
        elif isinstance(block, PageBreakCheck):
            self.break_if_past(self.layout.break_threshold)
        else:
            raise TypeError(f"Unsupported report block: {block!r}")

    def _wrap(self, text: str, font_size: float) -> list[str]:
        lines: list[str] = []
        for paragraph in text.splitlines() or [""]:
            wrapped = simpleSplit(
                paragraph, FONT_NAME, font_size, self.layout.content_width
            )
            for line in wrapped or [""]:
                lines.extend(self._break_long_line(line, font_size))
        return lines

    def _break_long_line(self, line: str, font_size: float) -> list[str]:
        """Split a line wider than the content area character by character."""
        width = self.layout.content_width
        if stringWidth(line, FONT_NAME, font_size) <= width:
            return [line]
        pieces: list[str] = []
        current = ""
        for char in line:
            candidate = current + char
            if current and stringWidth(candidate, FONT_NAME, font_size) > width:
                pieces.append(current)
                current = char
            else:
                current = candidate
        pieces.append(current)
        return pieces

    def _draw_line(self, line: str, block: TextBlock) -> None:
        width = self.pdf.stringWidth(line, FONT_NAME, block.font_size)
        x = self.layout.margin
        if block.align == "center":
            x += (self.layout.content_width - width) / 2
        baseline = self.layout.page_height - (self.y + block.font_size)
        self.pdf.drawString(x, baseline, line)
        if block.underline and line:
            underline_y = baseline - UNDERLINE_OFFSET
            self.pdf.setStrokeColor(colors.black)
            self.pdf.line(x, underline_y, x + width, underline_y)


@dataclass
class ReportLabRenderer(ReportRenderer):
    """Renders report blocks to PDF through a staged, atomically renamed file."""

    def render(
        self, blocks: Sequence[ReportBlock], layout: PageLayout, output_path: Path
    ) -> RenderResult:
        """Write the document and return once it is flushed to its final path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        staging_path = output_path.with_name(
            f".{output_path.name}.{uuid4().hex}.tmp"
        )
        try:
            with staging_path.open("wb") as handle:
                pdf = canvas.Canvas(
                    handle, pagesize=(layout.page_width, layout.page_height)
                )
                paginator = Paginator(pdf, layout)
                for block in blocks:
                    paginator.apply(block)
                pdf.save()
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(staging_path, output_path)
        except BaseException:
            staging_path.unlink(missing_ok=True)
            raise
        logger.debug(
            "Rendered PDF",
            extra={"path": str(output_path), "pages": paginator.page_count},
        )
        return RenderResult(
            page_count=paginator.page_count, forced_breaks=paginator.forced_breaks
        )
