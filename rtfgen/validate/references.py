"""Preflight check for header-table references used by the body."""

from __future__ import annotations

from typing import Iterable, List, Set

from ..models.content import (
    FieldRun,
    FormatStyle,
    Formatted,
    Footnote,
    Hyperlink,
    Paragraph,
    Row,
    RunSequence,
    TextRun,
)
from ..models.document import Document
from ..models.validation import ValidationReport, ValidationViolation
from ..render.writer import BULLET_FONT


class _ReferenceWalker:
    """Collect violations for indices missing from the header tables."""

    def __init__(self, document: Document) -> None:
        headers = document.headers
        # Font 0 is the implicit default font, color 0 is AUTO and style 0 is Normal.
        self.fonts: Set[int] = {0, *headers.font_indices()}
        self.colors: Set[int] = {0, *(color.index for color in headers.colors)}
        self.styles: Set[int] = {0, *headers.style_ids()}
        self.violations: List[ValidationViolation] = []

    def _report(self, location: str, violation_type: str, index: int, action: str) -> None:
        self.violations.append(ValidationViolation(
            location=location,
            violation_type=violation_type,
            severity="WARN",
            index=index,
            recommended_action=action,
        ))

    def _check_color(self, location: str, index: int) -> None:
        if index not in self.colors:
            self._report(location, "UNKNOWN_COLOR", index, f"Register color {index} in the color table")

    def walk_run(self, run: TextRun, location: str) -> None:
        if isinstance(run, Formatted):
            if run.style == FormatStyle.FONT and run.value not in self.fonts:
                self._report(location, "UNKNOWN_FONT", run.value, f"Register font {run.value} in the font table")
            elif run.style == FormatStyle.COLOR:
                self._check_color(location, run.value)
            self.walk_run(run.child, location)
        elif isinstance(run, RunSequence):
            for child in run.runs:
                self.walk_run(child, location)
        elif isinstance(run, FieldRun):
            self.walk_paragraph(run.instructions, f"{location}.field.instructions")
            if run.result is not None:
                self.walk_paragraph(run.result, f"{location}.field.result")
        elif isinstance(run, Hyperlink):
            self.walk_paragraph(run.text, f"{location}.hyperlink")
        elif isinstance(run, Footnote):
            self.walk_paragraphs(run.paragraphs, f"{location}.footnote")

    def walk_paragraph(self, paragraph: Paragraph, location: str) -> None:
        if isinstance(paragraph, Row):
            for number, cell in enumerate(paragraph.cells):
                cell_location = f"{location}.cell[{number}]"
                self._check_color(cell_location, cell.background_color)
                self.walk_paragraph(cell.paragraph, cell_location)
            return
        if paragraph.style is not None and paragraph.style not in self.styles:
            self._report(
                location, "UNKNOWN_STYLE", paragraph.style,
                f"Register style {paragraph.style} in the style sheet",
            )
        if paragraph.bullet and BULLET_FONT not in self.fonts:
            self._report(
                location, "UNKNOWN_FONT", BULLET_FONT,
                f"Register a symbol font at index {BULLET_FONT} for bullets",
            )
        for number, run in enumerate(paragraph.runs):
            self.walk_run(run, f"{location}.run[{number}]")

    def walk_paragraphs(self, paragraphs: Iterable[Paragraph], location: str) -> None:
        for number, paragraph in enumerate(paragraphs):
            self.walk_paragraph(paragraph, f"{location}.paragraph[{number}]")


def check_references(document: Document) -> ValidationReport:
    """Report font, color and style indices that the header tables do not declare.

    Args:
        document: Finalized document to inspect

    Returns:
        ValidationReport with one WARN violation per dangling reference
    """
    walker = _ReferenceWalker(document)
    for location, paragraph in document.iter_paragraphs():
        walker.walk_paragraph(paragraph, location)
    return ValidationReport(violations=walker.violations)
