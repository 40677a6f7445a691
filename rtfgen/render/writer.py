"""Document to RTF writer.

Output order is fixed::

    { \\rtf1\\ansi\\deff0 <fonttbl> <colortbl> <stylesheet>? <info>? <docfmt>* <section>+ }

Sections are separated by ``\\sect``; no separator follows the last one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional

from ..errors import RtfWriteError
from ..models.content import (
    Cell,
    FieldRun,
    Footnote,
    Formatted,
    Hyperlink,
    Paragraph,
    PictureRun,
    PictureType,
    PlainText,
    Row,
    RunSequence,
    Special,
    TabKind,
    TextParagraph,
    TextRun,
)
from ..models.document import Document, DocumentInfo, SectionFormat
from ..models.header import DEFAULT_FONT_NAME, ColorEntry, FontEntry, HeaderTables, StyleEntry
from .escape import escape

LOGGER = logging.getLogger(__name__)

PREAMBLE = "{\\rtf1\\ansi\\deff0"
ROW_START = "{\\trowd\\trautofit1\\intbl\n"
BULLET_FONT = 1
BULLET = "{\\pntext\\bullet\\tab}{\\*\\pn\\pnlvlblt\\pnf%d\\pnindent0{\\pntxtb\\bullet}}\\fi-200\\li200" % BULLET_FONT
PICTURE_BLIPS = {
    PictureType.JPG: "\\jpegblip",
    PictureType.PNG: "\\pngblip",
}


def _control(word: str, value: Optional[int] = None) -> str:
    return "\\" + word + ("" if value is None else str(value))


# Header tables


def _font_info(font: FontEntry) -> str:
    pitch = "" if font.pitch is None else _control("fprq", font.pitch.value)
    return "{\\f%d\\f%s\\fcharset%d%s %s;}" % (
        font.index,
        font.family.value,
        font.charset.value,
        pitch,
        escape(font.name),
    )


def _color_def(color: Optional[ColorEntry]) -> str:
    if color is None:
        return ";"
    return "\\red%d\\green%d\\blue%d;" % (color.red, color.green, color.blue)


def _style_def(style: StyleEntry) -> str:
    return "{\\s%d %s;}" % (style.id, escape(style.name))


def font_table(headers: HeaderTables) -> str:
    if not headers.fonts:
        return "\n{\\fonttbl{\\f0 %s;}}" % DEFAULT_FONT_NAME
    return "\n{\\fonttbl" + "".join(_font_info(font) for font in headers.fonts) + "}"


def color_table(headers: HeaderTables) -> str:
    slots = headers.color_slots()
    if not slots:
        return "\n{\\colortbl;}"
    return "\n{\\colortbl" + "".join(_color_def(slot) for slot in slots) + "}"


def style_sheet(headers: HeaderTables) -> str:
    if not headers.styles:
        return ""
    return "\n{\\stylesheet" + "".join(_style_def(style) for style in headers.styles) + "}"


def info_group(info: DocumentInfo) -> str:
    parts = ["{\\info"]
    for name, value in info.text_entries():
        parts.append("{\\%s %s}" % (name, escape(value)))
    if info.created is not None:
        created = info.created
        parts.append(
            "{\\creatim \\yr%d \\mo%d \\dy%d \\hr%d \\min%d \\sec%d}"
            % (created.year, created.month, created.day, created.hour, created.minute, created.second)
        )
    parts.append("}\n")
    return "".join(parts)


# Inline runs


def _write_run(out: List[str], run: TextRun) -> None:
    if isinstance(run, PlainText):
        out.append(escape(run.text))
    elif isinstance(run, Formatted):
        out.append("{" + _control(run.style.value, run.value) + " ")
        _write_run(out, run.child)
        out.append("}")
    elif isinstance(run, RunSequence):
        for child in run.runs:
            _write_run(out, child)
    elif isinstance(run, Special):
        out.append(_control(run.char.value) + "\n")
    elif isinstance(run, FieldRun):
        out.append("{\\field" + "".join(_control(mod.value) for mod in run.modifiers))
        out.append("{\\*\\fldinst ")
        _write_text_paragraph(out, run.instructions, with_ending_par=False)
        out.append("}{\\fldrslt ")
        if run.result is not None:
            _write_text_paragraph(out, run.result, with_ending_par=False)
        out.append("}}")
    elif isinstance(run, Hyperlink):
        out.append('{\\field{\\*\\fldinst{HYPERLINK "%s"}}{\\fldrslt{\\ul ' % escape(run.url))
        _write_text_paragraph(out, run.text, with_ending_par=False)
        out.append("}}}")
    elif isinstance(run, PictureRun):
        _write_picture(out, run)
    elif isinstance(run, Footnote):
        out.append("\\chftn{\\footnote{\\up6\\chftn }")
        for paragraph in run.paragraphs:
            _write_paragraph(out, paragraph, with_ending_par=False)
        out.append("}\n")
    else:
        raise TypeError(f"Unsupported run: {type(run).__name__}")


def _write_picture(out: List[str], picture: PictureRun) -> None:
    out.append("{\\pict" + PICTURE_BLIPS[picture.picture_type])
    if picture.width is not None:
        out.append(_control("picwgoal", picture.width))
    if picture.height is not None:
        out.append(_control("pichgoal", picture.height))
    if picture.scale_x is not None:
        out.append(_control("picscalex", picture.scale_x))
    if picture.scale_y is not None:
        out.append(_control("picscaley", picture.scale_y))
    out.append("\n")
    out.append(picture.hex_data)
    out.append("}")


# Paragraphs


def _write_text_paragraph(out: List[str], paragraph: TextParagraph, with_ending_par: bool) -> None:
    out.append("{")
    if not paragraph.inherit:
        out.append("\\pard\n")
    if paragraph.style is not None:
        out.append(_control("s", paragraph.style) + "\n")
    if paragraph.bullet:
        out.append(BULLET + "\n")
    for border in paragraph.borders:
        out.append(_control("brdr" + border.side.value) + _control(border.style.value) + "\n")
    for fmt in paragraph.formats:
        out.append(_control(fmt.word, fmt.value) + "\n")
    for tab in paragraph.tabs:
        if tab.tab_kind is not TabKind.LEFT:
            out.append(_control(tab.tab_kind.value))
        if tab.lead is not None:
            out.append(_control(tab.lead.value))
        out.append(_control("tx", tab.position) + "\n")
    for run in paragraph.runs:
        _write_run(out, run)
    if with_ending_par:
        out.append("\\par")
    out.append("}\n")


def _row_definition(row: Row) -> str:
    parts = []
    if row.right_to_left:
        parts.append(_control("taprtl"))
    if row.cell_space is not None:
        parts.append(_control("trgaph", row.cell_space))
    if row.height is not None:
        parts.append(_control("trrh", row.height))
    for side in row.cell_borders:
        parts.append(_control("clbrdr" + side.value) + "\\brdrs")
    return "".join(parts)


def _cell_definition(cell: Cell) -> str:
    parts = []
    if cell.width is not None:
        parts.append("\\clftsWidth3" + _control("clwWidth", cell.width))
    for side in cell.borders:
        parts.append(_control("clbrdr" + side.value) + "\\brdrs")
    parts.append(_control("clcbpat", cell.background_color))
    return "".join(parts)


def _write_row(out: List[str], row: Row) -> None:
    out.append(ROW_START)
    row_definition = _row_definition(row)
    for column, cell in enumerate(row.cells, start=1):
        out.append(row_definition + _cell_definition(cell) + _control("cellx", column) + "\n")
    for cell in row.cells:
        _write_text_paragraph(out, cell.paragraph, with_ending_par=False)
        out.append("\\cell\n")
    out.append("\\row}\n")


def _write_paragraph(out: List[str], paragraph: Paragraph, with_ending_par: bool = True) -> None:
    if isinstance(paragraph, TextParagraph):
        _write_text_paragraph(out, paragraph, with_ending_par)
    elif isinstance(paragraph, Row):
        _write_row(out, paragraph)
    else:
        raise TypeError(f"Unsupported paragraph: {type(paragraph).__name__}")


def render_run(run: TextRun) -> str:
    """Return the RTF of a single inline run."""
    out: List[str] = []
    _write_run(out, run)
    return "".join(out)


def render_paragraph(paragraph: Paragraph, with_ending_par: bool = True) -> str:
    """Return the RTF of a paragraph or table row."""
    out: List[str] = []
    _write_paragraph(out, paragraph, with_ending_par)
    return "".join(out)


def render_section_format(formatting: SectionFormat) -> str:
    parts = [_control(control.word, control.value) for control in formatting.controls]
    for block in formatting.headers_footers:
        parts.append("{" + _control(block.placement.value) + render_paragraph(block.paragraph) + "}")
    parts.append("\n")
    return "".join(parts)


# Writer


def close_sink(sink: Any) -> None:
    """Call ``sink.close()`` if it has one; close errors become :class:`RtfWriteError`."""
    close = getattr(sink, "close", None)
    if not callable(close):
        return
    try:
        close()
    except OSError as err:
        raise RtfWriteError(f"Failed to close RTF output: {err}") from err


class RtfWriter:
    """Serializes one :class:`Document` into RTF."""

    def __init__(self, document: Document) -> None:
        self.document = document

    def iter_chunks(self) -> Iterator[str]:
        """Yield the document in output order."""
        document = self.document
        yield PREAMBLE
        yield font_table(document.headers)
        yield color_table(document.headers)
        yield style_sheet(document.headers)
        yield "\n"
        if document.info is not None and not document.info.is_empty():
            yield info_group(document.info)
        if document.formats:
            yield "".join(_control(fmt.word, fmt.value) for fmt in document.formats) + "\n"
        last = len(document.sections) - 1
        for index, section in enumerate(document.sections):
            if section.formatting is not None:
                yield render_section_format(section.formatting)
            for paragraph in section.paragraphs:
                yield render_paragraph(paragraph)
            if index != last:
                yield "\\sect\n"
        yield "}"

    def render(self) -> str:
        """Return the whole document as a string."""
        return "".join(self.iter_chunks())

    def write(self, sink: Any) -> None:
        """Stream the document into ``sink`` and close it afterwards.

        ``sink`` needs a ``write(str)`` method. It is closed on success and on
        failure if it has a ``close()`` method; write errors are raised as
        :class:`RtfWriteError`.
        """
        if sink is None:
            raise ValueError("Output sink is not allowed to be None")
        try:
            for chunk in self.iter_chunks():
                sink.write(chunk)
        except OSError as err:
            raise RtfWriteError(f"Failed to write RTF output: {err}") from err
        finally:
            close_sink(sink)
        LOGGER.debug("Wrote RTF document with %d section(s)", len(self.document.sections))

    def save(self, output_path: Path) -> Path:
        """Write the document to ``output_path``, creating parent directories."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            handle = output_path.open("w", encoding="cp1252", newline="")
        except OSError as err:
            raise RtfWriteError(f"Cannot open {output_path}: {err}") from err
        self.write(handle)
        return output_path


def render_document(document: Document) -> str:
    return RtfWriter(document).render()
