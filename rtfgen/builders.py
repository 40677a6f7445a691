"""Convenience constructors and the fluent document builder.

Typical use::

    from rtfgen.builders import Rtf, bold, p

    Rtf.rtf().p("Hello ", bold("World")).save(Path("hello.rtf"))

Every helper returns an immutable model value. Only :class:`Rtf` carries
mutable state, and it produces a frozen :class:`Document` on ``build()``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from .errors import RtfConfigurationError
from .models.content import (
    RUN_TYPES,
    Cell,
    FieldModifier,
    FieldRun,
    Footnote,
    Formatted,
    FormatStyle,
    Hyperlink,
    Paragraph,
    PlainText,
    Row,
    RunSequence,
    Special,
    SpecialChar,
    TextParagraph,
    TextRun,
)
from .models.document import (
    Document,
    DocumentFormat,
    DocumentInfo,
    HeaderFooter,
    HeaderFooterPlacement,
    Section,
    SectionControl,
    SectionFormat,
)
from .models.header import (
    CharSet,
    ColorEntry,
    FontEntry,
    FontFamily,
    HeaderEntry,
    HeaderTablesBuilder,
    Pitch,
    StyleEntry,
)
from .render.picture import load_picture as picture
from .render.writer import RtfWriter, close_sink
from .units import Unit, to_twips

LOGGER = logging.getLogger(__name__)

FIELD_RESULT_PLACEHOLDER = "Refresh 'F9'"


# Text runs


def _is_paragraph(value: Any) -> bool:
    return isinstance(value, (TextParagraph, Row))


def text(*parts: Any, join_with_space: bool = False) -> TextRun:
    """Turn strings, numbers and runs into one run.

    ``None`` parts are skipped (and get no separating space). Paragraphs are
    rejected because they have no inline representation.
    """
    runs: List[TextRun] = []
    previous = None
    for position, part in enumerate(parts):
        if part is None:
            previous = None
            continue
        if _is_paragraph(part):
            raise RtfConfigurationError("Paragraphs are not allowed inside text(); use a paragraph list instead")
        if join_with_space and position > 0 and previous is not None:
            runs.append(PlainText(text=" "))
        runs.append(part if isinstance(part, RUN_TYPES) else PlainText(text=str(part)))
        previous = part
    if not runs:
        return PlainText(text="")
    if len(runs) == 1:
        return runs[0]
    return RunSequence(runs=tuple(runs))


def _as_run(value: Any) -> TextRun:
    if isinstance(value, RUN_TYPES):
        return value
    return text(value)


def _formatted(style: FormatStyle, content: Any, value: Optional[int] = None) -> Formatted:
    return Formatted(style=style, value=value, child=_as_run(content))


def bold(content: Any) -> Formatted:
    return _formatted(FormatStyle.BOLD, content)


def italic(content: Any) -> Formatted:
    return _formatted(FormatStyle.ITALIC, content)


def underline(content: Any) -> Formatted:
    return _formatted(FormatStyle.UNDERLINE, content)


def dotted_underline(content: Any) -> Formatted:
    return _formatted(FormatStyle.DOTTED_UNDERLINE, content)


def double_underline(content: Any) -> Formatted:
    return _formatted(FormatStyle.DOUBLE_UNDERLINE, content)


def word_underline(content: Any) -> Formatted:
    return _formatted(FormatStyle.WORD_UNDERLINE, content)


def subscript(content: Any) -> Formatted:
    return _formatted(FormatStyle.SUBSCRIPT, content)


def superscript(content: Any) -> Formatted:
    return _formatted(FormatStyle.SUPERSCRIPT, content)


def strikethrough(content: Any) -> Formatted:
    return _formatted(FormatStyle.STRIKETHROUGH, content)


def shadow(content: Any) -> Formatted:
    return _formatted(FormatStyle.SHADOW, content)


def small_capitals(content: Any) -> Formatted:
    return _formatted(FormatStyle.SMALL_CAPS, content)


def revised(content: Any) -> Formatted:
    return _formatted(FormatStyle.REVISED, content)


def font(index: int, content: Any) -> Formatted:
    """Set ``content`` in the font registered at ``index``."""
    return _formatted(FormatStyle.FONT, content, index)


def font_size(size: int, content: Any) -> Formatted:
    """Set ``content`` in ``size`` half points (24 is 12pt)."""
    return _formatted(FormatStyle.FONT_SIZE, content, size)


def color(index: int, content: Any) -> Formatted:
    return _formatted(FormatStyle.COLOR, content, index)


def _special(char: SpecialChar) -> Special:
    return Special(char=char)


def current_date() -> Special:
    return _special(SpecialChar.CURRENT_DATE)


def current_date_long() -> Special:
    return _special(SpecialChar.CURRENT_DATE_LONG)


def current_date_abbreviated() -> Special:
    return _special(SpecialChar.CURRENT_DATE_ABBREVIATED)


def current_time() -> Special:
    return _special(SpecialChar.CURRENT_TIME)


def current_page_number() -> Special:
    return _special(SpecialChar.PAGE_NUMBER)


def current_section_number() -> Special:
    return _special(SpecialChar.SECTION_NUMBER)


def page_break() -> Special:
    return _special(SpecialChar.PAGE_BREAK)


def column_break() -> Special:
    return _special(SpecialChar.COLUMN_BREAK)


def line_break() -> Special:
    return _special(SpecialChar.LINE_BREAK)


def soft_page_break() -> Special:
    return _special(SpecialChar.SOFT_PAGE_BREAK)


def soft_column_break() -> Special:
    return _special(SpecialChar.SOFT_COLUMN_BREAK)


def soft_line_break() -> Special:
    return _special(SpecialChar.SOFT_LINE_BREAK)


def tab() -> Special:
    return _special(SpecialChar.TAB)


def em_dash() -> Special:
    return _special(SpecialChar.EM_DASH)


def en_dash() -> Special:
    return _special(SpecialChar.EN_DASH)


def bullet() -> Special:
    return _special(SpecialChar.BULLET)


def non_breaking_space() -> Special:
    return _special(SpecialChar.NON_BREAKING_SPACE)


def quote(content: Any) -> RunSequence:
    """Wrap ``content`` in single quotation marks."""
    return RunSequence(runs=(
        _special(SpecialChar.LEFT_QUOTE), _as_run(content), _special(SpecialChar.RIGHT_QUOTE),
    ))


def double_quote(content: Any) -> RunSequence:
    return RunSequence(runs=(
        _special(SpecialChar.LEFT_DOUBLE_QUOTE), _as_run(content), _special(SpecialChar.RIGHT_DOUBLE_QUOTE),
    ))


# Paragraphs and tables


def p(*texts: Any, style: Optional[StyleEntry] = None) -> TextParagraph:
    """A paragraph that continues the formatting of the previous one."""
    paragraph = TextParagraph(runs=tuple(_as_run(part) for part in texts if part is not None))
    if style is not None:
        paragraph = paragraph.with_style(style.id)
    return paragraph


def pard(*texts: Any, style: Optional[StyleEntry] = None) -> TextParagraph:
    """A paragraph that resets paragraph formatting with ``\\pard``."""
    return p(*texts, style=style).model_copy(update={"inherit": False})


def ul(*texts: Any, style: Optional[StyleEntry] = None) -> TextParagraph:
    """A bullet list item. The bullet is drawn with font 1, usually a symbol font."""
    return pard(*texts, style=style).as_bullet()


def _as_paragraph(value: Any) -> TextParagraph:
    if isinstance(value, TextParagraph):
        return value
    return p(value)


def cell(content: Any, width: Optional[float] = None, unit: Unit = Unit.TWIPS) -> Cell:
    result = Cell(paragraph=_as_paragraph(content))
    if width is not None:
        result = result.with_width(width, unit)
    return result


def row(*cells: Any) -> Row:
    """A table row; plain values and paragraphs become cells."""
    return Row(cells=tuple(entry if isinstance(entry, Cell) else cell(entry) for entry in cells))


# Fields


def field(
    instructions: Any,
    result: Any = FIELD_RESULT_PLACEHOLDER,
    modifiers: Iterable[FieldModifier] = (),
) -> FieldRun:
    """A field; ``result`` is the text shown until the reader updates it."""
    return FieldRun(
        instructions=_as_paragraph(instructions),
        result=None if result is None else _as_paragraph(result),
        modifiers=tuple(modifiers),
    )


def time_field(pattern: str) -> FieldRun:
    return field(f'time \\@ "{pattern}"')


def page_number_field() -> FieldRun:
    return field("PAGE")


def section_pages_field() -> FieldRun:
    return field("SECTIONPAGES")


def author_field() -> FieldRun:
    return field("AUTHOR")


def table_of_contents_field() -> FieldRun:
    return field('TOC \\f \\h \\u \\o "1-5" ')


def hyperlink(url: str, content: Any) -> Hyperlink:
    return Hyperlink(url=url, text=_as_paragraph(content))


def footnote(*paragraphs: Any) -> Footnote:
    return Footnote(paragraphs=tuple(entry if _is_paragraph(entry) else p(entry) for entry in paragraphs))


# Header entries


def font_entry(
    name: str,
    index: int = 0,
    family: FontFamily = FontFamily.NIL,
    charset: CharSet = CharSet.ANSI,
    pitch: Optional[Pitch] = None,
) -> FontEntry:
    return FontEntry(index=index, name=name, family=family, charset=charset, pitch=pitch)


def color_entry(red: int, green: int, blue: int, index: int = 1) -> ColorEntry:
    return ColorEntry(index=index, red=red, green=green, blue=blue)


# Document formatting


def _docfmt(word: str, value: Optional[int] = None) -> DocumentFormat:
    return DocumentFormat(word=word, value=value)


def default_tab(width: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("deftab", to_twips(width, unit))


def hyphenation_hot_zone(width: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("hyphhotz", to_twips(width, unit))


def page_layout_view() -> DocumentFormat:
    return _docfmt("viewkind", 1)


def footnotes_only() -> DocumentFormat:
    return _docfmt("fet", 0)


def endnotes_only() -> DocumentFormat:
    return _docfmt("fet", 1)


def footnotes_and_endnotes() -> DocumentFormat:
    return _docfmt("fet", 2)


def footnote_numbering_arabic() -> DocumentFormat:
    return _docfmt("ftnnar")


def footnote_numbering_upper_alphabetic() -> DocumentFormat:
    return _docfmt("ftnnauc")


def footnote_numbering_upper_roman() -> DocumentFormat:
    return _docfmt("ftnnruc")


def paper_width(width: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("paperw", to_twips(width, unit))


def paper_height(height: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("paperh", to_twips(height, unit))


def paper(width: float, height: float, unit: Unit = Unit.TWIPS) -> Tuple[DocumentFormat, DocumentFormat]:
    return paper_width(width, unit), paper_height(height, unit)


# ISO 216 A series, portrait, in centimeters.
A0 = paper(84.1, 118.9, Unit.CM)
A1 = paper(59.4, 84.1, Unit.CM)
A2 = paper(42.0, 59.4, Unit.CM)
A3 = paper(29.7, 42.0, Unit.CM)
A4 = paper(21.0, 29.7, Unit.CM)
A5 = paper(14.8, 21.0, Unit.CM)
A6 = paper(10.5, 14.8, Unit.CM)
A7 = paper(7.4, 10.5, Unit.CM)
A8 = paper(5.2, 7.4, Unit.CM)


def left_margin(margin: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("margl", to_twips(margin, unit))


def right_margin(margin: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("margr", to_twips(margin, unit))


def top_margin(margin: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("margt", to_twips(margin, unit))


def bottom_margin(margin: float, unit: Unit = Unit.TWIPS) -> DocumentFormat:
    return _docfmt("margb", to_twips(margin, unit))


def facing_pages() -> DocumentFormat:
    return _docfmt("facingp")


def switch_margins() -> DocumentFormat:
    return _docfmt("margmirror")


def landscape() -> DocumentFormat:
    return _docfmt("landscape")


def widow_orphan_control() -> DocumentFormat:
    return _docfmt("widowctrl")


def revision_protected() -> DocumentFormat:
    return _docfmt("revprot")


def revision_marking() -> DocumentFormat:
    return _docfmt("revisions")


# Section formatting


def _section(word: str, value: Optional[int] = None) -> SectionFormat:
    return SectionFormat(controls=(SectionControl(word=word, value=value),))


def section_format(*formats: SectionFormat) -> SectionFormat:
    """Combine several section formats, keeping their order."""
    result = SectionFormat()
    for entry in formats:
        result = result.merge(entry)
    return result


def section_defaults() -> SectionFormat:
    return _section("sectd")


def endnotes_included() -> SectionFormat:
    return _section("endnhere")


def no_break() -> SectionFormat:
    return _section("sbknone")


def break_starts_new_column() -> SectionFormat:
    return _section("sbkcol")


def break_starts_new_page() -> SectionFormat:
    return _section("sbkpage")


def break_starts_new_even_page() -> SectionFormat:
    return _section("sbkeven")


def break_starts_new_odd_page() -> SectionFormat:
    return _section("sbkodd")


def columns(count: int) -> SectionFormat:
    if count <= 0:
        raise RtfConfigurationError(f"Number of columns can't be <= 0 but is {count}")
    return _section("cols", count)


def space_between_columns(space: float, unit: Unit = Unit.TWIPS) -> SectionFormat:
    return _section("colsx", to_twips(space, unit))


def line_between_columns() -> SectionFormat:
    return _section("linebetcol")


def beginning_page_number(page: int) -> SectionFormat:
    return _section("pgnstarts", page)


def top_align_text() -> SectionFormat:
    return _section("vertalt")


def bottom_align_text() -> SectionFormat:
    return _section("vertalb")


def center_vertical_text() -> SectionFormat:
    return _section("vertalc")


def justify_vertical_text() -> SectionFormat:
    return _section("vertalj")


def header_footer(placement: HeaderFooterPlacement, content: Any) -> SectionFormat:
    block = HeaderFooter(placement=placement, paragraph=content if _is_paragraph(content) else p(content))
    return SectionFormat(headers_footers=(block,))


def header_on_all_pages(content: Any) -> SectionFormat:
    return header_footer(HeaderFooterPlacement.HEADER, content)


def footer_on_all_pages(content: Any) -> SectionFormat:
    return header_footer(HeaderFooterPlacement.FOOTER, content)


# Document info


def created_at(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> DocumentInfo:
    return DocumentInfo(created=datetime(year, month, day, hour, minute, second))


class Rtf:
    """Fluent builder for a whole document.

    Collects header entries, info, document formatting and sections, then
    yields one immutable :class:`Document` from :meth:`build`.
    """

    def __init__(self) -> None:
        self._headers = HeaderTablesBuilder()
        self._info = DocumentInfo()
        self._formats: List[DocumentFormat] = []
        self._sections: List[Section] = []

    @classmethod
    def rtf(cls) -> "Rtf":
        return cls()

    def header(self, *entries: HeaderEntry) -> "Rtf":
        """Register fonts, colors and styles; see :class:`HeaderTablesBuilder`."""
        self._headers.add(*entries)
        return self

    def header_styles(self, *styles: StyleEntry) -> "Rtf":
        for style in styles:
            self._headers.style(style)
        return self

    def info(self, *infos: DocumentInfo, **fields: Any) -> "Rtf":
        """Merge metadata; later non-empty values replace earlier ones."""
        updates = {}
        for entry in infos + (DocumentInfo(**fields),):
            updates.update({key: value for key, value in entry.model_dump().items() if value is not None})
        self._info = self._info.model_copy(update=updates)
        return self

    def document_formatting(self, *formats: Any) -> "Rtf":
        """Add document formats; tuples such as :data:`A4` are flattened."""
        for entry in formats:
            if isinstance(entry, tuple):
                self._formats.extend(entry)
            else:
                self._formats.append(entry)
        return self

    def section(self, *paragraphs: Paragraph, formatting: Optional[SectionFormat] = None) -> "Rtf":
        if not paragraphs:
            raise RtfConfigurationError("There has to be at least one paragraph in a section")
        self._sections.append(Section(formatting=formatting, paragraphs=paragraphs))
        return self

    def p(self, *texts: Any, style: Optional[StyleEntry] = None) -> "Rtf":
        """Shortcut for a section holding a single paragraph."""
        return self.section(p(*texts, style=style))

    def build(self) -> Document:
        if not self._sections:
            raise RtfConfigurationError("A document needs at least one section")
        info = None if self._info.is_empty() else self._info
        document = Document(
            headers=self._headers.build(),
            info=info,
            formats=tuple(self._formats),
            sections=tuple(self._sections),
        )
        LOGGER.debug("Built document with %d section(s)", len(document.sections))
        return document

    def out(self, sink: Any) -> None:
        """Write the document to ``sink`` and close it."""
        try:
            document = self.build()
        except Exception:
            close_sink(sink)
            raise
        RtfWriter(document).write(sink)

    def render(self) -> str:
        return RtfWriter(self.build()).render()

    def save(self, output_path: Path) -> Path:
        return RtfWriter(self.build()).save(output_path)

    def __str__(self) -> str:
        return self.render()
