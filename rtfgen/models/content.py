"""Body content contracts: inline runs, text paragraphs and table rows.

Runs and paragraphs are immutable trees. Formatting is expressed by
wrapping, never by mutation: ``Formatted(style=BOLD, child=...)`` builds a new
run around an existing one, so the same run can be reused in several places.
The ``kind`` field discriminates the variants of :data:`TextRun` and
:data:`Paragraph`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field, constr, model_validator

from ..units import Unit, distance_to_twips, to_twips
from .base import RtfBaseModel

NonEmptyStr = constr(min_length=1)
ControlWord = constr(pattern=r"^[a-z]+$")


# Inline runs


class FormatStyle(str, Enum):
    BOLD = "b"
    ITALIC = "i"
    UNDERLINE = "ul"
    DOTTED_UNDERLINE = "uld"
    DOUBLE_UNDERLINE = "uldb"
    WORD_UNDERLINE = "ulw"
    SUBSCRIPT = "sub"
    SUPERSCRIPT = "super"
    STRIKETHROUGH = "strike"
    SHADOW = "shad"
    SMALL_CAPS = "scaps"
    REVISED = "revised"
    FONT = "f"
    FONT_SIZE = "fs"
    COLOR = "cf"

    @property
    def takes_value(self) -> bool:
        return self in (FormatStyle.FONT, FormatStyle.FONT_SIZE, FormatStyle.COLOR)


class SpecialChar(str, Enum):
    CURRENT_DATE = "chdate"
    CURRENT_DATE_LONG = "chdpl"
    CURRENT_DATE_ABBREVIATED = "chdpa"
    CURRENT_TIME = "chtime"
    PAGE_NUMBER = "chpgn"
    SECTION_NUMBER = "sectnum"
    PAGE_BREAK = "page"
    COLUMN_BREAK = "column"
    LINE_BREAK = "line"
    SOFT_PAGE_BREAK = "softpage"
    SOFT_COLUMN_BREAK = "softcol"
    SOFT_LINE_BREAK = "softline"
    TAB = "tab"
    EM_DASH = "emdash"
    EN_DASH = "endash"
    BULLET = "bullet"
    LEFT_QUOTE = "lquote"
    RIGHT_QUOTE = "rquote"
    LEFT_DOUBLE_QUOTE = "ldblquote"
    RIGHT_DOUBLE_QUOTE = "rdblquote"
    NON_BREAKING_SPACE = "~"


class FieldModifier(str, Enum):
    DIRTY = "flddirty"
    EDITED = "fldedit"
    LOCKED = "fldlock"
    NONDISPLAYABLE = "fldpriv"


class PictureType(str, Enum):
    AUTOMATIC = "automatic"
    JPG = "jpg"
    PNG = "png"


class PlainText(RtfBaseModel):
    kind: Literal["plain"] = "plain"
    text: str = ""


class Formatted(RtfBaseModel):
    """A run wrapped in its own scope carrying exactly one control word."""

    kind: Literal["format"] = "format"
    style: FormatStyle
    value: Optional[int] = None
    child: TextRun

    @model_validator(mode="after")
    def _check_value(self) -> "Formatted":
        if not self.style.takes_value:
            if self.value is not None:
                raise ValueError(f"{self.style.name} does not take a value")
            return self
        if self.value is None:
            raise ValueError(f"{self.style.name} requires a value")
        if self.value < 0:
            raise ValueError(f"{self.style.name} value can't be negative: {self.value}")
        if self.style is FormatStyle.COLOR and self.value > 255:
            raise ValueError(f"Color index {self.value} is out of range 0-255")
        return self


class RunSequence(RtfBaseModel):
    kind: Literal["sequence"] = "sequence"
    runs: Tuple[TextRun, ...] = ()


class Special(RtfBaseModel):
    kind: Literal["special"] = "special"
    char: SpecialChar


class FieldRun(RtfBaseModel):
    kind: Literal["field"] = "field"
    instructions: TextParagraph
    result: Optional[TextParagraph] = None
    modifiers: Tuple[FieldModifier, ...] = ()


class Hyperlink(RtfBaseModel):
    kind: Literal["hyperlink"] = "hyperlink"
    url: NonEmptyStr
    text: TextParagraph


class PictureRun(RtfBaseModel):
    """Hex-encoded image payload; build it with ``render.picture.load_picture``."""

    kind: Literal["picture"] = "picture"
    hex_data: NonEmptyStr
    picture_type: PictureType
    width: Optional[int] = Field(None, ge=0, description="Goal width in twips")
    height: Optional[int] = Field(None, ge=0, description="Goal height in twips")
    scale_x: Optional[int] = Field(None, ge=1, description="Horizontal scaling in percent")
    scale_y: Optional[int] = Field(None, ge=1, description="Vertical scaling in percent")

    @model_validator(mode="after")
    def _check_type(self) -> "PictureRun":
        if self.picture_type is PictureType.AUTOMATIC:
            raise ValueError("Picture type must be resolved before the picture is built")
        return self

    def sized(self, width: Optional[float] = None, height: Optional[float] = None, unit: Unit = Unit.TWIPS) -> "PictureRun":
        update = {}
        if width is not None:
            update["width"] = to_twips(width, unit)
        if height is not None:
            update["height"] = to_twips(height, unit)
        return self.copy_with(**update)

    def scaled(self, scale_x: Optional[int] = None, scale_y: Optional[int] = None) -> "PictureRun":
        update = {}
        if scale_x is not None:
            update["scale_x"] = scale_x
        if scale_y is not None:
            update["scale_y"] = scale_y
        return self.copy_with(**update)


class Footnote(RtfBaseModel):
    kind: Literal["footnote"] = "footnote"
    paragraphs: Tuple[Paragraph, ...] = Field(..., min_length=1)


TextRun = Annotated[
    Union[PlainText, Formatted, RunSequence, Special, FieldRun, Hyperlink, PictureRun, Footnote],
    Field(discriminator="kind"),
]


# Paragraph attributes


class BorderSide(str, Enum):
    TOP = "t"
    BOTTOM = "b"
    LEFT = "l"
    RIGHT = "r"


class BorderStyle(str, Enum):
    SINGLE = "brdrs"
    DOUBLE_THICKNESS = "brdrth"
    SHADOWED = "brdrsh"
    DOUBLE = "brdrdb"
    DOTTED = "brdrdot"
    DASHED = "brdrdash"
    HAIRLINE = "brdrhair"


class TabKind(str, Enum):
    LEFT = "left"
    RIGHT = "tqr"
    CENTER = "tqc"
    DECIMAL = "tqdec"


class TabLead(str, Enum):
    DOTS = "tldot"
    HYPHENS = "tlhyph"
    UNDERLINE = "tlul"
    THICK_LINE = "tlth"
    EQUALS_SIGN = "tleq"


class Border(RtfBaseModel):
    side: BorderSide
    style: BorderStyle = BorderStyle.SINGLE


class ParagraphFormat(RtfBaseModel):
    word: ControlWord
    value: Optional[int] = None


class TabStop(RtfBaseModel):
    position: int = Field(..., ge=0, description="Tab position in twips")
    tab_kind: TabKind = TabKind.LEFT
    lead: Optional[TabLead] = None


# Paragraphs


class TextParagraph(RtfBaseModel):
    """A paragraph of inline runs.

    ``inherit=True`` continues the formatting of the previous paragraph;
    ``inherit=False`` writes a ``\\pard`` reset first. The ``with_*`` and
    alignment helpers return modified copies.
    """

    kind: Literal["text"] = "text"
    runs: Tuple[TextRun, ...] = ()
    inherit: bool = True
    style: Optional[int] = Field(None, ge=0, description="Style sheet id")
    borders: Tuple[Border, ...] = ()
    formats: Tuple[ParagraphFormat, ...] = ()
    tabs: Tuple[TabStop, ...] = ()
    bullet: bool = Field(False, description="Bullet list item drawn with font 1")

    def _with_format(self, *formats: ParagraphFormat) -> "TextParagraph":
        return self.model_copy(update={"formats": self.formats + formats})

    def _control(self, word: str, value: Optional[int] = None) -> "TextParagraph":
        return self._with_format(ParagraphFormat(word=word, value=value))

    def with_style(self, style_id: int) -> "TextParagraph":
        return self.copy_with(style=style_id)

    def as_bullet(self) -> "TextParagraph":
        return self.copy_with(bullet=True)

    def with_border(self, side: BorderSide, style: BorderStyle = BorderStyle.SINGLE) -> "TextParagraph":
        return self.model_copy(update={"borders": self.borders + (Border(side=side, style=style),)})

    def with_tab(
        self,
        position: float,
        unit: Unit = Unit.TWIPS,
        tab_kind: TabKind = TabKind.LEFT,
        lead: Optional[TabLead] = None,
    ) -> "TextParagraph":
        stop = TabStop(position=to_twips(position, unit), tab_kind=tab_kind, lead=lead)
        return self.model_copy(update={"tabs": self.tabs + (stop,)})

    def align_left(self) -> "TextParagraph":
        return self._control("ql")

    def align_right(self) -> "TextParagraph":
        return self._control("qr")

    def align_centered(self) -> "TextParagraph":
        return self._control("qc")

    def align_justified(self) -> "TextParagraph":
        return self._control("qj")

    def indent_first_line(self, indentation: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._control("fi", to_twips(indentation, unit))

    def indent_left(self, indentation: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._control("li", to_twips(indentation, unit))

    def indent_right(self, indentation: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._control("ri", to_twips(indentation, unit))

    def space_before(self, space: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._control("sb", to_twips(space, unit))

    def space_after(self, space: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._control("sa", to_twips(space, unit))

    def space_between_lines(self, space: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        """Exact line spacing; negative values are taken as their magnitude."""
        return self._control("sl", distance_to_twips(space, unit))

    def space_between_lines_at_least(self, space: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._with_format(
            ParagraphFormat(word="sl", value=distance_to_twips(space, unit)),
            ParagraphFormat(word="slmult", value=0),
        )

    def space_between_lines_multiple(self, space: float, unit: Unit = Unit.TWIPS) -> "TextParagraph":
        return self._with_format(
            ParagraphFormat(word="sl", value=distance_to_twips(space, unit)),
            ParagraphFormat(word="slmult", value=1),
        )

    def space_between_lines_automatically(self) -> "TextParagraph":
        return self._control("sl", 0)

    def hyphenation(self, enabled: bool = True) -> "TextParagraph":
        return self._control("hyphpar", 1 if enabled else 0)

    def keep(self) -> "TextParagraph":
        return self._control("keep")

    def keep_with_next(self) -> "TextParagraph":
        return self._control("keepn")

    def no_widow_orphan_control(self) -> "TextParagraph":
        return self._control("nowidctlpar")

    def level(self, level: int) -> "TextParagraph":
        if level < 0:
            raise ValueError(f"Level is not allowed to be negative but is {level}")
        return self._control("level", level)

    def no_line_numbering(self) -> "TextParagraph":
        return self._control("noline")

    def page_break_before(self) -> "TextParagraph":
        return self._control("pagebb")

    def part_of_table(self) -> "TextParagraph":
        return self._control("intbl")

    def right_to_left(self) -> "TextParagraph":
        return self._control("rtlpar")

    def left_to_right(self) -> "TextParagraph":
        return self._control("ltrpar")


class Cell(RtfBaseModel):
    paragraph: TextParagraph
    width: Optional[int] = Field(None, ge=0, description="Cell width in twips")
    borders: Tuple[BorderSide, ...] = ()
    background_color: int = Field(0, ge=0, le=255, description="Color table index, 0 for none")

    def with_width(self, width: float, unit: Unit = Unit.TWIPS) -> "Cell":
        return self.model_copy(update={"width": distance_to_twips(width, unit)})

    def with_border(self, side: BorderSide) -> "Cell":
        return self.model_copy(update={"borders": self.borders + (side,)})

    def with_background(self, color_index: int) -> "Cell":
        return self.copy_with(background_color=color_index)


class Row(RtfBaseModel):
    """One table row; row-level settings are repeated in every cell definition."""

    kind: Literal["row"] = "row"
    cells: Tuple[Cell, ...] = Field(..., min_length=1)
    right_to_left: bool = False
    cell_space: Optional[int] = Field(None, description="Half the gap between cells, in twips")
    height: Optional[int] = Field(None, description="Row height in twips")
    cell_borders: Tuple[BorderSide, ...] = ()

    def with_right_to_left(self) -> "Row":
        return self.model_copy(update={"right_to_left": True})

    def with_cell_space(self, space: float, unit: Unit = Unit.TWIPS) -> "Row":
        return self.model_copy(update={"cell_space": to_twips(space, unit)})

    def with_height(self, height: float, unit: Unit = Unit.TWIPS) -> "Row":
        return self.model_copy(update={"height": to_twips(height, unit)})

    def with_cell_border(self, side: BorderSide) -> "Row":
        return self.model_copy(update={"cell_borders": self.cell_borders + (side,)})


Paragraph = Annotated[Union[TextParagraph, Row], Field(discriminator="kind")]


for _model in (Formatted, RunSequence, FieldRun, Hyperlink, Footnote, TextParagraph, Cell, Row):
    _model.model_rebuild()

RUN_TYPES = (PlainText, Formatted, RunSequence, Special, FieldRun, Hyperlink, PictureRun, Footnote)
