"""Header table contracts: fonts, colors and style sheets."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from pydantic import Field, constr, field_validator

from .base import RtfBaseModel

LOGGER = logging.getLogger(__name__)

NonEmptyStr = constr(min_length=1)

DEFAULT_FONT_NAME = "Times New Roman"


class FontFamily(str, Enum):
    NIL = "nil"
    ROMAN = "roman"
    SWISS = "swiss"
    MODERN = "modern"
    SCRIPT = "script"
    DECOR = "decor"
    TECH = "tech"
    BIDI = "bidi"


class CharSet(int, Enum):
    ANSI = 0
    DEFAULT = 1
    SYMBOL = 2
    MAC = 77
    SHIFTJIS = 128
    HANGUL = 129
    JOHAB = 130
    GREEK = 161
    TURKISH = 162
    VIETNAMESE = 163
    HEBREW = 177
    ARABIC_SIMPLIFIED = 178
    ARABIC_TRADITIONAL = 179
    ARABIC_USER = 180
    HEBREW_USER = 181
    BALTIC = 186
    CYRILLIC = 204
    THAI = 222
    EASTERN_EUROPE = 238
    PC437 = 254
    OEM = 255


class Pitch(int, Enum):
    DEFAULT = 0
    FIXED = 1
    VARIABLE = 2


class FontEntry(RtfBaseModel):
    index: int = Field(0, ge=0, description="Font number referenced by \\fN")
    name: NonEmptyStr
    family: FontFamily = FontFamily.NIL
    charset: CharSet = CharSet.ANSI
    pitch: Optional[Pitch] = None


class ColorEntry(RtfBaseModel):
    index: int = Field(..., ge=1, le=255, description="Slot 0 is reserved for AUTO")
    red: int = Field(..., ge=0, le=255)
    green: int = Field(..., ge=0, le=255)
    blue: int = Field(..., ge=0, le=255)


class StyleEntry(RtfBaseModel):
    id: int = Field(..., ge=0)
    name: NonEmptyStr


NORMAL = StyleEntry(id=0, name="Normal")
HEADING_1 = StyleEntry(id=1, name="Heading 1")
HEADING_2 = StyleEntry(id=2, name="Heading 2")
HEADING_3 = StyleEntry(id=3, name="Heading 3")
HEADING_4 = StyleEntry(id=4, name="Heading 4")
HEADING_5 = StyleEntry(id=5, name="Heading 5")

HeaderEntry = Union[FontEntry, ColorEntry, StyleEntry]


class HeaderTables(RtfBaseModel):
    """Finalized font, color and style tables of one document.

    Fonts and colors follow a last-write-wins policy per index: a font
    registered again at a used index replaces the earlier entry in its
    original position, a color replaces its slot. Styles are de-duplicated
    and keep first-insertion order.
    """

    fonts: Tuple[FontEntry, ...] = ()
    colors: Tuple[ColorEntry, ...] = ()
    styles: Tuple[StyleEntry, ...] = ()

    @field_validator("fonts")
    @classmethod
    def _collapse_fonts(cls, fonts: Tuple[FontEntry, ...]) -> Tuple[FontEntry, ...]:
        by_index: Dict[int, FontEntry] = {}
        for font in fonts:
            if font.index in by_index:
                LOGGER.debug("Font %d redefined: %s replaces %s", font.index, font.name, by_index[font.index].name)
            by_index[font.index] = font
        return tuple(by_index.values())

    @field_validator("colors")
    @classmethod
    def _collapse_colors(cls, colors: Tuple[ColorEntry, ...]) -> Tuple[ColorEntry, ...]:
        by_index: Dict[int, ColorEntry] = {}
        for color in colors:
            if color.index in by_index:
                LOGGER.debug("Color slot %d redefined", color.index)
            by_index[color.index] = color
        return tuple(by_index[index] for index in sorted(by_index))

    @field_validator("styles")
    @classmethod
    def _unique_styles(cls, styles: Tuple[StyleEntry, ...]) -> Tuple[StyleEntry, ...]:
        unique: List[StyleEntry] = []
        for style in styles:
            if style not in unique:
                unique.append(style)
        return tuple(unique)

    def color_slots(self) -> List[Optional[ColorEntry]]:
        """Return color slots 0..max index; ``None`` marks an automatic slot."""
        if not self.colors:
            return []
        slots: List[Optional[ColorEntry]] = [None] * (self.colors[-1].index + 1)
        for color in self.colors:
            slots[color.index] = color
        return slots

    def font_indices(self) -> List[int]:
        if not self.fonts:
            return [0]
        return [font.index for font in self.fonts]

    def style_ids(self) -> List[int]:
        return [style.id for style in self.styles]


class HeaderTablesBuilder:
    """Accumulates header entries and produces one immutable :class:`HeaderTables`."""

    def __init__(self) -> None:
        self._fonts: List[FontEntry] = []
        self._colors: List[ColorEntry] = []
        self._styles: List[StyleEntry] = []

    def font(self, entry: FontEntry) -> "HeaderTablesBuilder":
        self._fonts.append(entry)
        return self

    def color(self, entry: ColorEntry) -> "HeaderTablesBuilder":
        self._colors.append(entry)
        return self

    def style(self, entry: StyleEntry) -> "HeaderTablesBuilder":
        self._styles.append(entry)
        return self

    def add(self, *entries: HeaderEntry) -> "HeaderTablesBuilder":
        """Register fonts, colors and styles in one call."""
        for entry in entries:
            if isinstance(entry, FontEntry):
                self.font(entry)
            elif isinstance(entry, ColorEntry):
                self.color(entry)
            elif isinstance(entry, StyleEntry):
                self.style(entry)
            else:
                raise TypeError(f"Not a header entry: {entry!r}")
        return self

    def build(self) -> HeaderTables:
        return HeaderTables(
            fonts=tuple(self._fonts),
            colors=tuple(self._colors),
            styles=tuple(self._styles),
        )
