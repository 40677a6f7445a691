"""Pydantic models for rtfgen documents."""

from .base import RtfBaseModel
from .config import Config
from .content import (
    Border,
    BorderSide,
    BorderStyle,
    Cell,
    FieldModifier,
    FieldRun,
    Footnote,
    Formatted,
    FormatStyle,
    Hyperlink,
    Paragraph,
    ParagraphFormat,
    PictureRun,
    PictureType,
    PlainText,
    Row,
    RunSequence,
    Special,
    SpecialChar,
    TabKind,
    TabLead,
    TabStop,
    TextParagraph,
    TextRun,
)
from .document import (
    Document,
    DocumentFormat,
    DocumentInfo,
    HeaderFooter,
    HeaderFooterPlacement,
    Section,
    SectionControl,
    SectionFormat,
)
from .header import (
    CharSet,
    ColorEntry,
    FontEntry,
    FontFamily,
    HeaderTables,
    HeaderTablesBuilder,
    Pitch,
    StyleEntry,
)
from .validation import ValidationReport, ValidationViolation

__all__ = [
    "Config",
    "RtfBaseModel",
    "Border",
    "BorderSide",
    "BorderStyle",
    "Cell",
    "FieldModifier",
    "FieldRun",
    "Footnote",
    "Formatted",
    "FormatStyle",
    "Hyperlink",
    "Paragraph",
    "ParagraphFormat",
    "PictureRun",
    "PictureType",
    "PlainText",
    "Row",
    "RunSequence",
    "Special",
    "SpecialChar",
    "TabKind",
    "TabLead",
    "TabStop",
    "TextParagraph",
    "TextRun",
    "Document",
    "DocumentFormat",
    "DocumentInfo",
    "HeaderFooter",
    "HeaderFooterPlacement",
    "Section",
    "SectionControl",
    "SectionFormat",
    "CharSet",
    "ColorEntry",
    "FontEntry",
    "FontFamily",
    "HeaderTables",
    "HeaderTablesBuilder",
    "Pitch",
    "StyleEntry",
    "ValidationReport",
    "ValidationViolation",
]
