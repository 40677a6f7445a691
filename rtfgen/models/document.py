"""Document-level contracts: sections, info block and document formatting."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterator, Optional, Tuple

from pydantic import Field, constr

from .base import RtfBaseModel
from .content import Paragraph
from .header import HeaderTables

ControlWord = constr(pattern=r"^[a-z]+$")


class HeaderFooterPlacement(str, Enum):
    HEADER = "header"
    HEADER_LEFT = "headerl"
    HEADER_RIGHT = "headerr"
    HEADER_FIRST = "headerf"
    FOOTER = "footer"
    FOOTER_LEFT = "footerl"
    FOOTER_RIGHT = "footerr"
    FOOTER_FIRST = "footerf"


class HeaderFooter(RtfBaseModel):
    placement: HeaderFooterPlacement
    paragraph: Paragraph


class SectionControl(RtfBaseModel):
    word: ControlWord
    value: Optional[int] = None


class SectionFormat(RtfBaseModel):
    """Section formatting controls followed by header/footer blocks."""

    controls: Tuple[SectionControl, ...] = ()
    headers_footers: Tuple[HeaderFooter, ...] = ()

    def merge(self, other: "SectionFormat") -> "SectionFormat":
        return SectionFormat(
            controls=self.controls + other.controls,
            headers_footers=self.headers_footers + other.headers_footers,
        )


class Section(RtfBaseModel):
    formatting: Optional[SectionFormat] = None
    paragraphs: Tuple[Paragraph, ...] = Field(..., min_length=1)


class DocumentInfo(RtfBaseModel):
    """Metadata for the ``{\\info}`` group, written in declaration order."""

    title: Optional[str] = None
    subject: Optional[str] = None
    author: Optional[str] = None
    operator: Optional[str] = None
    keywords: Optional[str] = None
    comment: Optional[str] = None
    doccomm: Optional[str] = None
    created: Optional[datetime] = None

    def text_entries(self) -> Iterator[Tuple[str, str]]:
        for name in ("title", "subject", "author", "operator", "keywords", "comment", "doccomm"):
            value = getattr(self, name)
            if value is not None:
                yield name, value

    def is_empty(self) -> bool:
        return self.created is None and next(self.text_entries(), None) is None


class DocumentFormat(RtfBaseModel):
    word: ControlWord
    value: Optional[int] = None


class Document(RtfBaseModel):
    headers: HeaderTables = Field(default_factory=HeaderTables)
    info: Optional[DocumentInfo] = None
    formats: Tuple[DocumentFormat, ...] = ()
    sections: Tuple[Section, ...] = Field(..., min_length=1)

    def iter_paragraphs(self) -> Iterator[Tuple[str, Paragraph]]:
        """Yield ``(location, paragraph)`` for every top-level paragraph.

        Header and footer paragraphs of a section come before its body, located
        as ``section[N].<placement>``; body paragraphs as ``section[N].paragraph[M]``.
        """
        for number, section in enumerate(self.sections):
            location = f"section[{number}]"
            if section.formatting is not None:
                for block in section.formatting.headers_footers:
                    yield f"{location}.{block.placement.value}", block.paragraph
            for index, paragraph in enumerate(section.paragraphs):
                yield f"{location}.paragraph[{index}]", paragraph
