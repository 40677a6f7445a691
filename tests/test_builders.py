"""Builder helper tests."""

import unittest

from rtfgen.builders import (
    A4,
    Rtf,
    bold,
    cell,
    color_entry,
    columns,
    created_at,
    double_quote,
    field,
    font_entry,
    font_size,
    header_on_all_pages,
    italic,
    landscape,
    p,
    page_number_field,
    paper,
    pard,
    picture,
    quote,
    row,
    section_format,
    space_between_columns,
    table_of_contents_field,
    text,
    time_field,
    ul,
)
from rtfgen.errors import RtfConfigurationError
from rtfgen.models.content import Formatted, FormatStyle, PictureType, PlainText, RunSequence, TextParagraph
from rtfgen.models.document import DocumentFormat, HeaderFooterPlacement, SectionControl
from rtfgen.models.header import HEADING_1, NORMAL
from rtfgen.render.writer import render_run
from rtfgen.units import Unit


class RecordingSink:
    def __init__(self) -> None:
        self.chunks = []
        self.closed = False

    def write(self, chunk: str) -> None:
        self.chunks.append(chunk)

    def close(self) -> None:
        self.closed = True


class TestText(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertEqual(text(), PlainText(text=""))

    def test_single_value(self) -> None:
        self.assertEqual(text(12), PlainText(text="12"))

    def test_none_parts_are_skipped_without_space(self) -> None:
        self.assertEqual(render_run(text("a", None, "b", join_with_space=True)), "ab")
        self.assertEqual(render_run(text("a", 1, bold("c"), join_with_space=True)), "a 1 {\\b c}")

    def test_paragraph_inside_text_rejected(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            text(p("x"))

    def test_formatting_helpers(self) -> None:
        self.assertEqual(bold("x"), Formatted(style=FormatStyle.BOLD, child=PlainText(text="x")))
        self.assertEqual(render_run(font_size(24, italic("x"))), "{\\fs24 {\\i x}}")

    def test_quotes(self) -> None:
        self.assertEqual(render_run(quote("x")), "\\lquote\nx\\rquote\n")
        self.assertIsInstance(double_quote("x"), RunSequence)


class TestParagraphHelpers(unittest.TestCase):
    def test_p_and_pard(self) -> None:
        self.assertEqual(p(), TextParagraph())
        self.assertTrue(p("x").inherit)
        self.assertFalse(pard("x").inherit)
        self.assertEqual(p("x", style=HEADING_1).style, 1)

    def test_row_accepts_values_paragraphs_and_cells(self) -> None:
        table_row = row("a", p("b"), cell("c", width=1, unit=Unit.CM))
        self.assertEqual(len(table_row.cells), 3)
        self.assertEqual(table_row.cells[1].paragraph, p("b"))
        self.assertEqual(table_row.cells[2].width, 567)


class TestFields(unittest.TestCase):
    def test_default_result(self) -> None:
        self.assertEqual(
            render_run(page_number_field()),
            "{\\field{\\*\\fldinst {PAGE}\n}{\\fldrslt {Refresh 'F9'}\n}}",
        )

    def test_picture_helper(self) -> None:
        png = b"\x89PNG\r\n\x1a\n" + bytes(8)
        self.assertEqual(p(picture(png)).runs[0].picture_type, PictureType.PNG)

    def test_no_result(self) -> None:
        self.assertIsNone(field("AUTHOR", result=None).result)

    def test_time_field_escapes_backslash(self) -> None:
        self.assertIn('{time \\\\@ "HH:mm"}', render_run(time_field("HH:mm")))

    def test_table_of_contents(self) -> None:
        self.assertIn('TOC \\\\f \\\\h \\\\u \\\\o "1-5" ', render_run(table_of_contents_field()))


class TestFormats(unittest.TestCase):
    def test_a4_is_portrait(self) -> None:
        self.assertEqual(A4, (DocumentFormat(word="paperw", value=11905), DocumentFormat(word="paperh", value=16837)))

    def test_paper_in_inches(self) -> None:
        self.assertEqual(paper(8.5, 11, Unit.INCH)[0].value, 12240)

    def test_columns_must_be_positive(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            columns(0)

    def test_section_format_merges_in_order(self) -> None:
        formatting = section_format(columns(2), space_between_columns(1, Unit.CM), header_on_all_pages("H"))
        self.assertEqual(
            formatting.controls,
            (SectionControl(word="cols", value=2), SectionControl(word="colsx", value=567)),
        )
        self.assertEqual(formatting.headers_footers[0].placement, HeaderFooterPlacement.HEADER)


class TestRtf(unittest.TestCase):
    def test_full_document(self) -> None:
        output = (
            Rtf.rtf()
            .header(font_entry("Arial", 1), color_entry(255, 0, 0, index=1))
            .header_styles(NORMAL)
            .info(title="T")
            .document_formatting(A4, landscape())
            .section(p("a"), formatting=columns(2))
            .p("b")
            .render()
        )
        self.assertIn("{\\fonttbl{\\f1\\fnil\\fcharset0 Arial;}}", output)
        self.assertIn("{\\colortbl;\\red255\\green0\\blue0;}", output)
        self.assertIn("{\\stylesheet{\\s0 Normal;}}", output)
        self.assertIn("{\\info{\\title T}}\n", output)
        self.assertIn("\\paperw11905\\paperh16837\\landscape\n", output)
        self.assertTrue(output.endswith("\\cols2\n{a\\par}\n\\sect\n{b\\par}\n}"))

    def test_info_merges(self) -> None:
        document = Rtf.rtf().info(title="A").info(created_at(2020, 5, 6), author="B").p("x").build()
        self.assertEqual((document.info.title, document.info.author), ("A", "B"))
        self.assertEqual(document.info.created.year, 2020)

    def test_without_info(self) -> None:
        self.assertIsNone(Rtf.rtf().p("x").build().info)

    def test_needs_sections(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            Rtf.rtf().build()
        with self.assertRaises(RtfConfigurationError):
            Rtf.rtf().section()

    def test_header_rejects_other_values(self) -> None:
        with self.assertRaises(TypeError):
            Rtf.rtf().header("Arial")

    def test_out_closes_sink(self) -> None:
        sink = RecordingSink()
        builder = Rtf.rtf().p("x")
        builder.out(sink)
        self.assertTrue(sink.closed)
        self.assertEqual("".join(sink.chunks), str(builder))

    def test_out_closes_sink_when_build_fails(self) -> None:
        sink = RecordingSink()
        with self.assertRaises(RtfConfigurationError):
            Rtf.rtf().out(sink)
        self.assertTrue(sink.closed)
        self.assertEqual(sink.chunks, [])

    def test_ul_is_bullet_paragraph(self) -> None:
        item = ul("first", bold("item"))
        self.assertTrue(item.bullet)
        self.assertFalse(item.inherit)
        self.assertEqual(len(item.runs), 2)
        self.assertFalse(p("plain").bullet)


if __name__ == "__main__":
    unittest.main()
