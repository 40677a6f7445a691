"""Header table tests."""

import unittest

from pydantic import ValidationError

from rtfgen.models.header import (
    HEADING_1,
    NORMAL,
    CharSet,
    ColorEntry,
    FontEntry,
    FontFamily,
    HeaderTables,
    HeaderTablesBuilder,
    Pitch,
)
from rtfgen.render.writer import color_table, font_table, style_sheet


class TestHeaderEntries(unittest.TestCase):
    def test_color_index_range(self) -> None:
        with self.assertRaises(ValidationError):
            ColorEntry(index=0, red=0, green=0, blue=0)
        with self.assertRaises(ValidationError):
            ColorEntry(index=256, red=0, green=0, blue=0)
        with self.assertRaises(ValidationError):
            ColorEntry(index=1, red=256, green=0, blue=0)

    def test_negative_font_index_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            FontEntry(index=-1, name="Arial")


class TestHeaderTables(unittest.TestCase):
    def test_empty_tables(self) -> None:
        headers = HeaderTables()
        self.assertEqual(font_table(headers), "\n{\\fonttbl{\\f0 Times New Roman;}}")
        self.assertEqual(color_table(headers), "\n{\\colortbl;}")
        self.assertEqual(style_sheet(headers), "")

    def test_font_entry_rendering(self) -> None:
        headers = HeaderTablesBuilder().font(
            FontEntry(index=1, name="Arial", family=FontFamily.SWISS, charset=CharSet.ANSI, pitch=Pitch.VARIABLE)
        ).build()
        self.assertEqual(font_table(headers), "\n{\\fonttbl{\\f1\\fswiss\\fcharset0\\fprq2 Arial;}}")

    def test_sparse_color_table(self) -> None:
        headers = (
            HeaderTablesBuilder()
            .color(ColorEntry(index=5, red=4, green=5, blue=6))
            .color(ColorEntry(index=2, red=1, green=2, blue=3))
            .build()
        )
        self.assertEqual(len(headers.color_slots()), 6)
        self.assertEqual(
            color_table(headers),
            "\n{\\colortbl;;\\red1\\green2\\blue3;;;\\red4\\green5\\blue6;}",
        )

    def test_font_collision_last_write_wins_in_place(self) -> None:
        with self.assertLogs("rtfgen.models.header", level="DEBUG"):
            headers = HeaderTablesBuilder().add(
                FontEntry(index=0, name="Arial"),
                FontEntry(index=1, name="Courier"),
                FontEntry(index=0, name="Helvetica"),
            ).build()
        self.assertEqual([font.name for font in headers.fonts], ["Helvetica", "Courier"])
        self.assertEqual(headers.font_indices(), [0, 1])

    def test_color_collision_last_write_wins(self) -> None:
        headers = HeaderTablesBuilder().add(
            ColorEntry(index=1, red=1, green=1, blue=1),
            ColorEntry(index=1, red=9, green=9, blue=9),
        ).build()
        self.assertEqual(len(headers.colors), 1)
        self.assertEqual(headers.colors[0].red, 9)

    def test_styles_are_unique_in_insertion_order(self) -> None:
        headers = HeaderTablesBuilder().add(NORMAL, HEADING_1, NORMAL).build()
        self.assertEqual(headers.style_ids(), [0, 1])
        self.assertEqual(style_sheet(headers), "\n{\\stylesheet{\\s0 Normal;}{\\s1 Heading 1;}}")

    def test_add_rejects_other_values(self) -> None:
        with self.assertRaises(TypeError):
            HeaderTablesBuilder().add("Arial")

    def test_tables_are_immutable(self) -> None:
        headers = HeaderTables()
        with self.assertRaises(ValidationError):
            headers.fonts = (FontEntry(name="Arial"),)


if __name__ == "__main__":
    unittest.main()
