"""Picture loading tests."""

import io
import tempfile
import unittest
from pathlib import Path

from rtfgen.errors import RtfConfigurationError
from rtfgen.models.content import PictureType
from rtfgen.render.picture import hex_encode, load_picture, sniff_picture_type
from rtfgen.render.writer import render_run
from rtfgen.units import Unit

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(24)
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(24)
GIF_BYTES = b"GIF89a" + bytes(24)


class TrackingStream(io.BytesIO):
    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        super().close()


class TestHexEncoding(unittest.TestCase):
    def test_short_payload_has_no_newline(self) -> None:
        self.assertEqual(hex_encode(b"\x00\xab\xff"), "00abff")

    def test_newline_after_every_full_line(self) -> None:
        self.assertEqual(hex_encode(bytes(20)), "00" * 20 + "\n")
        self.assertEqual(hex_encode(bytes(21)), "00" * 20 + "\n" + "00")
        self.assertEqual(hex_encode(bytes(41)).count("\n"), 2)


class TestSniffing(unittest.TestCase):
    def test_png(self) -> None:
        self.assertEqual(sniff_picture_type(hex_encode(PNG_BYTES)), PictureType.PNG)

    def test_jpeg(self) -> None:
        self.assertEqual(sniff_picture_type(hex_encode(JPEG_BYTES)), PictureType.JPG)

    def test_unknown_signature_is_rejected(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            sniff_picture_type(hex_encode(GIF_BYTES))

    def test_too_short_payload_is_rejected(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            sniff_picture_type("00")


class TestLoadPicture(unittest.TestCase):
    def test_automatic_type_resolved_at_construction(self) -> None:
        self.assertEqual(load_picture(PNG_BYTES).picture_type, PictureType.PNG)
        self.assertEqual(load_picture(JPEG_BYTES).picture_type, PictureType.JPG)

    def test_unknown_payload_without_declared_type_fails(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            load_picture(GIF_BYTES)

    def test_declared_type_skips_sniffing(self) -> None:
        self.assertEqual(load_picture(GIF_BYTES, picture_type="png").picture_type, PictureType.PNG)

    def test_empty_payload_rejected(self) -> None:
        with self.assertRaises(RtfConfigurationError):
            load_picture(b"")

    def test_stream_is_drained_and_closed(self) -> None:
        stream = TrackingStream(PNG_BYTES)
        picture = load_picture(stream)
        self.assertEqual(stream.close_calls, 1)
        self.assertEqual(picture.hex_data, hex_encode(PNG_BYTES))

    def test_path_source(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "logo.jpg"
            path.write_bytes(JPEG_BYTES)
            self.assertEqual(load_picture(path).picture_type, PictureType.JPG)

    def test_rendering_with_goal_size_and_scale(self) -> None:
        picture = load_picture(PNG_BYTES, width=1, unit=Unit.INCH, scale_x=50)
        self.assertEqual(
            render_run(picture),
            "{\\pict\\pngblip\\picwgoal1440\\picscalex50\n" + hex_encode(PNG_BYTES) + "}",
        )


if __name__ == "__main__":
    unittest.main()
