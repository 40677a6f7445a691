"""Picture loading: eager read, hex encoding and a minimal type sniff."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..errors import RtfConfigurationError
from ..models.content import PictureRun, PictureType
from ..units import Unit, to_twips

LOGGER = logging.getLogger(__name__)

HEX_LINE_LENGTH = 40

PictureSource = Union[bytes, bytearray, BinaryIO, str, Path]


def hex_encode(data: bytes) -> str:
    """Hex encode ``data`` with a newline after every full 40-digit line."""
    digits = data.hex()
    lines = []
    for start in range(0, len(digits), HEX_LINE_LENGTH):
        chunk = digits[start : start + HEX_LINE_LENGTH]
        lines.append(chunk + "\n" if len(chunk) == HEX_LINE_LENGTH else chunk)
    return "".join(lines)


def _leading_bytes(hex_data: str, count: int) -> bytes:
    digits = "".join(hex_data.split())[: count * 2]
    return bytes.fromhex(digits[: len(digits) - len(digits) % 2])


def sniff_picture_type(hex_data: str) -> PictureType:
    """Best-effort guess of the image type of a hex-encoded payload.

    Only two fixed offsets are inspected: bytes 6-9 for the ``JFIF`` marker of
    a JPEG and bytes 1-3 for the ``PNG`` signature fragment. Anything else is
    rejected; there is no generic bitmap fallback.
    """
    head = _leading_bytes(hex_data, 10)
    if head[6:10] == b"JFIF":
        return PictureType.JPG
    if head[1:4] == b"PNG":
        return PictureType.PNG
    raise RtfConfigurationError("Unsupported image type: neither PNG nor JPEG/JFIF signature found")


def read_picture_bytes(source: PictureSource) -> bytes:
    """Drain ``source`` completely; streams are closed afterwards."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    if source is None:
        raise RtfConfigurationError("Image source can't be None")
    try:
        return source.read()
    finally:
        source.close()


def load_picture(
    source: PictureSource,
    picture_type: PictureType = PictureType.AUTOMATIC,
    width: Optional[float] = None,
    height: Optional[float] = None,
    unit: Unit = Unit.TWIPS,
    scale_x: Optional[int] = None,
    scale_y: Optional[int] = None,
) -> PictureRun:
    """Build a :class:`PictureRun` from raw image data.

    With ``PictureType.AUTOMATIC`` the type is sniffed right away, so an
    unrecognised payload fails here rather than when the document is written.
    """
    data = read_picture_bytes(source)
    if not data:
        raise RtfConfigurationError("Image data is empty")
    hex_data = hex_encode(data)
    picture_type = PictureType(picture_type)
    if picture_type is PictureType.AUTOMATIC:
        picture_type = sniff_picture_type(hex_data)
        LOGGER.debug("Detected %s picture (%d bytes)", picture_type.value, len(data))
    return PictureRun(
        hex_data=hex_data,
        picture_type=picture_type,
        width=None if width is None else to_twips(width, unit),
        height=None if height is None else to_twips(height, unit),
        scale_x=scale_x,
        scale_y=scale_y,
    )
