"""Placeholder substitution on an existing RTF document.

A template is any RTF file containing placeholders such as ``%%NAME%%``::

    RtfTemplate.load("letter.rtf").inject("NAME", "Anna {Admin}").render()

Injected values are escaped like ordinary text, so a value can never open or
close a group of the surrounding document. Placeholders without a value are
left untouched.
"""

from __future__ import annotations

import codecs
import logging
import re
import string
from pathlib import Path
from typing import Any, BinaryIO, Dict, Mapping, Tuple, Union

from ..errors import RtfConfigurationError, RtfWriteError
from ..models.config import Config
from ..models.content import RUN_TYPES
from .escape import FALLBACK_ENCODING, escape
from .writer import close_sink, render_run

LOGGER = logging.getLogger(__name__)

DEFAULT_DELIMITER = "%%"

TemplateSource = Union[bytes, bytearray, BinaryIO, str, Path]

# Bytes that Windows-1252 leaves undefined are decoded to lone surrogates
# (``surrogateescape``) and written back unchanged. Other characters the
# encoding lacks become ``?``.
BYTE_PASSTHROUGH = "rtfgen.cp1252_passthrough"


def _passthrough(err: UnicodeEncodeError) -> Tuple[bytes, int]:
    chunk = err.object[err.start:err.end]
    restored = bytes(ord(char) - 0xDC00 if 0xDC80 <= ord(char) <= 0xDCFF else ord("?") for char in chunk)
    return restored, err.end


codecs.register_error(BYTE_PASSTHROUGH, _passthrough)


def _check_delimiter(name: str, value: str) -> None:
    if not value:
        raise RtfConfigurationError(f"Template {name} can't be empty")
    if any(char not in string.punctuation for char in value):
        raise RtfConfigurationError(f"Template {name} must consist of ASCII punctuation only: {value!r}")


def _read_source(source: TemplateSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    try:
        return source.read()
    finally:
        source.close()


class RtfTemplate:
    """An RTF document with placeholders and the values to put into them."""

    def __init__(self, text: str, prefix: str = DEFAULT_DELIMITER, suffix: str = DEFAULT_DELIMITER) -> None:
        self._buffer = text
        self._values: Dict[str, Any] = {}
        self.delimiters(prefix, suffix)

    @classmethod
    def load(
        cls,
        source: TemplateSource,
        prefix: str = DEFAULT_DELIMITER,
        suffix: str = DEFAULT_DELIMITER,
    ) -> "RtfTemplate":
        """Read a whole template as Windows-1252 text; streams are closed.

        Undefined bytes such as ``0x81`` survive a round trip through :meth:`out`.
        """
        data = _read_source(source)
        return cls(data.decode(FALLBACK_ENCODING, errors="surrogateescape"), prefix, suffix)

    @classmethod
    def from_config(cls, source: TemplateSource, config: Config) -> "RtfTemplate":
        return cls.load(source, config.template_prefix, config.template_suffix)

    @property
    def text(self) -> str:
        return self._buffer

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    def delimiters(self, prefix: str, suffix: str) -> "RtfTemplate":
        _check_delimiter("prefix", prefix)
        _check_delimiter("suffix", suffix)
        self.prefix = prefix
        self.suffix = suffix
        self._pattern = re.compile(re.escape(prefix) + r"(\S+)" + re.escape(suffix))
        return self

    def inject(self, key: str, value: Any) -> "RtfTemplate":
        """Set a value; formatted runs are kept, everything else becomes ``str``."""
        self._values[key] = value if isinstance(value, RUN_TYPES) else str(value)
        return self

    def inject_many(self, values: Mapping[str, Any]) -> "RtfTemplate":
        for key, value in values.items():
            self.inject(key, value)
        return self

    def _substitute(self, match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in self._values:
            return match.group(0)
        value = self._values[key]
        if isinstance(value, RUN_TYPES):
            return render_run(value)
        return escape(value)

    def render(self) -> str:
        """Return the document with every known placeholder replaced."""
        if not self._values:
            return self._buffer
        result, count = self._pattern.subn(self._substitute, self._buffer)
        LOGGER.debug("Template scan matched %d placeholder(s)", count)
        return result

    def out(self, stream: BinaryIO) -> None:
        """Write the rendered document as Windows-1252 and close ``stream``."""
        try:
            stream.write(self.render().encode(FALLBACK_ENCODING, errors=BYTE_PASSTHROUGH))
        except OSError as err:
            raise RtfWriteError(f"Failed to write RTF output: {err}") from err
        finally:
            close_sink(stream)

    def save(self, output_path: Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.out(output_path.open("wb"))
        return output_path
