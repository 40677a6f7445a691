"""rtfgen: build RTF documents from immutable models and fill RTF templates."""

from .builders import Rtf
from .errors import RtfConfigurationError, RtfError, RtfWriteError
from .render.escape import escape
from .render.picture import load_picture
from .render.template import RtfTemplate
from .render.writer import RtfWriter, render_document
from .units import Unit, to_twips
from .validate.references import check_references

__all__ = [
    "Rtf",
    "RtfConfigurationError",
    "RtfError",
    "RtfTemplate",
    "RtfWriteError",
    "RtfWriter",
    "Unit",
    "check_references",
    "escape",
    "load_picture",
    "render_document",
    "to_twips",
]
