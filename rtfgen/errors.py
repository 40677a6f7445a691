"""Exception hierarchy shared by the writer, picture loader and template engine."""

from __future__ import annotations


class RtfError(RuntimeError):
    """Base class for failures raised by rtfgen."""


class RtfConfigurationError(RtfError, ValueError):
    """Invalid input detected while building or configuring a value."""


class RtfWriteError(RtfError):
    """The output sink failed while a document was being written."""
