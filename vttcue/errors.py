"""Exceptions raised by the WebVTT parser."""


class VttError(Exception):
    """Base class for errors raised by vttcue."""


class FormatError(VttError):
    """The input is not a WebVTT document (missing or invalid header line)."""
