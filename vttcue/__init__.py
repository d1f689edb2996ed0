"""vttcue: parses WebVTT subtitle tracks into an ordered collection of cues."""

from typing import BinaryIO

from .errors import FormatError, VttError
from .ingest import WebVTTIngester
from .models import Alignment, Anchor, Cue, CueCollection, Fragment, LineType

__all__ = [
    "Alignment", "Anchor", "Cue", "CueCollection", "Fragment", "LineType",
    "FormatError", "VttError", "WebVTTIngester",
    "parse", "parse_text", "parse_file",
]


def parse(stream: BinaryIO) -> CueCollection:
    """
    Parses a binary stream of UTF-8 WebVTT data.
    The stream is read to the end but not closed.
    Raises FormatError if the WEBVTT header line is missing or invalid.
    """
    return WebVTTIngester().parse(stream)


def parse_text(text: str) -> CueCollection:
    """Parses WebVTT content that is already decoded to a string."""
    return WebVTTIngester().parse_text(text)


def parse_file(path: str) -> CueCollection:
    """Opens and parses a .vtt file. OSError from opening or reading propagates unchanged."""
    return WebVTTIngester().parse_file(path)
