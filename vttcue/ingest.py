"""
vttcue/ingest.py

Logic for parsing WebVTT files into the Cue Data Model.

Key Responsibilities:
1. Header Validation: the 'WEBVTT' signature line is the only fatal check.
2. Block Scanning: finding cue timing lines while skipping NOTE blocks and other stray lines.
3. Cue Assembly: timestamps, settings and body text become one immutable Cue.
4. Recovery: a bad timestamp drops that cue only, a bad setting drops that setting only.

All scratch state lives inside a single parse() call, so one WebVTTIngester can be shared.
"""

import io
import logging
from typing import BinaryIO, List, Optional, TextIO, Tuple

from .config import ENCODING, LINE_BREAK_MARKER, MIME_TYPE
from .errors import FormatError
from .grammar import is_comment_line, is_header_line, split_cue_header
from .markup import parse_markup
from .models import Cue, CueCollection, Fragment
from .settings import parse_cue_settings
from .timing import parse_timestamp_us

logger = logging.getLogger(__name__)


class _LineReader:
    """Reads lines without their terminator; returns None at the end of input."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.line_number = 0

    def readline(self) -> Optional[str]:
        line = self._stream.readline()
        if line == "":
            return None
        self.line_number += 1
        return line[:-1] if line.endswith("\n") else line


class WebVTTIngester:
    """
    Parses WebVTT documents.

    Entry points:
    - parse(stream): binary stream, decoded as UTF-8. The stream is not closed.
    - parse_text(text): already decoded text.
    - parse_file(path): convenience wrapper around parse().
    """

    def can_parse(self, mime_type: Optional[str]) -> bool:
        return mime_type == MIME_TYPE

    def parse_file(self, path: str) -> CueCollection:
        with open(path, "rb") as f:
            return self.parse(f)

    def parse(self, stream: BinaryIO) -> CueCollection:
        # newline=None: universal newlines ('\n', '\r\n' and '\r' all end a line)
        text_stream = io.TextIOWrapper(stream, encoding=ENCODING, errors="replace", newline=None)
        try:
            return self._parse_lines(_LineReader(text_stream))
        finally:
            # Hand the caller's stream back untouched (closing the wrapper would close it).
            # A stream closed mid-read cannot be flushed; let the original error through.
            if not stream.closed:
                text_stream.detach()

    def parse_text(self, text: str) -> CueCollection:
        return self._parse_lines(_LineReader(io.StringIO(text, newline=None)))

    # --- PIPELINE ---
    def _parse_lines(self, reader: _LineReader) -> CueCollection:
        # 1. Header & metadata block
        self._validate_header(reader)
        self._skip_block(reader)

        # 2. Cue blocks
        cues: List[Cue] = []
        while True:
            header = self._find_next_cue_header(reader)
            if header is None:
                break

            start_str, end_str, settings_str, line = header
            try:
                start_us = parse_timestamp_us(start_str)
                end_us = parse_timestamp_us(end_str)
            except ValueError:
                logger.warning("Skipping cue with bad header: %s", line)
                continue

            settings = parse_cue_settings(settings_str)
            fragments = self._read_cue_text(reader)

            cues.append(Cue(
                start_us=start_us,
                end_us=end_us,
                fragments=fragments,
                text_alignment=settings.text_alignment,
                line=settings.line,
                line_type=settings.line_type,
                line_anchor=settings.line_anchor,
                position=settings.position,
                position_anchor=settings.position_anchor,
                size=settings.size,
            ))

        logger.debug("Parsed %d cues from %d lines", len(cues), reader.line_number)
        return CueCollection(tuple(cues))

    def _validate_header(self, reader: _LineReader):
        line = reader.readline()
        if not is_header_line(line):
            raise FormatError(f"missing or invalid header: expected WEBVTT, got {line!r}")

    def _skip_block(self, reader: _LineReader):
        """Consumes lines up to and including the next empty line (or the end of input)."""
        while True:
            line = reader.readline()
            if not line:
                return

    def _find_next_cue_header(self, reader: _LineReader) -> Optional[Tuple[str, str, str, str]]:
        """
        Reads lines up to and including the next cue timing line.
        Returns (start, end, settings, raw_line) or None at the end of input.
        """
        while True:
            line = reader.readline()
            if line is None:
                return None

            if is_comment_line(line):
                self._skip_block(reader)
                continue

            parts = split_cue_header(line)
            if parts is not None:
                return parts[0], parts[1], parts[2], line

    def _read_cue_text(self, reader: _LineReader) -> Tuple[Fragment, ...]:
        text = ""
        while True:
            line = reader.readline()
            # An empty line and the end of input both close the cue body
            if not line:
                break
            if text:
                text += LINE_BREAK_MARKER
            text += line.strip()
        return parse_markup(text)
