"""
vttcue/config.py

Format constants and environment-driven settings.
"""

import logging
import os

# --- FORMAT ---
MIME_TYPE = "text/vtt"
ENCODING = "utf-8"

BYTE_ORDER_MARK = "\ufeff"
HEADER_TOKEN = "WEBVTT"
COMMENT_TOKEN = "NOTE"
CUE_ARROW = "-->"

# Inserted between body lines before markup normalization turns it into a line break
LINE_BREAK_MARKER = "<br>"

# --- LOGGING ---
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_STR = os.getenv("VTTCUE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def resolve_log_level(name: str) -> int:
    """Maps a level name ('debug', 'INFO', ...) to a logging level, falling back to WARNING."""
    level = getattr(logging, name.upper(), None)
    return level if isinstance(level, int) else logging.WARNING


LOG_LEVEL = resolve_log_level(LOG_LEVEL_STR)
