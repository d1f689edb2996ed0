"""
vttcue/cli.py

Command line entry point: parses a WebVTT file and prints its cues, one per line.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import LOG_LEVEL_STR, resolve_log_level
from .errors import FormatError
from .ingest import WebVTTIngester
from .log import setup_logging
from .models import Cue
from .timing import format_timestamp_us

logger = logging.getLogger(__name__)


def format_cue_line(index: int, cue: Cue) -> str:
    """'#1  00:00:00.000 --> 00:00:01.500  Hello | world'"""
    text = "".join(" | " if f.is_line_break else f.text for f in cue.fragments)
    return f"#{index}  {format_timestamp_us(cue.start_us)} --> {format_timestamp_us(cue.end_us)}  {text}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vttcue", description="Parse a WebVTT file and list its cues.")
    parser.add_argument("file", type=Path, help="Path to the .vtt file")
    parser.add_argument("--log-level", default=LOG_LEVEL_STR,
                        help="Logging level for parse warnings (default: %(default)s)")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(resolve_log_level(args.log_level), args.log_file)

    try:
        cues = WebVTTIngester().parse_file(str(args.file))
    except (FormatError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Loaded %d cues from %s", len(cues), args.file)
    for i, cue in enumerate(cues, start=1):
        print(format_cue_line(i, cue))
    return 0
