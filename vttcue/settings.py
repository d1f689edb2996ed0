"""
vttcue/settings.py

Parsing of the cue settings list (the text after the end timestamp on a cue timing line).

Key Responsibilities:
1. Value Codecs: percentages, anchors and alignment keywords.
2. Per-Setting Isolation: a bad token is skipped, the rest of the list still applies.
3. Derivation: position anchor falls back to the text alignment when not given explicitly.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .grammar import split_fields, split_first, split_setting
from .models import Alignment, Anchor, LineType, PositionHolder

logger = logging.getLogger(__name__)

ANCHORS = {
    "start": Anchor.START,
    "middle": Anchor.MIDDLE,
    "end": Anchor.END,
}

ALIGNMENTS = {
    "start": Alignment.NORMAL,
    "left": Alignment.NORMAL,
    "middle": Alignment.CENTER,
    "end": Alignment.OPPOSITE,
    "right": Alignment.OPPOSITE,
}

ALIGNMENT_ANCHORS = {
    Alignment.NORMAL: Anchor.START,
    Alignment.CENTER: Anchor.MIDDLE,
    Alignment.OPPOSITE: Anchor.END,
}


@dataclass
class CueSettings:
    """Geometry of a single cue, filled in token by token. 'None' means unset."""
    text_alignment: Optional[Alignment] = None
    line: Optional[float] = None
    line_type: Optional[LineType] = None
    line_anchor: Optional[Anchor] = None
    position: Optional[float] = None
    position_anchor: Optional[Anchor] = None
    size: Optional[float] = None


# --- VALUE CODECS ---
DIGITS = "0123456789"


def _is_digits(text: str) -> bool:
    return text != "" and all(ch in DIGITS for ch in text)


def _strip_sign(text: str) -> str:
    return text[1:] if text[:1] in ("+", "-") else text


def parse_integer(value: str) -> int:
    """Optional sign followed by ASCII digits. Raises ValueError otherwise."""
    if not _is_digits(_strip_sign(value)):
        raise ValueError(f"Invalid integer: {value!r}")
    return int(value)


def parse_decimal(value: str) -> float:
    """Optional sign, ASCII digits and at most one '.' ('12', '-1.5', '.5'). Raises ValueError otherwise."""
    whole, _, fraction = _strip_sign(value).partition(".")
    if not (whole or fraction) or (whole and not _is_digits(whole)) or (fraction and not _is_digits(fraction)):
        raise ValueError(f"Invalid number: {value!r}")
    return float(value)


def parse_percentage(value: str) -> float:
    """'10%' -> 0.1. Raises ValueError if the suffix is missing or the number is invalid."""
    if not value.endswith("%"):
        raise ValueError(f"Percentages must end with %: {value!r}")
    return parse_decimal(value[:-1]) / 100


def parse_anchor(value: str) -> Optional[Anchor]:
    anchor = ANCHORS.get(value)
    if anchor is None:
        logger.warning("Invalid anchor value: %s", value)
    return anchor


def parse_alignment(value: str) -> Optional[Alignment]:
    alignment = ALIGNMENTS.get(value)
    if alignment is None:
        logger.warning("Invalid alignment value: %s", value)
    return alignment


def alignment_to_anchor(alignment: Optional[Alignment]) -> Optional[Anchor]:
    if alignment is None:
        return None
    return ALIGNMENT_ANCHORS[alignment]


def parse_line_value(value: str) -> PositionHolder:
    """
    'line' setting: '10%', '-1', '10%,end'.
    Percentages are fractions of the viewport, anything else is a line number.
    """
    spec, anchor_spec = split_first(value, ",")
    anchor = parse_anchor(anchor_spec) if anchor_spec is not None else None

    if spec.endswith("%"):
        return PositionHolder(parse_percentage(spec), anchor, LineType.FRACTION)
    return PositionHolder(float(parse_integer(spec)), anchor, LineType.NUMBER)


def parse_position_value(value: str) -> PositionHolder:
    """'position' setting: '50%' or '50%,start'."""
    spec, anchor_spec = split_first(value, ",")
    anchor = parse_anchor(anchor_spec) if anchor_spec is not None else None
    return PositionHolder(parse_percentage(spec), anchor, None)


# --- SETTINGS LIST ---
def _apply_setting(name: str, value: str, settings: CueSettings) -> None:
    if name == "line":
        holder = parse_line_value(value)
        settings.line = holder.position
        settings.line_type = holder.line_type
        settings.line_anchor = holder.anchor
    elif name == "align":
        settings.text_alignment = parse_alignment(value)
    elif name == "position":
        holder = parse_position_value(value)
        settings.position = holder.position
        settings.position_anchor = holder.anchor
    elif name == "size":
        settings.size = parse_percentage(value)
    else:
        logger.warning("Unknown cue setting %s:%s", name, value)


def parse_cue_settings(text: str) -> CueSettings:
    """
    Parses a whitespace-separated list of 'name:value' settings.
    Never raises: malformed tokens are logged and skipped.
    """
    settings = CueSettings()

    for token in split_fields(text):
        pair = split_setting(token)
        if pair is None:
            continue
        name, value = pair
        try:
            _apply_setting(name, value, settings)
        except ValueError:
            logger.warning("Skipping bad cue setting: %s", token)

    # Computed position alignment comes from the text alignment unless set explicitly
    if settings.position_anchor is None:
        settings.position_anchor = alignment_to_anchor(settings.text_alignment)

    return settings
