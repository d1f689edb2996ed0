"""
vttcue/timing.py

Timestamp conversion between WebVTT text and integer microseconds.
"""

DIGITS = "0123456789"


def _parse_digits(part: str, token: str) -> int:
    if not part or any(ch not in DIGITS for ch in part):
        raise ValueError(f"Invalid timestamp: {token!r}")
    return int(part)


def parse_timestamp_us(token: str) -> int:
    """
    Parses '[[HH:]MM:]SS.mmm' into microseconds.

    The fraction is read as a whole number of milliseconds ('1.5' is 1s + 5ms).
    Raises ValueError on any malformed input.
    """
    whole, sep, millis = token.partition(".")
    if not sep:
        raise ValueError(f"Invalid timestamp (missing '.'): {token!r}")

    value = 0
    for part in whole.split(":"):
        value = value * 60 + _parse_digits(part, token)
    return (value * 1000 + _parse_digits(millis, token)) * 1000


def format_timestamp_us(value_us: int) -> str:
    """Formats microseconds as HH:MM:SS.mmm (used for display only)."""
    total_ms = max(0, int(value_us)) // 1000
    hours, rem = divmod(total_ms, 3600 * 1000)
    minutes, rem = divmod(rem, 60 * 1000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"
