"""
vttcue/grammar.py

Line grammars of the WebVTT format, written as small composable checks
(affix match, delimiter split, whitespace classes) instead of regular expressions.

Grammars:
- Header:      [BOM] "WEBVTT" [(space|tab) any-text]
- Comment:     "NOTE" [(space|tab) any-text]
- Cue header:  non-ws-run  ws  "-->"  ws  non-ws-run  [settings-tail]
- Setting:     name ":" value   (both non-empty, no whitespace)
"""

from typing import List, Optional, Tuple

from .config import BYTE_ORDER_MARK, COMMENT_TOKEN, CUE_ARROW, HEADER_TOKEN

# ASCII whitespace only; the format does not treat other Unicode spaces as separators
WHITESPACE = " \t\n\r\x0b\x0c"
KEYWORD_SEPARATORS = " \t"


def is_whitespace(char: str) -> bool:
    return char != "" and char in WHITESPACE


def split_fields(text: str, maxsplit: int = -1) -> List[str]:
    """
    Splits on runs of ASCII whitespace, like str.split() with no separator.
    With `maxsplit`, the last element is the untouched remainder (leading whitespace removed).
    """
    fields = []
    i, n = 0, len(text)
    while i < n:
        while i < n and is_whitespace(text[i]):
            i += 1
        if i >= n:
            break
        if maxsplit >= 0 and len(fields) == maxsplit:
            fields.append(text[i:])
            break
        start = i
        while i < n and not is_whitespace(text[i]):
            i += 1
        fields.append(text[start:i])
    return fields


def is_keyword_line(line: str, keyword: str) -> bool:
    """True if the whole line is `keyword`, optionally followed by a space/tab and any text."""
    if not line.startswith(keyword):
        return False
    rest = line[len(keyword):]
    return rest == "" or rest[0] in KEYWORD_SEPARATORS


def is_header_line(line: Optional[str]) -> bool:
    if line is None:
        return False
    if line.startswith(BYTE_ORDER_MARK):
        line = line[len(BYTE_ORDER_MARK):]
    return is_keyword_line(line, HEADER_TOKEN)


def is_comment_line(line: str) -> bool:
    return is_keyword_line(line, COMMENT_TOKEN)


def split_cue_header(line: str) -> Optional[Tuple[str, str, str]]:
    """
    Matches a cue timing line.
    Returns (start_text, end_text, settings_text) or None when the line is not a cue header.
    """
    # The start token must begin the line
    if not line or is_whitespace(line[0]):
        return None

    parts = split_fields(line, maxsplit=3)
    if len(parts) < 3 or parts[1] != CUE_ARROW:
        return None

    settings = parts[3] if len(parts) == 4 else ""
    return parts[0], parts[2], settings


def split_setting(token: str) -> Optional[Tuple[str, str]]:
    """
    Splits a 'name:value' token at the first colon after the first character.
    Returns None if the token has no such colon or the value is empty.
    """
    colon = token.find(":", 1)
    if colon == -1 or colon == len(token) - 1:
        return None
    return token[:colon], token[colon + 1:]


def split_first(value: str, delimiter: str) -> Tuple[str, Optional[str]]:
    """'50%,end' -> ('50%', 'end'); '50%' -> ('50%', None)."""
    head, sep, tail = value.partition(delimiter)
    return head, (tail if sep else None)
