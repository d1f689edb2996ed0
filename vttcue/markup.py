"""
vttcue/markup.py

Normalizes the small markup subset allowed in cue text into a list of Fragments.

Recognized:
- <b>, <i>, <u> (optionally with class annotations, e.g. <i.loud>) open a style until the matching close tag.
- <br>, <br/>, <br /> produce a line break.
- HTML character references (&amp;, &lt;, &#233; ...) are decoded; decoded control characters become spaces.

Everything else (unknown tags, stray '<', unmatched close tags) is kept as literal text.
This function never raises.
"""

import html
import unicodedata
from typing import List, Optional, Tuple

from .models import LINE_BREAK, Fragment

STYLE_TAGS = ("b", "i", "u")
BREAK_TAG = "br"


def _parse_tag(body: str) -> Tuple[bool, str]:
    """'/i' -> (True, 'i'); 'b.loud' -> (False, 'b'); 'br /' -> (False, 'br')."""
    body = body.strip()
    is_close = body.startswith("/")
    if is_close:
        body = body[1:].strip()
    if body.endswith("/"):
        body = body[:-1].strip()
    name = body.split(".", 1)[0]
    return is_close, name.lower()


def _decode_text(raw: str) -> str:
    """Decodes character references. Control characters ('&#10;' ...) become spaces so only <br> breaks a line."""
    text = html.unescape(raw)
    return "".join(" " if unicodedata.category(ch) == "Cc" else ch for ch in text)


class _FragmentBuilder:
    def __init__(self):
        self.fragments: List[Fragment] = []
        self.open_tags: List[str] = []
        self.buffer: List[str] = []

    def add_text(self, text: str):
        self.buffer.append(text)

    def flush(self):
        if not self.buffer:
            return
        text = _decode_text("".join(self.buffer))
        self.buffer = []
        if not text:
            return

        fragment = Fragment(
            text=text,
            bold="b" in self.open_tags,
            italic="i" in self.open_tags,
            underline="u" in self.open_tags,
        )
        last = self.fragments[-1] if self.fragments else None
        if last is not None and not last.is_line_break and \
                (last.bold, last.italic, last.underline) == (fragment.bold, fragment.italic, fragment.underline):
            self.fragments[-1] = Fragment(last.text + fragment.text, last.bold, last.italic, last.underline)
        else:
            self.fragments.append(fragment)

    def handle_tag(self, body: str) -> bool:
        """Applies a tag. Returns False when the tag is not part of the subset (caller keeps it literal)."""
        is_close, name = _parse_tag(body)

        if name == BREAK_TAG and not is_close:
            self.flush()
            self.fragments.append(LINE_BREAK)
            return True

        if name in STYLE_TAGS:
            if not is_close:
                self.flush()
                self.open_tags.append(name)
                return True
            if name in self.open_tags:
                self.flush()
                # Close the most recent matching tag
                idx = len(self.open_tags) - 1 - self.open_tags[::-1].index(name)
                del self.open_tags[idx]
                return True

        return False


def _find_tag_end(text: str, start: int) -> Optional[int]:
    """Index of the '>' closing the tag opened at `start`, or None if another '<' comes first."""
    close = text.find(">", start + 1)
    if close == -1:
        return None
    other = text.find("<", start + 1, close)
    return None if other != -1 else close


def parse_markup(text: str) -> Tuple[Fragment, ...]:
    builder = _FragmentBuilder()

    i = 0
    n = len(text)
    while i < n:
        lt = text.find("<", i)
        if lt == -1:
            builder.add_text(text[i:])
            break

        if lt > i:
            builder.add_text(text[i:lt])

        end = _find_tag_end(text, lt)
        if end is not None and builder.handle_tag(text[lt + 1:end]):
            i = end + 1
        else:
            # Not a tag we understand: keep the '<' and continue scanning after it
            builder.add_text("<")
            i = lt + 1

    builder.flush()
    return tuple(builder.fragments)
