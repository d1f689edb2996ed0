"""
vttcue/models.py

The Cue Data Model.
Stores parsed WebVTT cues in a normalized form, independent of how the renderer
chooses to lay them out.

Geometry values follow the WebVTT conventions:
- `line` is either a line number (LineType.NUMBER) or a fraction of the viewport (LineType.FRACTION).
- `position` and `size` are fractions of the viewport width (0.0 to 1.0).
- 'None' always means "unset"; the renderer applies its own defaults.
"""

import bisect
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


# --- ENUMERATIONS ---
class Anchor(Enum):
    """Which edge (or the middle) of the cue box a line/position value refers to."""
    START = "start"
    MIDDLE = "middle"
    END = "end"


class Alignment(Enum):
    """Text alignment inside the cue box."""
    NORMAL = "normal"      # 'start' / 'left'
    CENTER = "center"      # 'middle'
    OPPOSITE = "opposite"  # 'end' / 'right'


class LineType(Enum):
    NUMBER = "number"
    FRACTION = "fraction"


# --- CONTENT MODELS ---
@dataclass(frozen=True)
class Fragment:
    """
    The smallest atomic unit of cue text.
    A line break is represented as a Fragment whose text is a single newline.
    """
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_line_break(self) -> bool:
        return self.text == "\n"


LINE_BREAK = Fragment(text="\n")


@dataclass(frozen=True)
class Cue:
    """A timed caption entry: an interval, layout hints and a list of text fragments."""
    start_us: int
    end_us: int
    fragments: Tuple[Fragment, ...] = ()

    text_alignment: Optional[Alignment] = None

    # -- Vertical placement --
    line: Optional[float] = None
    line_type: Optional[LineType] = None
    line_anchor: Optional[Anchor] = None

    # -- Horizontal placement & sizing --
    position: Optional[float] = None
    position_anchor: Optional[Anchor] = None
    size: Optional[float] = None

    @property
    def text(self) -> str:
        """Plain text of the cue, line breaks rendered as newlines."""
        return "".join(f.text for f in self.fragments)

    @property
    def duration_us(self) -> int:
        return self.end_us - self.start_us


@dataclass
class PositionHolder:
    """
    Scratch result of parsing a single 'line' or 'position' setting value.
    Only lives for the duration of one call.
    """
    position: float
    anchor: Optional[Anchor] = None
    line_type: Optional[LineType] = None


# --- COLLECTION ---
@dataclass(frozen=True)
class CueCollection:
    """
    The ordered result of a parse. Document order is preserved.
    Also answers time-based queries the way a player walks a subtitle track.
    """
    cues: Tuple[Cue, ...] = ()
    event_times: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        times = set()
        for cue in self.cues:
            times.add(cue.start_us)
            times.add(cue.end_us)
        # Frozen dataclass: bypass __setattr__ for the derived field
        object.__setattr__(self, "event_times", tuple(sorted(times)))

    def __len__(self) -> int:
        return len(self.cues)

    def __iter__(self) -> Iterator[Cue]:
        return iter(self.cues)

    def __getitem__(self, index):
        return self.cues[index]

    @property
    def event_time_count(self) -> int:
        return len(self.event_times)

    def event_time(self, index: int) -> int:
        return self.event_times[index]

    @property
    def last_event_time(self) -> Optional[int]:
        return self.event_times[-1] if self.event_times else None

    def next_event_index(self, time_us: int) -> int:
        """Index of the first event time strictly after `time_us`, or -1 if there is none."""
        index = bisect.bisect_right(self.event_times, time_us)
        return index if index < len(self.event_times) else -1

    def cues_at(self, time_us: int) -> List[Cue]:
        """Cues active at `time_us` (start and end both inclusive), in document order."""
        return [c for c in self.cues if c.start_us <= time_us <= c.end_us]
