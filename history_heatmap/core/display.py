# display.py
# Turns ranked entries into display lines (share of the top count)
# and draws the partial-block heat bars.

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Sequence

from .ranker import RankedEntry

# eighth-block glyphs, index == number of eighths filled
BARS = " ▏▎▍▌▋▊▉█"
DEFAULT_BAR_WIDTH = 8


@dataclass(frozen=True)
class DisplayLine:
    """A RankedEntry that knows its share of the best entry's count."""
    entry: RankedEntry
    pct: float

    @property
    def count(self) -> int:
        return self.entry.count

    @property
    def full_text(self) -> str:
        return self.entry.full_text


def to_display_lines(entries: Sequence[RankedEntry]) -> List[DisplayLine]:
    """
    pct = count / count of the first (best) entry.
    Empty input gives no lines; a best count of 0 gives pct 0.0 everywhere.
    """
    if not entries:
        return []
    top = entries[0].count
    if top == 0:
        return [DisplayLine(e, 0.0) for e in entries]
    return [DisplayLine(e, e.count / top) for e in entries]


def pct_to_bar(pct: float, width: int = DEFAULT_BAR_WIDTH) -> str:
    """
    Render pct in [0, 1] as `width` cells of eighth-blocks.
    Cells fill left to right, the last partly filled cell gets a partial glyph.
    """
    if width <= 0:
        return ""
    full = len(BARS) - 1
    pct = min(max(pct, 0.0), 1.0)
    # halves round up, not to even
    eighths = int(math.floor(pct * full * width + 0.5))
    cells = []
    for _ in range(width):
        idx = min(eighths, full)
        eighths -= idx
        cells.append(BARS[idx])
    return "".join(cells)
