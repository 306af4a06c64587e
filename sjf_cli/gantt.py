from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlot

PALETTE = [
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "bright_red",
    "bright_green",
    "bright_blue",
    "bright_magenta",
]


class ColorMap:
    """
    Hands out palette colors by process id, in order of first request.

    The palette cycles once exhausted; an id keeps its color for the lifetime
    of the map, regardless of where the process sits in any list.
    """

    def __init__(self, palette: Sequence[str] = PALETTE) -> None:
        self._palette = list(palette)
        self._assigned: Dict[str, str] = {}

    def color_for(self, pid: str) -> str:
        if pid not in self._assigned:
            idx = len(self._assigned) % len(self._palette)
            self._assigned[pid] = self._palette[idx]
        return self._assigned[pid]

    def forget(self, pid: str) -> None:
        self._assigned.pop(pid, None)


def _layout(slots: Sequence[ScheduledSlot], scale: int) -> List[Tuple[int, int, Optional[ScheduledSlot]]]:
    """
    Split the chart into (column, width, slot) segments; slot is None for idle gaps.
    """
    segments: List[Tuple[int, int, Optional[ScheduledSlot]]] = []
    column = 0
    last_time = 0
    for sl in slots:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            segments.append((column, idle_gap * scale, None))
            column += idle_gap * scale
        width = sl.width(scale)
        segments.append((column, width, sl))
        column += width
        last_time = sl.completion_time
    return segments


def _time_marks(segments: List[Tuple[int, int, Optional[ScheduledSlot]]]) -> str:
    marks: List[Tuple[int, int]] = [(0, 0)]
    for column, width, sl in segments:
        if sl is None:
            continue
        if marks[-1][1] != sl.start_time:
            marks.append((column, sl.start_time))
        marks.append((column + width, sl.completion_time))

    out = ""
    last = len(marks) - 1
    for i, (column, value) in enumerate(marks):
        text = str(value)
        if out and len(out) >= column:
            # No room at this boundary; only the closing time is kept.
            if i == last:
                out += " " + text
            continue
        out = out.ljust(column) + text
    return out


def _label(sl: ScheduledSlot, width: int) -> str:
    full = f"{sl.name} BT:{sl.burst_time}"
    if len(full) <= width:
        return full.ljust(width)
    return sl.name[:width].ljust(width)


def render_gantt(slots: List[ScheduledSlot], scale: int = 1) -> str:
    """
    Plain-text Gantt chart: a label row, a bar row ('=' busy, '.' idle) and
    time marks under slot boundaries that have room for them.
    """
    if not slots:
        return "(no execution)"

    slots = sorted(slots, key=lambda s: (s.start_time, s.completion_time))
    segments = _layout(slots, scale)

    labels = ""
    bar = ""
    for _, width, sl in segments:
        if sl is None:
            labels += " " * width
            bar += "." * width
        else:
            labels += _label(sl, width)
            bar += "=" * width

    return "\n".join(
        [
            "Gantt Chart:",
            labels.rstrip(),
            bar,
            _time_marks(segments),
        ]
    )


def build_rich_gantt(
    slots: List[ScheduledSlot],
    colors: Optional[ColorMap] = None,
    scale: int = 2,
) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slots:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = colors or ColorMap()
    slots = sorted(slots, key=lambda s: (s.start_time, s.completion_time))
    segments = _layout(slots, scale)

    timeline = Text()
    labels = Text()

    for _, width, sl in segments:
        if sl is None:
            timeline.append("." * width, style="dim")
            labels.append(" " * width)
            continue
        color = colors.color_for(sl.pid)
        timeline.append(" " * width, style=f"on {color}")
        labels.append(_label(sl, width), style=f"bold {color}")

    table = Table.grid(padding=(0, 0))
    table.add_row(labels)
    table.add_row(timeline)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, _time_marks(segments)
