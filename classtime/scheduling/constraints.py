from typing import Collection, List, Optional, Tuple

from ..grid import WeeklyGrid
from ..models import SLOT_CLASS, Activity, GridCell
from ..timemodel import format_range, format_time, overlaps


def span_cells(grid: WeeklyGrid, day: str, period: int, span: int) -> Optional[List[GridCell]]:
    """The base cells a placement starting at ``period`` would cover, or None if it runs off the day."""
    if span < 1 or period < 0:
        return None
    cells = []
    for p in range(period, period + span):
        if not grid.has_cell(day, p):
            return None
        cells.append(grid.cell(day, p))
    return cells


def conflict_reason(grid: WeeklyGrid, day: str, start: int, end: int, activity: Activity,
                    ignore: Collection[Tuple[str, int]] = ()) -> Optional[str]:
    """Why ``activity`` cannot take [start, end) on ``day``; None when it can."""
    for b in grid.breaks:
        if overlaps(start, end, b.start, b.end):
            return f"Overlaps {b.name} ({format_range(b.start, b.end)})"
    for c in grid.occupants_of(day):
        if c.key in ignore or not overlaps(start, end, c.start, c.end):
            continue
        a = c.assignment
        if a.kind != SLOT_CLASS:
            return f"Overlaps {a.kind} ({format_range(c.start, c.end)})"
        if a.instructor_id is not None and a.instructor_id == activity.instructor_id:
            return f"Instructor {activity.instructor_id} already assigned at {format_time(c.start)}"
        if a.room_id is not None and a.room_id == activity.room_id:
            return f"Room {activity.room_id} already booked at {format_time(c.start)}"
    return None


def slot_reason(grid: WeeklyGrid, day: str, period: int, start: int, end: int) -> Optional[str]:
    """Why [start, end) cannot be committed at index ``period`` given the cells the day already has.

    An existing cell must be open and have exactly these bounds. A new cell
    must not overlap any cell of the day, open or committed.
    """
    if grid.has_cell(day, period):
        cell = grid.cell(day, period)
        if cell.occupied:
            return f"Period #{period} is already taken"
        if (cell.start, cell.end) != (start, end):
            return f"Period #{period} runs {format_range(cell.start, cell.end)}"
        return None
    for c in grid.day_cells(day):
        if overlaps(start, end, c.start, c.end):
            return f"Overlaps period #{c.period} ({format_range(c.start, c.end)})"
    return None


def is_legal(grid: WeeklyGrid, day: str, period: int, activity: Activity,
             span: Optional[int] = None, window=None) -> bool:
    """Whether ``activity`` may be committed at ``period``.

    Without ``window`` the placement covers ``span`` existing base cells. With a
    manual-mode ``window`` (anything with ``start`` and ``end``), the window's
    own bounds are checked, and ``period`` may name a cell not created yet.
    """
    if window is not None:
        return (slot_reason(grid, day, period, window.start, window.end) is None
                and conflict_reason(grid, day, window.start, window.end, activity) is None)
    if span is None:
        span = activity.duration
    cells = span_cells(grid, day, period, span)
    if cells is None or any(c.occupied for c in cells):
        return False
    # concrete times, so a multi-period span is checked against every base period it covers
    return conflict_reason(grid, day, cells[0].start, cells[-1].end, activity) is None
