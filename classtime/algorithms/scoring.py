from typing import Iterable, Optional

from ..grid import WeeklyGrid
from ..models import Activity, GridCell
from ..scheduling.constraints import is_legal

ADJACENCY_WEIGHT = 2
DAY_LOAD_WEIGHT = 3


def adjacent_committed(grid: WeeklyGrid, day: str, first: int, last: int) -> int:
    return sum(1 for p in (first - 1, last + 1) if p >= 0 and grid.is_occupied(day, p))


def score_cell(grid: WeeklyGrid, cell: GridCell, span: int = 1) -> int:
    """Lower is better: spreads periods across days and front-loads each day."""
    last = cell.period + span - 1
    return (
        ADJACENCY_WEIGHT * adjacent_committed(grid, cell.day, cell.period, last)
        + cell.period
        + DAY_LOAD_WEIGHT * grid.day_load(cell.day)
    )


def best_slot_for(grid: WeeklyGrid, activity: Activity, candidates: Iterable[GridCell],
                  span: Optional[int] = None) -> Optional[GridCell]:
    """First legal candidate with the lowest score, in candidate order."""
    if span is None:
        span = activity.duration
    best: Optional[GridCell] = None
    best_score = 0
    for cell in candidates:
        if not is_legal(grid, cell.day, cell.period, activity, span):
            continue
        s = score_cell(grid, cell, span)
        if best is None or s < best_score:
            best, best_score = cell, s
    return best
