import logging
from typing import List, Sequence

from ..grid import WeeklyGrid
from ..models import Activity, Assignment, Shortfall
from .scoring import best_slot_for

logger = logging.getLogger(__name__)


def order_activities(activities: Sequence[Activity]) -> List[Activity]:
    # sorted() is stable, so equal quotas keep their input order
    return sorted(activities, key=lambda a: a.periods_per_week, reverse=True)


def greedy_fill(grid: WeeklyGrid, activities: Sequence[Activity]) -> List[Shortfall]:
    """Place every activity's weekly periods one best-scoring slot at a time.

    No backtracking: a committed slot is never revisited. An activity that runs
    out of legal slots is recorded as a shortfall and the run moves on.
    """
    shortfalls: List[Shortfall] = []
    for act in order_activities(activities):
        remaining = act.periods_per_week
        while remaining > 0:
            span = min(act.duration, remaining)
            cell = best_slot_for(grid, act, grid.open_cells(), span=span)
            if cell is None:
                logger.warning("Could not find available slot for %s (%d of %d periods unplaced)",
                               act.label, remaining, act.periods_per_week)
                shortfalls.append(Shortfall(act.id, remaining))
                break
            for p in range(cell.period, cell.period + span):
                base = grid.cell(cell.day, p)
                grid.commit(cell.day, p, Assignment.for_class(act, base.start, base.end))
            remaining -= span
    return shortfalls
