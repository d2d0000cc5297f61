"""
Manual, one-slot-at-a-time placement.

A host UI asks for the next window on a day, shows it to the user, then
commits it. Windows follow the last committed slot of the day (or the
configured day start). A class window that would run into the lunch window
causes a lunch slot to be committed first; the caller learns about it through
``Window.inserted_lunch`` and should surface it before committing its own slot.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import GridConfig
from ..errors import InvalidConfiguration, InvalidTimeRange, PlacementConflict
from ..grid import WeeklyGrid
from ..models import (SLOT_BREAK, SLOT_CLASS, SLOT_KINDS, SLOT_LUNCH, Activity,
                      Assignment, GridCell)
from ..timemodel import add_minutes, format_range, format_time
from .constraints import conflict_reason, slot_reason

logger = logging.getLogger(__name__)


@dataclass
class Window:
    start: int
    end: int
    order: int  # period index the slot will be committed at
    inserted_lunch: Optional[GridCell] = None

    @property
    def label(self) -> str:
        return format_range(self.start, self.end)


def window_length(config: GridConfig, kind: str, periods: int = 1) -> int:
    if kind not in SLOT_KINDS:
        raise ValueError(f"Unknown slot kind {kind!r}")
    if kind == SLOT_BREAK:
        return config.break_duration
    if kind == SLOT_LUNCH:
        if config.lunch is None:
            raise InvalidConfiguration("No lunch window configured")
        return config.lunch.length
    # class and free windows are whole periods
    if periods < 1:
        raise InvalidTimeRange(f"periods must be at least 1, got {periods}")
    return config.class_duration * periods


def _order_for(grid: WeeklyGrid, day: str, start: int, end: int) -> int:
    # a fixed period with these exact bounds is reused, anything else gets a fresh index
    cell = grid.cell_at(day, start, end)
    return cell.period if cell is not None else grid.last_period(day) + 1


def next_window(grid: WeeklyGrid, config: GridConfig, day: str,
                kind: str = SLOT_CLASS, periods: int = 1) -> Window:
    length = window_length(config, kind, periods)
    occupants = grid.occupants_of(day)
    start = max(c.end for c in occupants) if occupants else config.day_start
    inserted: Optional[GridCell] = None

    lunch = config.lunch
    if lunch is not None:
        if lunch.start <= start < lunch.end:
            start = lunch.end
        end = add_minutes(start, length)
        if kind != SLOT_LUNCH and start < lunch.start < end:
            # only once per call; later break windows are not cascaded through
            inserted = grid.commit(day, _order_for(grid, day, lunch.start, lunch.end),
                                   Assignment.for_break(SLOT_LUNCH, lunch.start, lunch.end))
            logger.info("Inserted %s on %s at %s", lunch.name, day, format_range(lunch.start, lunch.end))
            start = lunch.end

    end = add_minutes(start, length)
    if end > config.day_end:
        logger.warning("Window %s on %s ends after the day end %s",
                       format_range(start, end), day, format_time(config.day_end))
    return Window(start=start, end=end, order=_order_for(grid, day, start, end), inserted_lunch=inserted)


def place_next(grid: WeeklyGrid, config: GridConfig, day: str, activity: Optional[Activity] = None,
               kind: str = SLOT_CLASS, periods: int = 1) -> Tuple[Window, GridCell]:
    """Compute the next window and commit it.

    Class windows are conflict-checked first; every window must also fit the
    cells the day already has (a fixed period with the same bounds, or free time).
    """
    if kind == SLOT_CLASS and activity is None:
        raise ValueError("A class slot needs an activity")
    window = next_window(grid, config, day, kind, periods)
    reason = None
    if kind == SLOT_CLASS:
        reason = conflict_reason(grid, day, window.start, window.end, activity)
    if reason is None:
        reason = slot_reason(grid, day, window.order, window.start, window.end)
    if reason is not None:
        raise PlacementConflict(reason, window=window)
    if kind == SLOT_CLASS:
        assignment = Assignment.for_class(activity, window.start, window.end)
    else:
        assignment = Assignment.for_break(kind, window.start, window.end)
    cell = grid.commit(day, window.order, assignment)
    return window, cell
