import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import GridConfig
from .errors import AlreadyOccupied, InvalidTimeRange
from .models import Assignment, BreakWindow, GridCell, PeriodTiming
from .timemodel import duration, format_range

logger = logging.getLogger(__name__)


class WeeklyGrid:
    """days x periods cells, each holding at most one committed Assignment.

    Cells for the configured period timings exist from construction. Manual
    placement may commit at a period index past the timing list; such a cell
    takes its bounds from the assignment and disappears again on ``clear``.
    """

    def __init__(self, days: Sequence[str], timings: Sequence[PeriodTiming],
                 breaks: Iterable[BreakWindow] = ()):
        self.days: List[str] = list(days)
        self.timings: List[PeriodTiming] = list(timings)
        self.breaks: List[BreakWindow] = sorted(breaks, key=lambda b: b.start)
        self._cells: Dict[str, Dict[int, GridCell]] = {}
        for day in self.days:
            self._cells[day] = {
                idx: GridCell(day, idx, t.start, t.end) for idx, t in enumerate(self.timings)
            }

    @classmethod
    def from_config(cls, config: GridConfig) -> "WeeklyGrid":
        return cls(config.working_days, config.period_timings, config.all_breaks)

    @classmethod
    def empty(cls, config: GridConfig) -> "WeeklyGrid":
        """No fixed periods; cells appear as manual slots are committed."""
        return cls(config.working_days, (), config.all_breaks)

    @property
    def n_periods(self) -> int:
        return len(self.timings)

    def _day(self, day: str) -> Dict[int, GridCell]:
        try:
            return self._cells[day]
        except KeyError:
            raise KeyError(f"Unknown day {day!r}") from None

    def cell(self, day: str, period: int) -> GridCell:
        cells = self._day(day)
        if period not in cells:
            raise KeyError(f"No cell {day} #{period}")
        return cells[period]

    def has_cell(self, day: str, period: int) -> bool:
        return period in self._day(day)

    def cells(self) -> List[GridCell]:
        """All cells, days in configured order then periods in index order."""
        out: List[GridCell] = []
        for day in self.days:
            cells = self._cells[day]
            out.extend(cells[p] for p in sorted(cells))
        return out

    def open_cells(self) -> List[GridCell]:
        return [c for c in self.cells() if not c.occupied]

    def is_occupied(self, day: str, period: int) -> bool:
        cells = self._day(day)
        return period in cells and cells[period].occupied

    def commit(self, day: str, period: int, assignment: Assignment) -> GridCell:
        duration(assignment.start, assignment.end)
        cells = self._day(day)
        cell = cells.get(period)
        if cell is None:
            if period < 0:
                raise KeyError(f"No cell {day} #{period}")
            cell = GridCell(day, period, assignment.start, assignment.end)
            cells[period] = cell
        elif cell.occupied:
            raise AlreadyOccupied(day, period)
        elif (cell.start, cell.end) != (assignment.start, assignment.end):
            raise InvalidTimeRange(
                f"Assignment {format_range(assignment.start, assignment.end)} "
                f"does not match cell {day} #{period} ({format_range(cell.start, cell.end)})"
            )
        cell.assignment = assignment
        logger.debug("committed %s #%d -> %s", day, period, assignment.activity_id or assignment.kind)
        return cell

    def clear(self, day: str, period: int) -> Optional[Assignment]:
        cells = self._day(day)
        cell = self.cell(day, period)
        previous = cell.assignment
        cell.assignment = None
        if period >= self.n_periods:
            del cells[period]
        return previous

    def day_cells(self, day: str) -> List[GridCell]:
        """Every cell of a day, open or not, ordered by start time."""
        return sorted(self._day(day).values(), key=lambda c: (c.start, c.period))

    def occupants_of(self, day: str) -> List[GridCell]:
        """Committed cells of a day, ordered by start time."""
        return [c for c in self.day_cells(day) if c.occupied]

    def cell_at(self, day: str, start: int, end: int) -> Optional[GridCell]:
        for c in self.day_cells(day):
            if (c.start, c.end) == (start, end):
                return c
        return None

    def day_load(self, day: str) -> int:
        return sum(1 for c in self._day(day).values() if c.occupied)

    def last_period(self, day: str) -> int:
        cells = self._day(day)
        return max(cells) if cells else -1

    def snapshot(self) -> List[Tuple[str, int, Optional[Assignment]]]:
        return [(c.day, c.period, c.assignment) for c in self.cells()]
