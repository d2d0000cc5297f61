import logging
from typing import Sequence

from ..algorithms.greedy import greedy_fill
from ..config import GridConfig
from ..errors import InvalidConfiguration
from ..grid import WeeklyGrid
from ..models import Activity, ScheduleResult

logger = logging.getLogger(__name__)


def validate_activities(activities: Sequence[Activity]):
    seen = set()
    for act in activities:
        if act.id in seen:
            raise InvalidConfiguration(f"Duplicate activity id {act.id!r}")
        seen.add(act.id)
        if act.periods_per_week < 1:
            raise InvalidConfiguration(f"{act.id}: periods_per_week must be at least 1")
        if act.duration < 1:
            raise InvalidConfiguration(f"{act.id}: duration must be at least 1")


def generate(activities: Sequence[Activity], config: GridConfig) -> ScheduleResult:
    """Automatic mode: a fresh grid filled greedily. Shortfalls are reported, never raised."""
    validate_activities(activities)
    grid = WeeklyGrid.from_config(config)
    shortfalls = greedy_fill(grid, activities)
    result = ScheduleResult(grid=grid, shortfalls=shortfalls)
    logger.info("Scheduled %d activities on %d days x %d periods (%d short)",
                len(activities), len(grid.days), grid.n_periods, len(shortfalls))
    return result
