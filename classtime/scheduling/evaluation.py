from collections import defaultdict
from typing import Dict, Sequence

import networkx as nx

from ..config import GridConfig
from ..models import Activity, ScheduleResult
from ..timemodel import overlaps
from .validation import breaks_ok, double_booking_ok, quotas_ok


def _instructor_overload(activities: Sequence[Activity], config: GridConfig) -> Dict[str, int]:
    """Instructors whose weekly demand exceeds the grid's break-free cells."""
    free_periods = sum(
        1 for t in config.period_timings
        if not any(overlaps(t.start, t.end, b.start, b.end) for b in config.all_breaks)
    )
    capacity = free_periods * len(config.working_days)
    demand: Dict[str, int] = defaultdict(int)
    for act in activities:
        demand[act.instructor_id] += act.periods_per_week
    return {i: d for i, d in demand.items() if d > capacity}


def summary(G: nx.Graph, activities: Sequence[Activity], config: GridConfig,
            result: ScheduleResult) -> str:
    grid = result.grid
    total_cells = len(grid.cells())
    used = total_cells - len(grid.open_cells())
    ok_booking = double_booking_ok(G, result)
    ok_breaks = breaks_ok(result, config)
    ok_quota = quotas_ok(activities, result)
    lines = [
        f"Activities: {G.number_of_nodes()}  Shared-resource pairs: {G.number_of_edges()}",
        f"Grid: {len(grid.days)} days x {grid.n_periods} periods  Cells used: {used}/{total_cells}",
        f"Valid (double-booking): {ok_booking}  Valid (breaks): {ok_breaks}  Valid (quotas): {ok_quota}",
    ]
    names = {a.id: a.label for a in activities}
    for s in result.shortfalls:
        lines.append(f"Shortfall: {names.get(s.activity_id, s.activity_id)} missing {s.missing} period(s)")
    for instructor, demand in sorted(_instructor_overload(activities, config).items()):
        lines.append(f"Warning: instructor {instructor} needs {demand} periods; the grid cannot hold them.")
    return "\n".join(lines) + "\n"
