from collections import defaultdict
from typing import Dict, List, Sequence

import networkx as nx

from ..config import GridConfig
from ..models import SLOT_CLASS, Activity, GridCell, ScheduleResult
from ..timemodel import overlaps


def _class_cells(result: ScheduleResult) -> List[GridCell]:
    return [c for c in result.grid.cells() if c.assignment is not None and c.assignment.kind == SLOT_CLASS]


def double_booking_ok(G: nx.Graph, result: ScheduleResult) -> bool:
    by_activity: Dict[str, List[GridCell]] = defaultdict(list)
    for c in _class_cells(result):
        by_activity[c.assignment.activity_id].append(c)
    for u, v in G.edges():
        for a in by_activity.get(u, ()):
            for b in by_activity.get(v, ()):
                if a.day == b.day and overlaps(a.start, a.end, b.start, b.end):
                    return False
    return True


def breaks_ok(result: ScheduleResult, config: GridConfig) -> bool:
    for c in _class_cells(result):
        for b in config.all_breaks:
            if overlaps(c.start, c.end, b.start, b.end):
                return False
    return True


def quotas_ok(activities: Sequence[Activity], result: ScheduleResult) -> bool:
    for act in activities:
        if result.shortfall_for(act.id) is not None:
            continue
        if result.placed_count(act.id) != act.periods_per_week:
            return False
    return True
