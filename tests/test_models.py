import pytest

from classtime.config import GridConfig
from classtime.grid import WeeklyGrid
from classtime.models import Activity, Assignment, Instructor, Room, ScheduleResult, Shortfall

from helpers import make_timings


def test_activity_label_prefers_code():
    assert Activity("S1", "Data Structures", 3, "T1", "R1", code="DS").label == "DS"
    assert Activity("S2", "Networks", 3, "T1", "R1").label == "Networks"


def test_lookup_values_are_plain_records():
    assert Instructor("T1", "Dr. Rao", short_name="RR").short_name == "RR"
    assert Room("R101", "Room 101").capacity is None


def test_schedule_result_queries():
    cfg = GridConfig(working_days=["Monday"], period_timings=make_timings("09:00", 3), lunch=None)
    grid = WeeklyGrid.from_config(cfg)
    act = Activity("S1", "Data Structures", 3, "T1", "R1")
    for p in (0, 2):
        cell = grid.cell("Monday", p)
        grid.commit("Monday", p, Assignment.for_class(act, cell.start, cell.end))
    result = ScheduleResult(grid=grid, shortfalls=[Shortfall("S1", 1)])

    assert not result.complete
    assert result.placed_count("S1") == 2
    assert result.placements() == {"S1": [("Monday", 0), ("Monday", 2)]}
    assert result.shortfall_for("S1").missing == 1
    assert result.shortfall_for("S2") is None


def test_assignment_rejects_unknown_kinds():
    with pytest.raises(ValueError):
        Assignment(kind="nap", start=540, end=595)
