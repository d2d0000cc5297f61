from classtime.config import GridConfig
from classtime.grid import WeeklyGrid
from classtime.models import Assignment, BreakWindow, PeriodTiming
from classtime.scheduling.constraints import conflict_reason, is_legal, span_cells
from classtime.timemodel import parse_time

from helpers import make_activity, make_timings


def _grid(timings, breaks=()):
    cfg = GridConfig(working_days=["Monday"], period_timings=timings, lunch=None, breaks=breaks)
    return WeeklyGrid.from_config(cfg)


def _commit_class(grid, period, act):
    cell = grid.cell("Monday", period)
    grid.commit("Monday", period, Assignment.for_class(act, cell.start, cell.end))


def test_empty_grid_is_vacuously_legal():
    grid = _grid(make_timings("09:00", 3))
    assert is_legal(grid, "Monday", 0, make_activity("A"))


def test_occupied_cell_is_illegal():
    grid = _grid(make_timings("09:00", 3))
    _commit_class(grid, 1, make_activity("A", instructor="T1", room="R1"))
    assert not is_legal(grid, "Monday", 1, make_activity("B", instructor="T2", room="R2"))


def test_back_to_back_room_use_is_not_a_conflict():
    # 09:00-09:55 and 09:55-10:50 share only the boundary
    grid = _grid(make_timings("09:00", 2))
    _commit_class(grid, 0, make_activity("A", instructor="T1", room="R1"))
    other = make_activity("B", instructor="T2", room="R1")
    assert is_legal(grid, "Monday", 1, other)
    _commit_class(grid, 1, other)
    assert grid.is_occupied("Monday", 1)


def test_overlapping_instructor_and_room_are_rejected():
    grid = _grid(make_timings("09:00", 2))
    busy = make_activity("X", instructor="T1", room="R9")
    grid.commit("Monday", 5, Assignment.for_class(busy, parse_time("09:30"), parse_time("10:25")))

    same_instructor = make_activity("A", instructor="T1", room="R1")
    same_room = make_activity("B", instructor="T2", room="R9")
    unrelated = make_activity("C", instructor="T3", room="R3")
    for period in (0, 1):
        assert not is_legal(grid, "Monday", period, same_instructor)
        assert not is_legal(grid, "Monday", period, same_room)
        assert is_legal(grid, "Monday", period, unrelated)


def test_conflict_reason_names_the_clash():
    grid = _grid(make_timings("09:00", 2))
    busy = make_activity("X", instructor="T1", room="R9")
    grid.commit("Monday", 5, Assignment.for_class(busy, parse_time("09:30"), parse_time("10:25")))
    reason = conflict_reason(grid, "Monday", parse_time("09:00"), parse_time("09:55"),
                             make_activity("A", instructor="T1"))
    assert reason == "Instructor T1 already assigned at 09:30"
    assert conflict_reason(grid, "Monday", parse_time("09:00"), parse_time("09:55"),
                           make_activity("A", instructor="T1"), ignore=[("Monday", 5)]) is None


def test_break_window_is_never_legal():
    tea = BreakWindow("Tea", parse_time("10:45"), parse_time("11:00"))
    timings = [PeriodTiming(parse_time("09:55"), parse_time("10:50")),
               PeriodTiming(parse_time("11:00"), parse_time("11:55"))]
    grid = _grid(timings, breaks=[tea])
    act = make_activity("A")
    assert not is_legal(grid, "Monday", 0, act)
    assert is_legal(grid, "Monday", 1, act)
    assert conflict_reason(grid, "Monday", timings[0].start, timings[0].end, act) == "Overlaps Tea (10:45 - 11:00)"


def test_multi_period_span_checks_every_base_period():
    grid = _grid(make_timings("09:00", 4))
    _commit_class(grid, 2, make_activity("A", instructor="T9", room="R9"))
    double = make_activity("B", duration=2)
    assert is_legal(grid, "Monday", 0, double)
    assert not is_legal(grid, "Monday", 1, double)  # would cover period 2
    assert not is_legal(grid, "Monday", 3, double)  # runs off the day


def test_span_cells():
    grid = _grid(make_timings("09:00", 3))
    assert [c.period for c in span_cells(grid, "Monday", 1, 2)] == [1, 2]
    assert span_cells(grid, "Monday", 2, 2) is None
    assert span_cells(grid, "Monday", 0, 0) is None


def test_committed_break_cell_blocks_overlapping_window():
    grid = _grid(make_timings("09:00", 2))
    grid.commit("Monday", 4, Assignment.for_break("break", parse_time("09:40"), parse_time("09:55")))
    reason = conflict_reason(grid, "Monday", parse_time("09:30"), parse_time("10:25"), make_activity("A"))
    assert reason == "Overlaps break (09:40 - 09:55)"
    assert is_legal(grid, "Monday", 1, make_activity("A"))
