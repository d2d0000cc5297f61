import pytest

from classtime.algorithms.greedy import order_activities
from classtime.config import GridConfig
from classtime.errors import InvalidConfiguration
from classtime.graph_build import build_resource_conflict_graph
from classtime.models import SLOT_CLASS
from classtime.scheduling.generate import generate
from classtime.scheduling.validation import breaks_ok, double_booking_ok, quotas_ok

from helpers import make_activity, make_timings


def test_single_activity_spreads_across_days(config_5x6):
    act = make_activity("A", periods=3)
    result = generate([act], config_5x6)
    cells = result.cells_for("A")
    assert len({c.key for c in cells}) == 3
    assert [c.key for c in cells] == [("Monday", 0), ("Tuesday", 0), ("Wednesday", 0)]
    assert result.complete


def test_shared_instructor_on_a_tiny_grid_records_shortfall():
    cfg = GridConfig(working_days=["Monday"], period_timings=make_timings("09:00", 2), lunch=None)
    first = make_activity("A", periods=2, instructor="T1", room="R1")
    second = make_activity("B", periods=2, instructor="T1", room="R2")
    result = generate([first, second], cfg)

    placed = sum(result.placed_count(a.id) for a in (first, second))
    assert placed <= 2
    assert result.shortfall_for("A") is None
    assert result.shortfall_for("B").missing >= 1
    G = build_resource_conflict_graph([first, second])
    assert double_booking_ok(G, result)


def test_back_to_back_room_sharing_is_scheduled():
    cfg = GridConfig(working_days=["Monday"], period_timings=make_timings("09:00", 2), lunch=None)
    acts = [make_activity("A", instructor="T1", room="R1"), make_activity("B", instructor="T2", room="R1")]
    result = generate(acts, cfg)
    assert result.complete
    assert {c.key for c in result.grid.cells() if c.occupied} == {("Monday", 0), ("Monday", 1)}


def test_larger_quotas_go_first_and_ties_keep_input_order():
    acts = [make_activity("A", periods=2), make_activity("B", periods=3), make_activity("C", periods=3)]
    assert [a.id for a in order_activities(acts)] == ["B", "C", "A"]


def test_generation_is_deterministic(college_config):
    acts = [
        make_activity("DS", periods=4, instructor="T1", room="R101"),
        make_activity("OS", periods=4, instructor="T2", room="R101"),
        make_activity("DM", periods=3, instructor="T1", room="R102"),
        make_activity("LAB", periods=2, instructor="T2", room="LAB1", duration=2),
    ]
    first = generate(acts, college_config)
    second = generate(acts, college_config)
    assert first.grid.snapshot() == second.grid.snapshot()
    assert first.shortfalls == second.shortfalls


def test_schedule_properties_hold(college_config):
    acts = [
        make_activity("DS", periods=4, instructor="T1", room="R101"),
        make_activity("OS", periods=4, instructor="T2", room="R101"),
        make_activity("DM", periods=3, instructor="T1", room="R102"),
        make_activity("CN", periods=3, instructor="T3", room="R102"),
        make_activity("LAB", periods=2, instructor="T2", room="LAB1", duration=2),
        make_activity("TW", periods=2, instructor="T4", room="R103"),
    ]
    result = generate(acts, college_config)
    G = build_resource_conflict_graph(acts)
    assert double_booking_ok(G, result)
    assert breaks_ok(result, college_config)
    assert quotas_ok(acts, result)
    assert result.complete
    assert all(c.assignment.kind == SLOT_CLASS for c in result.grid.cells() if c.occupied)


def test_break_periods_are_never_used():
    # third period sits on top of the tea break
    timings = make_timings("09:00", 4)
    cfg = GridConfig.from_dict({
        "working_days": ["Monday", "Tuesday"],
        "period_timings": [{"start": t.label[:5], "end": t.label[-5:]} for t in timings],
        "lunch": None,
        "breaks": [{"name": "Tea", "start": "11:00", "end": "11:15"}],
    })
    result = generate([make_activity("A", periods=8)], cfg)
    used = {c.key for c in result.grid.cells() if c.occupied}
    assert ("Monday", 2) not in used and ("Tuesday", 2) not in used
    assert result.shortfall_for("A").missing == 2


def test_multi_period_activity_gets_contiguous_spans():
    cfg = GridConfig(working_days=["Monday"], period_timings=make_timings("09:00", 6), lunch=None)
    result = generate([make_activity("LAB", periods=4, duration=2)], cfg)
    assert [c.period for c in result.cells_for("LAB")] == [0, 1, 3, 4]
    assert result.complete


def test_odd_quota_finishes_with_a_single_period():
    cfg = GridConfig(working_days=["Monday"], period_timings=make_timings("09:00", 6), lunch=None)
    result = generate([make_activity("LAB", periods=3, duration=2)], cfg)
    assert result.placed_count("LAB") == 3


def test_shortfall_does_not_stop_later_activities():
    cfg = GridConfig(working_days=["Monday"], period_timings=make_timings("09:00", 3), lunch=None)
    acts = [make_activity("BIG", periods=5, instructor="T1", room="R1"),
            make_activity("SMALL", periods=1, instructor="T2", room="R2")]
    result = generate(acts, cfg)
    assert result.shortfall_for("BIG").missing == 2
    assert result.shortfall_for("SMALL").missing == 1


@pytest.mark.parametrize("bad", [
    [make_activity("A"), make_activity("A")],
    [make_activity("A", periods=0)],
    [make_activity("A", duration=0)],
])
def test_invalid_activities_abort_before_scheduling(bad, config_5x6):
    with pytest.raises(InvalidConfiguration):
        generate(bad, config_5x6)
