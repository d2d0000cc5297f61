import pytest

from classtime.config import GridConfig

from helpers import WEEKDAYS, make_timings


@pytest.fixture
def config_5x6() -> GridConfig:
    return GridConfig(working_days=WEEKDAYS, period_timings=make_timings("08:00", 6), lunch=None)


@pytest.fixture
def college_config() -> GridConfig:
    return GridConfig.from_dict({
        "working_days": WEEKDAYS,
        "day_start": "09:00",
        "day_end": "16:30",
        "class_duration": 55,
        "lunch": {"name": "Lunch", "start": "12:30", "end": "13:30"},
        "breaks": [{"name": "Tea", "start": "10:50", "end": "11:05"}],
    })
