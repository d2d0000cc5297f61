"""
Grid configuration.

``GridConfig`` is the single validated value object describing the weekly
grid: working days, period timings, the lunch window, other breaks and the
durations used by manual placement. Every default is resolved when the
object is built, so call sites never fall back to constants of their own.
Configuration can be loaded from YAML with :func:`load_config`.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import yaml

from .errors import InvalidConfiguration
from .models import SLOT_BREAK, SLOT_LUNCH, BreakWindow, PeriodTiming
from .timemodel import format_time, overlaps, parse_time

DEFAULT_WORKING_DAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
DEFAULT_DAY_START = parse_time("08:30")
DEFAULT_DAY_END = parse_time("17:00")
DEFAULT_CLASS_DURATION = 55
DEFAULT_BREAK_DURATION = 15
DEFAULT_LUNCH = BreakWindow("Lunch", parse_time("12:30"), parse_time("13:30"), kind=SLOT_LUNCH)


@dataclass(frozen=True)
class GridConfig:
    working_days: Tuple[str, ...] = DEFAULT_WORKING_DAYS
    period_timings: Tuple[PeriodTiming, ...] = ()
    day_start: Optional[int] = None
    day_end: int = DEFAULT_DAY_END
    class_duration: int = DEFAULT_CLASS_DURATION
    break_duration: int = DEFAULT_BREAK_DURATION
    lunch: Optional[BreakWindow] = DEFAULT_LUNCH
    breaks: Tuple[BreakWindow, ...] = ()

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "working_days", tuple(self.working_days))
        object.__setattr__(self, "period_timings", tuple(self.period_timings))
        object.__setattr__(self, "breaks", tuple(self.breaks))

        if not self.working_days:
            raise InvalidConfiguration("At least one working day is required")
        if len(set(self.working_days)) != len(self.working_days):
            raise InvalidConfiguration(f"Duplicate working days: {list(self.working_days)}")
        if self.class_duration <= 0:
            raise InvalidConfiguration("class_duration must be positive")
        if self.break_duration <= 0:
            raise InvalidConfiguration("break_duration must be positive")

        _check_breaks(self.all_breaks)

        if self.day_start is None:
            start = self.period_timings[0].start if self.period_timings else DEFAULT_DAY_START
            object.__setattr__(self, "day_start", start)
        if self.day_end <= self.day_start:
            raise InvalidConfiguration(
                f"day_end {format_time(self.day_end)} must be after day_start {format_time(self.day_start)}"
            )

        if not self.period_timings:
            derived = derive_period_timings(
                self.day_start, self.day_end, self.class_duration, self.all_breaks
            )
            if not derived:
                raise InvalidConfiguration("No period fits between day_start and day_end")
            object.__setattr__(self, "period_timings", tuple(derived))
        _check_timings(self.period_timings)

    @property
    def all_breaks(self) -> List[BreakWindow]:
        windows = list(self.breaks)
        if self.lunch is not None:
            windows.append(self.lunch)
        return sorted(windows, key=lambda b: b.start)

    @property
    def n_periods(self) -> int:
        return len(self.period_timings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GridConfig":
        """Build from plain data (``HH:MM`` strings, lists of mappings); unknown keys are ignored."""
        kwargs: Dict[str, Any] = {}
        try:
            if "working_days" in data:
                kwargs["working_days"] = [str(d).strip() for d in data["working_days"]]
            if "period_timings" in data:
                kwargs["period_timings"] = [
                    PeriodTiming(parse_time(t["start"]), parse_time(t["end"]))
                    for t in data["period_timings"] or []
                ]
            for key in ("day_start", "day_end"):
                if data.get(key) is not None:
                    kwargs[key] = parse_time(data[key])
            for key in ("class_duration", "break_duration"):
                if data.get(key) is not None:
                    kwargs[key] = int(data[key])
            if "lunch" in data:
                lunch = data["lunch"]
                kwargs["lunch"] = None if lunch is None else _break_from(lunch, SLOT_LUNCH, "Lunch")
            if "breaks" in data:
                kwargs["breaks"] = [_break_from(b, SLOT_BREAK, "Break") for b in data["breaks"] or []]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Malformed configuration: {e}") from e
        return cls(**kwargs)


def _break_from(rec: Mapping[str, Any], kind: str, default_name: str) -> BreakWindow:
    return BreakWindow(
        name=str(rec.get("name") or default_name),
        start=parse_time(rec["start"]),
        end=parse_time(rec["end"]),
        kind=kind,
    )


def _check_breaks(windows: Sequence[BreakWindow]):
    for b in windows:
        if b.end <= b.start:
            raise InvalidConfiguration(f"Break '{b.name}' ends before it starts")
    for prev, cur in zip(windows, windows[1:]):
        if overlaps(prev.start, prev.end, cur.start, cur.end):
            raise InvalidConfiguration(f"Breaks '{prev.name}' and '{cur.name}' overlap")


def _check_timings(timings: Sequence[PeriodTiming]):
    for t in timings:
        if t.end <= t.start:
            raise InvalidConfiguration(f"Period {t.label} ends before it starts")
    for prev, cur in zip(timings, timings[1:]):
        if cur.start < prev.end:
            raise InvalidConfiguration(
                f"Period timings must be increasing and non-overlapping ({prev.label} then {cur.label})"
            )


def derive_period_timings(
    day_start: int,
    day_end: int,
    class_duration: int,
    breaks: Iterable[BreakWindow] = (),
) -> List[PeriodTiming]:
    """Lay back-to-back periods from day_start, jumping over break windows."""
    windows = sorted(breaks, key=lambda b: b.start)
    timings: List[PeriodTiming] = []
    start = day_start
    while start + class_duration <= day_end:
        end = start + class_duration
        clash = next((b for b in windows if overlaps(start, end, b.start, b.end)), None)
        if clash is not None:
            start = clash.end
            continue
        timings.append(PeriodTiming(start, end))
        start = end
    return timings


def read_config_data(path: Union[str, Path] = "config.yaml") -> Dict[str, Any]:
    """Raw YAML mapping; a missing file reads as empty."""
    cfg_path = Path(path)
    if not cfg_path.exists():
        return {}
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"{cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{cfg_path} must contain a mapping")
    return data


def load_config(path: Union[str, Path] = "config.yaml") -> GridConfig:
    return GridConfig.from_dict(read_config_data(path))
