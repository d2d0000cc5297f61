from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .timemodel import format_range

if TYPE_CHECKING:
    from .grid import WeeklyGrid

SLOT_CLASS = "class"
SLOT_BREAK = "break"
SLOT_LUNCH = "lunch"
SLOT_FREE = "free"
SLOT_KINDS = (SLOT_CLASS, SLOT_BREAK, SLOT_LUNCH, SLOT_FREE)


@dataclass(frozen=True)
class Activity:
    id: str
    name: str
    periods_per_week: int
    instructor_id: str
    room_id: str
    code: str = ""
    duration: int = 1  # contiguous base periods per placement

    @property
    def label(self) -> str:
        return self.code or self.name


@dataclass(frozen=True)
class Instructor:
    id: str
    name: str
    short_name: str = ""


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    capacity: Optional[int] = None


@dataclass(frozen=True)
class PeriodTiming:
    start: int  # minutes after midnight
    end: int

    @property
    def label(self) -> str:
        return format_range(self.start, self.end)


@dataclass(frozen=True)
class BreakWindow:
    name: str
    start: int
    end: int
    kind: str = SLOT_BREAK

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Assignment:
    kind: str
    start: int
    end: int
    activity_id: Optional[str] = None
    instructor_id: Optional[str] = None
    room_id: Optional[str] = None

    def __post_init__(self):
        if self.kind not in SLOT_KINDS:
            raise ValueError(f"Unknown slot kind {self.kind!r}")

    @classmethod
    def for_class(cls, activity: Activity, start: int, end: int) -> "Assignment":
        return cls(
            kind=SLOT_CLASS,
            start=start,
            end=end,
            activity_id=activity.id,
            instructor_id=activity.instructor_id,
            room_id=activity.room_id,
        )

    @classmethod
    def for_break(cls, kind: str, start: int, end: int) -> "Assignment":
        return cls(kind=kind, start=start, end=end)


@dataclass
class GridCell:
    day: str
    period: int
    start: int
    end: int
    assignment: Optional[Assignment] = None

    @property
    def occupied(self) -> bool:
        return self.assignment is not None

    @property
    def key(self) -> Tuple[str, int]:
        return (self.day, self.period)


@dataclass(frozen=True)
class Shortfall:
    activity_id: str
    missing: int  # periods that could not be placed


@dataclass
class ScheduleResult:
    grid: "WeeklyGrid"
    shortfalls: List[Shortfall] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.shortfalls

    def cells_for(self, activity_id: str) -> List[GridCell]:
        return [
            c for c in self.grid.cells()
            if c.assignment is not None and c.assignment.activity_id == activity_id
        ]

    def placed_count(self, activity_id: str) -> int:
        return len(self.cells_for(activity_id))

    def shortfall_for(self, activity_id: str) -> Optional[Shortfall]:
        for s in self.shortfalls:
            if s.activity_id == activity_id:
                return s
        return None

    def placements(self) -> Dict[str, List[Tuple[str, int]]]:
        """activity_id -> list of (day, period) it occupies."""
        out: Dict[str, List[Tuple[str, int]]] = {}
        for c in self.grid.cells():
            if c.assignment is not None and c.assignment.activity_id is not None:
                out.setdefault(c.assignment.activity_id, []).append(c.key)
        return out
