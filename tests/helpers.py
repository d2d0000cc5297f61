from typing import List

from classtime.models import Activity, PeriodTiming
from classtime.timemodel import parse_time

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def make_timings(start: str, n: int, length: int = 55) -> List[PeriodTiming]:
    t = parse_time(start)
    out = []
    for _ in range(n):
        out.append(PeriodTiming(t, t + length))
        t += length
    return out


def make_activity(id, periods=1, instructor="T1", room="R1", duration=1) -> Activity:
    return Activity(id=id, name=f"Subject {id}", code=id, periods_per_week=periods,
                    instructor_id=instructor, room_id=room, duration=duration)
