import csv
import io
import os
from typing import IO, Dict, Iterable, List, Tuple, Union

from .errors import InvalidConfiguration
from .models import SLOT_BREAK, Activity, BreakWindow, Instructor, PeriodTiming, Room, ScheduleResult, Shortfall
from .timemodel import format_time, parse_time

TextOrPath = Union[str, os.PathLike, IO]


def _open_text(src: TextOrPath) -> Tuple[IO, bool]:
    """(text handle, whether we own it). Byte buffers are decoded as UTF-8; caller handles are rewound."""
    if isinstance(src, (str, os.PathLike)):
        return open(src, 'r', newline='', encoding='utf-8'), True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        return io.TextIOWrapper(src, encoding='utf-8', newline=''), True
    if not hasattr(src, 'read'):
        raise TypeError(f"Expected a path or a file-like object, got {type(src).__name__}")
    if getattr(src, 'seekable', lambda: False)():
        src.seek(0)
    return src, False


def _rows(src: TextOrPath) -> List[dict]:
    f, should_close = _open_text(src)
    try:
        return [row for row in csv.DictReader(f) if any(str(v or '').strip() for v in row.values())]
    finally:
        if should_close:
            f.close()


def load_activities(src: TextOrPath) -> List[Activity]:
    """CSV with id,name,code,periods_per_week,instructor_id,room_id[,duration]."""
    activities: List[Activity] = []
    for line, row in enumerate(_rows(src), start=2):
        try:
            activities.append(Activity(
                id=str(row['id']).strip(),
                name=str(row.get('name') or row['id']).strip(),
                code=str(row.get('code') or '').strip(),
                periods_per_week=int(row['periods_per_week']),
                instructor_id=str(row['instructor_id']).strip(),
                room_id=str(row['room_id']).strip(),
                duration=int(row.get('duration') or 1),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfiguration(f"activities line {line}: {e}") from e
    return activities


def load_instructors(src: TextOrPath) -> Dict[str, Instructor]:
    """CSV with id,name[,short_name]; used for display labels only."""
    instructors: Dict[str, Instructor] = {}
    for line, row in enumerate(_rows(src), start=2):
        try:
            iid = str(row['id']).strip()
            instructors[iid] = Instructor(
                id=iid,
                name=str(row.get('name') or iid).strip(),
                short_name=str(row.get('short_name') or '').strip(),
            )
        except KeyError as e:
            raise InvalidConfiguration(f"instructors line {line}: missing column {e}") from e
    return instructors


def load_rooms(src: TextOrPath) -> Dict[str, Room]:
    rooms: Dict[str, Room] = {}
    for line, row in enumerate(_rows(src), start=2):
        try:
            rid = str(row['id']).strip()
            cap = row.get('capacity')
            rooms[rid] = Room(id=rid, name=str(row.get('name') or rid).strip(),
                              capacity=int(cap) if cap not in (None, '') else None)
        except (KeyError, ValueError) as e:
            raise InvalidConfiguration(f"rooms line {line}: {e}") from e
    return rooms


def load_period_timings(src: TextOrPath) -> List[PeriodTiming]:
    timings: List[PeriodTiming] = []
    for line, row in enumerate(_rows(src), start=2):
        try:
            timings.append(PeriodTiming(parse_time(row['start']), parse_time(row['end'])))
        except (KeyError, ValueError) as e:
            raise InvalidConfiguration(f"timings line {line}: {e}") from e
    return timings


def load_breaks(src: TextOrPath) -> List[BreakWindow]:
    breaks: List[BreakWindow] = []
    for line, row in enumerate(_rows(src), start=2):
        try:
            breaks.append(BreakWindow(
                name=str(row.get('name') or 'Break').strip(),
                start=parse_time(row['start']),
                end=parse_time(row['end']),
                kind=SLOT_BREAK,
            ))
        except (KeyError, ValueError) as e:
            raise InvalidConfiguration(f"breaks line {line}: {e}") from e
    return breaks


def save_schedule_csv(path: str, result: ScheduleResult):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f)
        w.writerow(['day', 'period', 'start', 'end', 'kind', 'activity_id', 'instructor_id', 'room_id'])
        for c in result.grid.cells():
            a = c.assignment
            if a is None:
                continue
            w.writerow([c.day, c.period, format_time(c.start), format_time(c.end), a.kind,
                        a.activity_id or '', a.instructor_id or '', a.room_id or ''])


def save_shortfalls_csv(path: str, shortfalls: Iterable[Shortfall]):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f)
        w.writerow(['activity_id', 'missing'])
        for s in shortfalls:
            w.writerow([s.activity_id, s.missing])
