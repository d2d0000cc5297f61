from typing import Any, Dict, Mapping, Optional, Sequence

import pandas as pd

from .models import SLOT_CLASS, Activity, Assignment, Instructor, Room, ScheduleResult
from .timemodel import format_range


def _time_labels(result: ScheduleResult) -> Dict[str, None]:
    """Row labels in start-time order, fixed periods and manual slots alike."""
    cells = sorted(result.grid.cells(), key=lambda c: (c.start, c.end))
    return dict.fromkeys(format_range(c.start, c.end) for c in cells)


def _instructor_label(instructor_id: str, instructors: Mapping[str, Instructor]) -> str:
    ins = instructors.get(instructor_id)
    if ins is None:
        return instructor_id
    return ins.short_name or ins.name


def _room_label(room_id: str, rooms: Mapping[str, Room]) -> str:
    room = rooms.get(room_id)
    return room.name if room is not None else room_id


def _cell_text(a: Optional[Assignment], activities: Dict[str, Activity],
               instructors: Mapping[str, Instructor], rooms: Mapping[str, Room]) -> str:
    if a is None:
        return ""
    if a.kind != SLOT_CLASS:
        return a.kind.upper()
    act = activities.get(a.activity_id)
    label = act.label if act is not None else a.activity_id
    return f"{label} ({_instructor_label(a.instructor_id, instructors)}) @ {_room_label(a.room_id, rooms)}"


def schedule_as_dict(result: ScheduleResult, activities: Sequence[Activity],
                     instructors: Optional[Mapping[str, Instructor]] = None,
                     rooms: Optional[Mapping[str, Room]] = None) -> Dict[str, Any]:
    """Plain mapping the host can persist: day -> time label -> slot or None."""
    by_id = {a.id: a for a in activities}
    instructors = instructors or {}
    rooms = rooms or {}
    labels = list(_time_labels(result))
    slots: Dict[str, Dict[str, Any]] = {day: dict.fromkeys(labels) for day in result.grid.days}
    for c in result.grid.cells():
        a = c.assignment
        if a is None:
            continue
        entry: Dict[str, Any] = {"kind": a.kind, "period": c.period}
        if a.kind == SLOT_CLASS:
            act = by_id.get(a.activity_id)
            entry.update(
                id=a.activity_id,
                name=act.name if act is not None else a.activity_id,
                code=act.code if act is not None else "",
                instructor_id=a.instructor_id,
                instructor=_instructor_label(a.instructor_id, instructors),
                room_id=a.room_id,
                room=_room_label(a.room_id, rooms),
            )
        slots[c.day][format_range(c.start, c.end)] = entry
    return {
        "days": list(result.grid.days),
        "time_slots": labels,
        "slots": slots,
        "shortfalls": [{"activity_id": s.activity_id, "missing": s.missing} for s in result.shortfalls],
    }


def grid_frame(result: ScheduleResult, activities: Sequence[Activity],
               instructors: Optional[Mapping[str, Instructor]] = None,
               rooms: Optional[Mapping[str, Room]] = None) -> pd.DataFrame:
    by_id = {a.id: a for a in activities}
    labels = list(_time_labels(result))
    frame = pd.DataFrame("", index=labels, columns=list(result.grid.days))
    for c in result.grid.cells():
        if c.assignment is not None:
            frame.loc[format_range(c.start, c.end), c.day] = _cell_text(
                c.assignment, by_id, instructors or {}, rooms or {})
    frame.index.name = "time"
    return frame
