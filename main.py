import argparse
import logging
from dataclasses import replace

from classtime.config import GridConfig, read_config_data
from classtime.export import grid_frame
from classtime.graph_build import build_resource_conflict_graph
from classtime.io_utils import (
    load_activities, load_breaks, load_instructors, load_period_timings, load_rooms,
    save_schedule_csv, save_shortfalls_csv
)
from classtime.scheduling.evaluation import summary
from classtime.scheduling.generate import generate


def build_config(args) -> GridConfig:
    """YAML config first, then CSV overrides for timings and breaks.

    Timings the YAML did not pin down are derived again around the final breaks.
    """
    data = read_config_data(args.config) if args.config else {}
    cfg = GridConfig.from_dict(data)
    overrides = {}
    if args.timings:
        overrides["period_timings"] = load_period_timings(args.timings)
        if data.get("day_start") is None:
            overrides["day_start"] = None
    if args.breaks:
        overrides["breaks"] = load_breaks(args.breaks)
        if not args.timings and not data.get("period_timings"):
            overrides["period_timings"] = ()
    return replace(cfg, **overrides) if overrides else cfg


def main():
    p = argparse.ArgumentParser(description="ClassTime – weekly class schedule generator")
    p.add_argument('--activities', type=str, required=True,
                   help='activities.csv with id,name,code,periods_per_week,instructor_id,room_id[,duration]')
    p.add_argument('--config', type=str, help='YAML grid configuration (days, timings, lunch, breaks)')
    p.add_argument('--timings', type=str, help='Optional CSV start,end overriding the period timings')
    p.add_argument('--breaks', type=str, help='Optional CSV name,start,end overriding the short breaks')
    p.add_argument('--instructors', type=str, help='Optional CSV id,name[,short_name] for display labels')
    p.add_argument('--rooms', type=str, help='Optional CSV id,name[,capacity] for display labels')

    p.add_argument('--out_schedule', type=str, default='schedule.csv')
    p.add_argument('--out_shortfalls', type=str, default=None)
    p.add_argument('--show', action='store_true', help='Print the weekly grid')
    p.add_argument('--verbose', action='store_true')
    args = p.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = build_config(args)
        activities = load_activities(args.activities)
        instructors = load_instructors(args.instructors) if args.instructors else {}
        rooms = load_rooms(args.rooms) if args.rooms else {}
        result = generate(activities, cfg)
    except ValueError as e:
        raise SystemExit(f"Configuration error: {e}")

    G = build_resource_conflict_graph(activities)
    print(summary(G, activities, cfg, result))
    if args.show:
        print(grid_frame(result, activities, instructors, rooms).to_string())

    save_schedule_csv(args.out_schedule, result)
    if args.out_shortfalls:
        save_shortfalls_csv(args.out_shortfalls, result.shortfalls)
        print(f"Saved: {args.out_schedule}, {args.out_shortfalls}")
    else:
        print(f"Saved: {args.out_schedule}")


if __name__ == '__main__':
    main()
