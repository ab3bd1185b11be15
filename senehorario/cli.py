"""
CLI (Command Line Interface).

Quick terminal commands:

    senehorario search <text>
    senehorario add <course_code>
    senehorario remove <course_code>
    senehorario selected
    senehorario schedules [course_code ...] [--limit N] [--offline]

`schedules` uses the stored selection when no codes are given. The order of
the codes is the order of the course slots in the generated schedules.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import requests
from rich import box
from rich.console import Console
from rich.table import Table

from senehorario.catalog import RAW_DIR, find_sections_by_course_code, get_courses
from senehorario.conflicts import find_conflicts
from senehorario.generator import InvalidInput, Schedule, generate_schedules
from senehorario.model import Section
from senehorario.storage import load_selected_codes, normalize_code, save_selected_codes

console = Console()


def _cmd_search(args: argparse.Namespace) -> int:
    """
    Search the catalog and list matching courses.
    """
    query = (args.text or "").strip()
    if not query:
        print("Please provide a search text.")
        return 1

    courses = get_courses(query, raw_dir=args.raw_dir, refresh=args.refresh, offline=args.offline)
    if not courses:
        print("No results.")
        return 0

    # show max 20
    for c in courses[:20]:
        print(f"{c.code} | {c.title} | {c.credits} credits | {len(c.sections)} sections")
    if len(courses) > 20:
        print(f"... and {len(courses) - 20} more results")

    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    code = normalize_code(args.course_code or "")
    if not code:
        print("Please provide a course code.")
        return 1

    selected = load_selected_codes(args.selection)
    if code in selected:
        print(f"Already selected: {code}")
        return 0

    selected.append(code)
    save_selected_codes(selected, args.selection)
    print(f"Added: {code} (selected: {len(selected)})")
    return 0


def _cmd_remove(args: argparse.Namespace) -> int:
    code = normalize_code(args.course_code or "")
    if not code:
        print("Please provide a course code.")
        return 1

    selected = load_selected_codes(args.selection)
    if code not in selected:
        print(f"Not selected: {code}")
        return 0

    selected.remove(code)
    save_selected_codes(selected, args.selection)
    print(f"Removed: {code} (selected: {len(selected)})")
    return 0


def _cmd_selected(args: argparse.Namespace) -> int:
    selected = load_selected_codes(args.selection)
    if not selected:
        print("No courses selected.")
        return 0
    for code in selected:
        print(code)
    return 0


def _meetings_text(section: Section) -> str:
    if not section.meetings:
        return "(no meetings)"
    return "\n".join(f"{m.label()} {m.location}".rstrip() for m in section.meetings)


def _schedule_table(number: int, codes: list[str], schedule: Schedule) -> Table:
    table = Table(title=f"Schedule {number}", box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("Course", style="bold cyan", no_wrap=True)
    table.add_column("NRC", no_wrap=True)
    table.add_column("Sec", no_wrap=True)
    table.add_column("Meetings")
    table.add_column("Instructors", style="magenta")
    table.add_column("Seats", justify="right")

    for code, sec in zip(codes, schedule):
        table.add_row(
            code,
            sec.nrc,
            sec.section_id,
            _meetings_text(sec),
            ", ".join(sec.instructors),
            f"{sec.available_seats}/{sec.total_seats}",
        )
    return table


def _print_blocking_conflicts(codes: list[str], candidates: list[list[Section]]) -> None:
    """
    Explain an empty result using the courses that offer a single section.
    """
    fixed = [slot[0] for slot in candidates if len(slot) == 1]
    code_by_nrc = {slot[0].nrc: code for code, slot in zip(codes, candidates) if len(slot) == 1}

    for s1, m1, s2, m2 in find_conflicts(fixed):
        print(
            f"- {code_by_nrc.get(s1.nrc, '?')} ({s1.nrc}) {m1.label()}  <->  "
            f"{code_by_nrc.get(s2.nrc, '?')} ({s2.nrc}) {m2.label()}"
        )


def _cmd_schedules(args: argparse.Namespace) -> int:
    """
    Generate and print every conflict-free schedule for the chosen courses.
    """
    if args.codes:
        codes = [normalize_code(c) for c in args.codes if normalize_code(c)]
    else:
        codes = load_selected_codes(args.selection)

    if not codes:
        print("No courses selected.")
        return 1

    candidates = [
        find_sections_by_course_code(code, raw_dir=args.raw_dir, refresh=args.refresh, offline=args.offline)
        for code in codes
    ]

    try:
        schedules = generate_schedules(candidates)
    except InvalidInput as exc:
        if exc.slot_index is not None:
            print(f"No sections found for course {codes[exc.slot_index]}.")
        else:
            print(f"Invalid request: {exc}")
        return 1

    if not schedules:
        print("No compatible schedule found.")
        _print_blocking_conflicts(codes, candidates)
        return 0

    print(f"Schedules found: {len(schedules)}")
    limit = args.limit if args.limit and args.limit > 0 else len(schedules)
    for i, schedule in enumerate(schedules[:limit], start=1):
        console.print(_schedule_table(i, codes, schedule))
    if len(schedules) > limit:
        print(f"... and {len(schedules) - limit} more schedules")

    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="senehorario", description="Senehorario schedule builder")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--raw-dir", type=Path, default=RAW_DIR, help="Directory for cached catalog JSON")
    parser.add_argument("--selection", type=Path, default=None, help="Path of selected_courses.json")
    parser.add_argument("--refresh", action="store_true", help="Ignore cached catalog data")
    parser.add_argument("--offline", action="store_true", help="Only use cached catalog data")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search the course catalog")
    p_search.add_argument("text", type=str, help="Search text (course code or name)")

    p_add = sub.add_parser("add", help="Add course by code")
    p_add.add_argument("course_code", type=str, help="Course code (e.g. ISIS1204)")

    p_remove = sub.add_parser("remove", help="Remove course by code")
    p_remove.add_argument("course_code", type=str, help="Course code (e.g. ISIS1204)")

    sub.add_parser("selected", help="List selected courses")

    p_sched = sub.add_parser("schedules", help="Generate conflict-free schedules")
    p_sched.add_argument("codes", nargs="*", help="Course codes (default: selected courses)")
    p_sched.add_argument("--limit", type=int, default=10, help="Max schedules to print (0 = all)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "search":
            raise SystemExit(_cmd_search(args))
        if args.command == "add":
            raise SystemExit(_cmd_add(args))
        if args.command == "remove":
            raise SystemExit(_cmd_remove(args))
        if args.command == "selected":
            raise SystemExit(_cmd_selected(args))
        if args.command == "schedules":
            raise SystemExit(_cmd_schedules(args))
    except (requests.RequestException, ValueError) as exc:
        print(f"Could not load catalog data: {exc}")
        raise SystemExit(1)

    raise SystemExit(2)
