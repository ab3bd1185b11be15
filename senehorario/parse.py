"""
Parsing (catalog JSON records -> Course objects).

Each raw record from the catalog API is one section. It carries:
- "class" + "course" (together the course code, e.g. "ISIS" + "1204")
- title, credits, nrc, section, term, ptrm, campus
- "schedules": entries with one flag per weekday (l, m, i, j, v, s, d)
  and a shared "time_ini"/"time_fin" pair encoded as "HHMM"
- "instructors": [{"name": "SURNAME ... GIVEN ..."}]
- "seatsavail" / "maxenrol" as decimal strings

Important rules:
- 1 record = 1 Section
- 1 active day flag = 1 Meeting (all days of an entry share the time range)
- records are grouped by course code in first-seen order
"""

from __future__ import annotations

import argparse
import json
from datetime import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from senehorario.model import Course, CourseBuilder, Meeting, Section, Weekday


PACKAGE_DIR = Path(__file__).resolve().parent

# flag key in the schedule entry -> (expected letter, weekday)
DAY_FLAGS: Dict[str, tuple[str, Weekday]] = {
    "l": ("L", Weekday.MONDAY),
    "m": ("M", Weekday.TUESDAY),
    "i": ("I", Weekday.WEDNESDAY),
    "j": ("J", Weekday.THURSDAY),
    "v": ("V", Weekday.FRIDAY),
    "s": ("S", Weekday.SATURDAY),
    "d": ("D", Weekday.SUNDAY),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _str(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value).strip()


def _int(record: Dict[str, Any], key: str) -> int:
    raw = _str(record, key)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid integer for {key!r}: {raw!r}") from None


def parse_time(hhmm: Optional[str]) -> time:
    """
    Convert 'HHMM' (24h, e.g. '0900') to a time.
    Raises ValueError for invalid formats.
    """
    if hhmm is None or len(hhmm.strip()) < 4:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    s = hhmm.strip()
    if not s[:4].isdigit():
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(s[0:2])
    m = int(s[2:4])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return time(h, m)


def parse_days(entry: Dict[str, Any]) -> List[Weekday]:
    """
    Return the active weekdays of one schedule entry, Monday first.
    """
    days: List[Weekday] = []
    for key, (letter, day) in DAY_FLAGS.items():
        flag = entry.get(key)
        if isinstance(flag, str) and flag.strip().upper() == letter:
            days.append(day)
    return days


def reorder_instructor_name(name: Optional[str]) -> Optional[str]:
    """
    Reorder a surname-first instructor name to given-name-first.

    2 parts: "SURNAME GIVEN"                 -> "GIVEN SURNAME"
    3 parts: "SURNAME1 SURNAME2 GIVEN"       -> "GIVEN SURNAME1 SURNAME2"
    4 parts: "SURNAME1 SURNAME2 GIVEN1 GIVEN2" -> "GIVEN1 GIVEN2 SURNAME1 SURNAME2"
    Anything else is returned unchanged.
    """
    if name is None or not name.strip():
        return name

    parts = name.split()
    if len(parts) == 2:
        return f"{parts[1]} {parts[0]}"
    if len(parts) == 3:
        return f"{parts[2]} {parts[0]} {parts[1]}"
    if len(parts) == 4:
        return f"{parts[2]} {parts[3]} {parts[0]} {parts[1]}"
    return name


def course_code(record: Dict[str, Any]) -> str:
    return f"{_str(record, 'class')}{_str(record, 'course')}"


# ---------------------------------------------------------------------------
# Record parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_meetings(record: Dict[str, Any]) -> List[Meeting]:
    """
    Expand every schedule entry into one Meeting per active day.
    """
    meetings: List[Meeting] = []
    for entry in record.get("schedules") or []:
        days = parse_days(entry)
        if not days:
            continue
        start = parse_time(entry.get("time_ini"))
        end = parse_time(entry.get("time_fin"))
        location = f"{_str(entry, 'building')} {_str(entry, 'classroom')}".strip()
        for day in days:
            meetings.append(Meeting(day=day, start=start, end=end, location=location))
    return meetings


def parse_section(record: Dict[str, Any]) -> Section:
    """
    Parse exactly one raw record into exactly one Section.
    """
    instructors: List[str] = []
    for ins in record.get("instructors") or []:
        name = reorder_instructor_name(_str(ins, "name"))
        if name:
            instructors.append(name)

    return Section(
        nrc=_str(record, "nrc"),
        section_id=_str(record, "section"),
        term=_str(record, "term"),
        ptrm=_str(record, "ptrm"),
        campus=_str(record, "campus"),
        meetings=tuple(parse_meetings(record)),
        instructors=tuple(instructors),
        available_seats=_int(record, "seatsavail"),
        total_seats=_int(record, "maxenrol"),
    )


def parse_courses(records: List[Dict[str, Any]]) -> List[Course]:
    """
    Group raw section records by course code into Course objects.
    """
    builders: Dict[str, CourseBuilder] = {}
    for record in records:
        code = course_code(record)
        builder = builders.get(code)
        if builder is None:
            builder = CourseBuilder(code=code, title=_str(record, "title"), credits=_int(record, "credits"))
            builders[code] = builder
        builder.add_section(parse_section(record))

    return [b.build() for b in builders.values()]


# ---------------------------------------------------------------------------
# CLI connection
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="senehorario.parse",
        description="Summarise a cached catalog JSON file"
    )
    p.add_argument("path", type=Path, help="Raw JSON file (list of section records)")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    records = json.loads(args.path.read_text(encoding="utf-8"))
    courses = parse_courses(records if isinstance(records, list) else [])

    for course in courses:
        print(f"{course.code} | {course.title} | {course.credits} credits | {len(course.sections)} sections")


if __name__ == "__main__":
    main()
