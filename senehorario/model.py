"""
Central data model definitions used across the project.

This module defines the canonical structure of Meeting, Section and Course
objects so that:
- the catalog loader, the schedule generator and the CLI share the same field names
- values handed to the generator are immutable (frozen dataclasses, tuples)
- a Course is only ever observed fully built (see CourseBuilder)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import IntEnum
from typing import Iterable, List, Tuple


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def short(self) -> str:
        return self.name[:3].title()


@dataclass(frozen=True)
class Meeting:
    """
    One recurring weekly time block of a section.

    Times have minute precision and the interval is half-open: [start, end).
    """

    day: Weekday
    start: time
    end: time
    location: str = ""

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(f"Meeting must start before it ends: {self.start}-{self.end}")

    def label(self) -> str:
        return f"{self.day.short} {self.start:%H:%M}-{self.end:%H:%M}"


@dataclass(frozen=True)
class Section:
    """
    One offering of a course, identified by its NRC (registration number).

    A section without meetings (e.g. independent study) never conflicts.
    """

    nrc: str
    section_id: str
    term: str
    ptrm: str
    campus: str
    meetings: Tuple[Meeting, ...] = ()
    instructors: Tuple[str, ...] = ()
    available_seats: int = 0
    total_seats: int = 0

    def __post_init__(self) -> None:
        # accept lists from callers but store tuples
        object.__setattr__(self, "meetings", tuple(self.meetings))
        object.__setattr__(self, "instructors", tuple(self.instructors))
        # available_seats goes negative for over-enrolled sections
        if self.total_seats < 0:
            raise ValueError(f"Total seats must not be negative (NRC {self.nrc})")


@dataclass(frozen=True)
class Course:
    """
    Represents one course with all of its sections, as returned by the catalog.
    """

    code: str
    title: str
    credits: int
    sections: Tuple[Section, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))


@dataclass
class CourseBuilder:
    """
    Mutable accumulator used while loading catalog records.

    Sections are appended as records arrive; build() hands out the immutable Course.
    """

    code: str
    title: str
    credits: int
    sections: List[Section] = field(default_factory=list)

    def add_section(self, section: Section) -> "CourseBuilder":
        self.sections.append(section)
        return self

    def extend(self, sections: Iterable[Section]) -> "CourseBuilder":
        self.sections.extend(sections)
        return self

    def build(self) -> Course:
        return Course(code=self.code, title=self.title, credits=self.credits, sections=tuple(self.sections))
