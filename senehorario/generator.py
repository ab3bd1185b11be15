"""
Schedule generation.

Input is a candidate set: one list of interchangeable sections per course
("course slot"). Output is every combination that picks exactly one
section per slot without any time conflict.

Rules:
- validation runs completely before the search starts
- an empty or missing slot is an error (InvalidInput), never silently dropped
- zero slots -> zero schedules (not one empty schedule)
- duplicate NRCs are accepted as-is
- order: depth-first over slots in input order; the last slot varies fastest
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from senehorario.conflicts import sections_conflict
from senehorario.model import Course, Section

logger = logging.getLogger(__name__)

Schedule = list[Section]


class InvalidInput(ValueError):
    """
    Raised when the candidate set has the wrong shape.

    slot_index points at the offending course slot (None for the whole input).
    """

    def __init__(self, message: str, slot_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.slot_index = slot_index


def validate_candidates(candidates: Optional[Sequence[Optional[Sequence[Section]]]]) -> None:
    """
    Fail fast on a missing candidate set or a missing/empty course slot.

    Meetings are not checked here: Meeting/Section validate on construction.
    """
    if candidates is None:
        raise InvalidInput("Candidate set is missing")

    for idx, slot in enumerate(candidates):
        if slot is None:
            raise InvalidInput(f"Course slot {idx} is missing", slot_index=idx)
        if len(slot) == 0:
            raise InvalidInput(f"Course slot {idx} has no candidate sections", slot_index=idx)


def generate_schedules(candidates: Optional[Sequence[Optional[Sequence[Section]]]]) -> list[Schedule]:
    """
    Return all conflict-free schedules, one section per course slot.

    A candidate is only added if it does not conflict with any section
    already chosen, so a conflicting prefix prunes its whole subtree.
    """
    validate_candidates(candidates)

    slots: list[Sequence[Section]] = list(candidates or [])
    schedules: list[Schedule] = []
    if not slots:
        return schedules

    logger.debug("Generating schedules for %d course slots (%s)", len(slots), [len(s) for s in slots])

    chosen: list[Section] = []

    def dfs(i: int) -> None:
        if i == len(slots):
            schedules.append(list(chosen))
            return

        for sec in slots[i]:
            if any(sections_conflict(sec, other) for other in chosen):
                continue
            chosen.append(sec)
            dfs(i + 1)
            chosen.pop()

    dfs(0)

    logger.debug("Found %d schedules", len(schedules))
    return schedules


def candidates_from_courses(courses: Iterable[Course]) -> list[list[Section]]:
    """
    Flatten Course aggregates into a candidate set (course order preserved).
    """
    return [list(course.sections) for course in courses]
