"""
Conflict detection.

Two meetings conflict if they fall on the same weekday and their
half-open intervals [start, end) overlap:
    start < other_end AND other_start < end

Back-to-back meetings (end == other start) do NOT conflict.
Two sections conflict if any meeting of one conflicts with any meeting of the other.
"""

from __future__ import annotations

from datetime import time

from senehorario.model import Meeting, Section


def _overlaps(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    return a_start < b_end and b_start < a_end


def meetings_conflict(a: Meeting, b: Meeting) -> bool:
    """
    True if both meetings share a weekday and their time ranges overlap.
    """
    if a.day != b.day:
        return False
    return _overlaps(a.start, a.end, b.start, b.end)


def sections_conflict(a: Section, b: Section) -> bool:
    """
    True on the first pair of conflicting meetings between the two sections.
    """
    for ma in a.meetings:
        for mb in b.meetings:
            if meetings_conflict(ma, mb):
                return True
    return False


def find_conflicts(sections: list[Section]) -> list[tuple[Section, Meeting, Section, Meeting]]:
    """
    Find conflicting meeting pairs across different sections.

    Each pair appears once (section i < section j), in input order.
    Meetings of the same section are never compared with each other.
    """
    conflicts: list[tuple[Section, Meeting, Section, Meeting]] = []

    # O(n^2) is fine for a handful of sections
    for i in range(len(sections)):
        s1 = sections[i]
        for j in range(i + 1, len(sections)):
            s2 = sections[j]
            for m1 in s1.meetings:
                for m2 in s2.meetings:
                    if meetings_conflict(m1, m2):
                        conflicts.append((s1, m1, s2, m2))

    return conflicts
