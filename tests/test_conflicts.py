"""
Unit tests for conflict detection.

Definition used here:
- A conflict exists if two meetings overlap in time on the same weekday.
- Touching endpoints (end == start) is NOT a conflict.
"""

import unittest
from datetime import time

from senehorario.conflicts import find_conflicts, meetings_conflict, sections_conflict
from senehorario.model import Meeting, Section, Weekday


def meeting(day: Weekday, start: str, end: str) -> Meeting:
    return Meeting(day, time.fromisoformat(start), time.fromisoformat(end), "ML_101")


def section(nrc: str, *meetings: Meeting) -> Section:
    return Section(nrc, "1", "202519", "1", "CAMPUS PRINCIPAL", meetings, ("PROF. A",), 5, 30)


class TestMeetingsConflict(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        a = meeting(Weekday.MONDAY, "10:00", "11:00")
        b = meeting(Weekday.MONDAY, "10:30", "12:00")
        self.assertTrue(meetings_conflict(a, b))
        self.assertTrue(meetings_conflict(b, a))

    def test_containment_is_conflict(self) -> None:
        a = meeting(Weekday.WEDNESDAY, "08:00", "12:00")
        b = meeting(Weekday.WEDNESDAY, "09:00", "10:00")
        self.assertTrue(meetings_conflict(a, b))

    def test_identical_interval_is_conflict(self) -> None:
        a = meeting(Weekday.FRIDAY, "09:00", "10:00")
        self.assertTrue(meetings_conflict(a, a))

    def test_no_overlap_touching_end(self) -> None:
        # end == start is allowed (no overlap)
        a = meeting(Weekday.MONDAY, "10:00", "11:00")
        b = meeting(Weekday.MONDAY, "11:00", "12:00")
        self.assertFalse(meetings_conflict(a, b))
        self.assertFalse(meetings_conflict(b, a))

    def test_one_minute_overlap_is_conflict(self) -> None:
        a = meeting(Weekday.MONDAY, "10:00", "11:01")
        b = meeting(Weekday.MONDAY, "11:00", "12:00")
        self.assertTrue(meetings_conflict(a, b))

    def test_different_day_no_conflict(self) -> None:
        a = meeting(Weekday.MONDAY, "09:00", "10:00")
        b = meeting(Weekday.TUESDAY, "09:00", "10:00")
        self.assertFalse(meetings_conflict(a, b))


class TestSectionsConflict(unittest.TestCase):
    def test_any_meeting_pair_conflicts(self) -> None:
        a = section("1", meeting(Weekday.MONDAY, "09:00", "10:00"), meeting(Weekday.WEDNESDAY, "09:00", "10:00"))
        b = section("2", meeting(Weekday.WEDNESDAY, "09:30", "10:30"))
        self.assertTrue(sections_conflict(a, b))

    def test_no_meetings_never_conflicts(self) -> None:
        a = section("1")
        b = section("2", meeting(Weekday.MONDAY, "09:00", "10:00"))
        self.assertFalse(sections_conflict(a, b))
        self.assertFalse(sections_conflict(b, a))

    def test_disjoint_sections(self) -> None:
        a = section("1", meeting(Weekday.MONDAY, "09:00", "10:00"))
        b = section("2", meeting(Weekday.MONDAY, "10:00", "11:00"), meeting(Weekday.TUESDAY, "09:00", "10:00"))
        self.assertFalse(sections_conflict(a, b))


class TestFindConflicts(unittest.TestCase):
    def test_pairs_listed_once_in_order(self) -> None:
        a = section("1", meeting(Weekday.MONDAY, "09:00", "10:00"))
        b = section("2", meeting(Weekday.MONDAY, "09:30", "10:30"))
        c = section("3", meeting(Weekday.MONDAY, "09:45", "11:00"))
        confs = find_conflicts([a, b, c])
        self.assertEqual([(s1.nrc, s2.nrc) for s1, _, s2, _ in confs], [("1", "2"), ("1", "3"), ("2", "3")])

    def test_same_section_meetings_not_compared(self) -> None:
        # overlapping meetings inside one section are not a schedule conflict
        a = section("1", meeting(Weekday.MONDAY, "09:00", "10:00"), meeting(Weekday.MONDAY, "09:30", "10:30"))
        self.assertEqual(find_conflicts([a]), [])


if __name__ == "__main__":
    unittest.main()
