"""Tests for services/calendar_view.py — month grid and event bucketing."""

import datetime as dt

import pytest

from models.entities import Assignment, LessonPlan
from models.views import EventType
from services.calendar_view import (
    ASSIGNMENT_TIME_LABEL,
    DEFAULT_LESSON_TIME,
    build_month,
    events_on_date,
    is_same_day,
    month_grid,
    month_label,
    school_week,
    shift_month,
    upcoming_events,
    weekday_index,
)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def test_weekday_index_is_sunday_based():
    assert weekday_index(dt.date(2024, 3, 17)) == 0  # Sunday
    assert weekday_index(dt.date(2024, 3, 18)) == 1  # Monday
    assert weekday_index(dt.date(2024, 3, 16)) == 6  # Saturday


def test_is_same_day_ignores_time():
    assert is_same_day(dt.datetime(2024, 3, 15, 23, 59), dt.date(2024, 3, 15))
    assert is_same_day("2024-03-15T08:00:00Z", "2024-03-15")
    assert not is_same_day(dt.date(2024, 3, 15), dt.date(2024, 3, 16))


# ---------------------------------------------------------------------------
# Month grid & navigation
# ---------------------------------------------------------------------------

class TestMonthGrid:
    def test_february_leap_year(self):
        cells = month_grid(2024, 1)

        # February 1st 2024 is a Thursday.
        assert cells[:4] == [None, None, None, None]
        assert cells[4] == dt.date(2024, 2, 1)
        assert len(cells) == 4 + 29
        assert cells[-1] == dt.date(2024, 2, 29)

    def test_month_starting_on_sunday_has_no_blanks(self):
        cells = month_grid(2023, 9)
        assert cells[0] == dt.date(2023, 10, 1)
        assert len(cells) == 31

    def test_every_day_once_in_order(self):
        days = [d for d in month_grid(2024, 0) if d is not None]
        assert days == [dt.date(2024, 1, n) for n in range(1, 32)]

    def test_out_of_range_month_rolls_over(self):
        assert month_grid(2024, 12) == month_grid(2025, 0)


class TestShiftMonth:
    @pytest.mark.parametrize("start,delta,expected", [
        ((2024, 0), -1, (2023, 11)),
        ((2023, 11), 1, (2024, 0)),
        ((2024, 5), 0, (2024, 5)),
        ((2024, 0), -13, (2022, 11)),
        ((2024, 10), 14, (2026, 0)),
    ])
    def test_shift(self, start, delta, expected):
        assert shift_month(*start, delta) == expected

    def test_label(self):
        assert month_label(2024, 1) == "February 2024"
        assert month_label(2024, 12) == "January 2025"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEventsOnDate:
    def test_lessons_before_assignments(self, lesson_plans, assignments):
        events = events_on_date(dt.date(2024, 3, 15), lesson_plans, assignments)

        assert [(e.type, e.id) for e in events] == [
            (EventType.LESSON, "1"),
            (EventType.ASSIGNMENT, "1"),
        ]
        assert events[0].time == DEFAULT_LESSON_TIME
        assert events[1].time == ASSIGNMENT_TIME_LABEL

    def test_lesson_keeps_its_own_time(self, lesson_plans, assignments):
        events = events_on_date(dt.date(2024, 3, 20), lesson_plans, assignments)
        assert events[0].time == "10:30 AM"

    def test_custom_placeholder_time(self, lesson_plans):
        events = events_on_date(dt.date(2024, 3, 15), lesson_plans, [], default_time="TBD")
        assert events[0].time == "TBD"

    def test_due_datetime_lands_on_its_calendar_date(self, assignments):
        events = events_on_date(dt.date(2024, 3, 18), [], assignments)
        assert [e.id for e in events] == ["2"]

    def test_every_match_is_kept(self):
        plans = [
            LessonPlan(id="p1", date=dt.date(2024, 5, 1), title="Period 1"),
            LessonPlan(id="p2", date=dt.date(2024, 5, 1), title="Period 2"),
        ]
        due = [Assignment(id="a1", due_date=dt.date(2024, 5, 1), title="Essay")]

        events = events_on_date(dt.date(2024, 5, 1), plans, due)
        assert [e.id for e in events] == ["p1", "p2", "a1"]

    def test_empty_day(self, lesson_plans, assignments):
        assert events_on_date(dt.date(2024, 3, 16), lesson_plans, assignments) == []


class TestUpcomingEvents:
    def test_seven_day_window_in_date_order(self, lesson_plans, assignments):
        events = upcoming_events(dt.date(2024, 3, 14), lesson_plans, assignments, limit=None)

        assert [(e.date.day, e.type, e.id) for e in events] == [
            (15, EventType.LESSON, "1"),
            (15, EventType.ASSIGNMENT, "1"),
            (18, EventType.ASSIGNMENT, "2"),
            (20, EventType.LESSON, "2"),
            (20, EventType.ASSIGNMENT, "3"),
        ]

    def test_truncated_to_limit(self, lesson_plans, assignments):
        events = upcoming_events(dt.date(2024, 3, 14), lesson_plans, assignments, limit=3)
        assert [e.id for e in events] == ["1", "1", "2"]

    def test_window_excludes_day_seven(self, lesson_plans, assignments):
        # 2024-03-20 is seven days after 2024-03-13, just outside the window.
        events = upcoming_events(dt.date(2024, 3, 13), lesson_plans, assignments, limit=None)
        assert all(e.date < dt.date(2024, 3, 20) for e in events)
        assert len(events) == 3


class TestBuildMonth:
    def test_march(self, lesson_plans, assignments):
        month = build_month(2024, 2, lesson_plans, assignments, today=dt.date(2024, 3, 15))

        assert month.label == "March 2024"
        # March 1st 2024 is a Friday.
        assert all(c.date is None for c in month.cells[:5])
        assert month.cells[5].date == dt.date(2024, 3, 1)

        ides = month.cells[5 + 14]
        assert ides.date == dt.date(2024, 3, 15)
        assert ides.is_today is True
        assert len(ides.events) == 2
        assert sum(c.is_today for c in month.cells) == 1

    def test_today_outside_month(self, lesson_plans, assignments):
        month = build_month(2024, 3, lesson_plans, assignments, today=dt.date(2024, 3, 15))
        assert not any(c.is_today for c in month.cells)
        assert all(not c.events for c in month.cells)


# ---------------------------------------------------------------------------
# School week
# ---------------------------------------------------------------------------

class TestSchoolWeek:
    def test_midweek(self):
        assert school_week(dt.date(2024, 3, 13)) == [
            dt.date(2024, 3, 11), dt.date(2024, 3, 12), dt.date(2024, 3, 13),
            dt.date(2024, 3, 14), dt.date(2024, 3, 15),
        ]

    def test_monday_is_its_own_start(self):
        assert school_week(dt.date(2024, 3, 11))[0] == dt.date(2024, 3, 11)

    def test_saturday_belongs_to_past_week(self):
        assert school_week(dt.date(2024, 3, 16))[0] == dt.date(2024, 3, 11)

    def test_sunday_moves_to_next_week(self):
        assert school_week(dt.date(2024, 3, 17))[0] == dt.date(2024, 3, 18)
