"""Calendar date bucketing for lesson plans and due dates on a month grid.

Conventions shared with the dashboard frontend:

- months are 0-based (January = 0) and weekdays are Sunday-based
  (Sunday = 0 ... Saturday = 6);
- "same day" compares calendar dates only, time of day is ignored.
"""

from __future__ import annotations

import calendar
import datetime as dt
from collections.abc import Iterable

from models.entities import Assignment, LessonPlan
from models.views import CalendarCell, CalendarEvent, CalendarMonth, EventType

DEFAULT_LESSON_TIME = "9:00 AM"
ASSIGNMENT_TIME_LABEL = "Due"
SCHOOL_DAYS_PER_WEEK = 5


def to_calendar_date(value: dt.date | dt.datetime | str) -> dt.date:
    """Calendar date of a date, datetime or ISO string (time of day dropped)."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(value[:10])


def is_same_day(a: dt.date | dt.datetime | str, b: dt.date | dt.datetime | str) -> bool:
    return to_calendar_date(a) == to_calendar_date(b)


def weekday_index(day: dt.date) -> int:
    """Sunday-based weekday number (Sunday = 0)."""
    return (day.weekday() + 1) % 7


# ---------------------------------------------------------------------------
# Month navigation
# ---------------------------------------------------------------------------

def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months from (year, 0-based month), rolling over years."""
    return divmod(year * 12 + month + delta, 12)


def month_label(year: int, month: int) -> str:
    year, month = shift_month(year, month, 0)
    return f"{calendar.month_name[month + 1]} {year}"


def month_grid(year: int, month: int) -> list[dt.date | None]:
    """Display grid for a month: leading blanks, then one date per day.

    There is one ``None`` per weekday before day 1 (Sunday-first grid) and
    no trailing padding. Out-of-range months roll over like
    :func:`shift_month`.
    """
    year, month = shift_month(year, month, 0)
    first = dt.date(year, month + 1, 1)
    _, days_in_month = calendar.monthrange(year, month + 1)

    cells: list[dt.date | None] = [None] * weekday_index(first)
    cells.extend(first + dt.timedelta(days=offset) for offset in range(days_in_month))
    return cells


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

def lesson_plans_on_date(day: dt.date, lesson_plans: Iterable[LessonPlan]) -> list[LessonPlan]:
    return [plan for plan in lesson_plans if is_same_day(plan.date, day)]


def events_on_date(
    day: dt.date,
    lesson_plans: Iterable[LessonPlan],
    assignments: Iterable[Assignment],
    default_time: str = DEFAULT_LESSON_TIME,
) -> list[CalendarEvent]:
    """Events falling on ``day``: every matching lesson, then every assignment due."""
    day = to_calendar_date(day)
    events = [
        CalendarEvent(
            id=plan.id,
            title=plan.title,
            type=EventType.LESSON,
            time=plan.time or default_time,
            date=day,
        )
        for plan in lesson_plans_on_date(day, lesson_plans)
    ]
    events.extend(
        CalendarEvent(
            id=assignment.id,
            title=assignment.title,
            type=EventType.ASSIGNMENT,
            time=ASSIGNMENT_TIME_LABEL,
            date=day,
        )
        for assignment in assignments
        if assignment.due_date is not None and is_same_day(assignment.due_date, day)
    )
    return events


def upcoming_events(
    today: dt.date,
    lesson_plans: Iterable[LessonPlan],
    assignments: Iterable[Assignment],
    days: int = 7,
    limit: int | None = 5,
    default_time: str = DEFAULT_LESSON_TIME,
) -> list[CalendarEvent]:
    """Events over ``days`` days starting today, in date order, truncated to ``limit``."""
    lesson_plans = list(lesson_plans)
    assignments = list(assignments)
    events: list[CalendarEvent] = []
    for offset in range(days):
        day = today + dt.timedelta(days=offset)
        events.extend(events_on_date(day, lesson_plans, assignments, default_time))
    if limit is None:
        return events
    return events[:limit]


def build_month(
    year: int,
    month: int,
    lesson_plans: Iterable[LessonPlan],
    assignments: Iterable[Assignment],
    today: dt.date,
    default_time: str = DEFAULT_LESSON_TIME,
) -> CalendarMonth:
    """Month grid with each day's events and a today marker."""
    lesson_plans = list(lesson_plans)
    assignments = list(assignments)
    year, month = shift_month(year, month, 0)
    cells = [
        CalendarCell()
        if day is None
        else CalendarCell(
            date=day,
            is_today=day == today,
            events=events_on_date(day, lesson_plans, assignments, default_time),
        )
        for day in month_grid(year, month)
    ]
    return CalendarMonth(year=year, month=month, label=month_label(year, month), cells=cells)


# ---------------------------------------------------------------------------
# School week
# ---------------------------------------------------------------------------

def school_week(anchor: dt.date) -> list[dt.date]:
    """Monday to Friday of the week containing ``anchor``.

    The week starts on Monday, so a Sunday anchor maps to the following
    Monday.
    """
    monday = anchor - dt.timedelta(days=weekday_index(anchor) - 1)
    return [monday + dt.timedelta(days=offset) for offset in range(SCHOOL_DAYS_PER_WEEK)]
