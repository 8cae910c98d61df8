"""Canonical in-memory shape of every record-store table.

Repositories in ``adapters/`` translate the store's wire records into these
snake_case models (see :class:`adapters.base.FieldMap`), so the
aggregation layer in ``services/`` never sees wire field names. API output
is camelCase through :class:`models.base.CamelModel`.

Dates are calendar dates. The store sometimes carries full ISO datetimes
(``2024-03-15T23:59:00Z``) where a date is meant; the calendar date as
written is kept and the time of day is dropped.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from models.base import CamelModel


def _coerce_calendar_date(value: Any) -> Any:
    """Reduce ISO datetime strings / datetimes to their calendar date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
        return value[:10]
    return value


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------

class Student(CamelModel):
    """A student, identified by a store-assigned id."""
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    parent_contact: str | None = None
    notes: str | None = None
    photo_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------

class Schedule(CamelModel):
    """Meeting time and weekdays (0 = Sunday ... 6 = Saturday)."""
    time: str = ""
    days: list[int] = Field(default_factory=list)

    @field_validator("days")
    @classmethod
    def _check_weekdays(cls, days: list[int]) -> list[int]:
        for day in days:
            if not 0 <= day <= 6:
                raise ValueError(f"weekday {day} outside 0-6")
        return days


class ClassSection(CamelModel):
    """A class section with its ordered roster of student ids."""
    id: str
    name: str = ""
    subject: str = ""
    period: str = ""
    room: str = ""
    schedule: Schedule = Field(default_factory=Schedule)
    student_ids: list[str] = Field(default_factory=list)

    @field_validator("period", "room", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("schedule", mode="before")
    @classmethod
    def _default_schedule(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("student_ids", mode="before")
    @classmethod
    def _default_student_ids(cls, value: Any) -> Any:
        if value is None:
            return []
        return [str(v) for v in value]


# ---------------------------------------------------------------------------
# Assignments & grades
# ---------------------------------------------------------------------------

class Assignment(CamelModel):
    """An assignment belonging to one class, worth ``points``."""
    id: str
    class_id: str = ""
    title: str = ""
    category: str = ""
    points: float = 100
    due_date: dt.date | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _calendar_due_date(cls, value: Any) -> Any:
        return _coerce_calendar_date(value)


class Grade(CamelModel):
    """A score one student earned on one assignment."""
    id: str
    student_id: str
    assignment_id: str
    score: float = 0
    submitted_date: dt.datetime | None = None
    feedback: str = ""

    @field_validator("feedback", mode="before")
    @classmethod
    def _default_feedback(cls, value: Any) -> Any:
        return "" if value is None else value


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class AttendanceRecord(CamelModel):
    id: str
    student_id: str
    date: dt.date
    status: AttendanceStatus

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> Any:
        return _coerce_calendar_date(value)


# ---------------------------------------------------------------------------
# Lesson plans
# ---------------------------------------------------------------------------

class LessonPlan(CamelModel):
    """A planned lesson for one class on one day."""
    id: str
    class_id: str = ""
    date: dt.date
    title: str = ""
    time: str | None = None  # display time; calendar falls back to a placeholder
    objectives: list[str] = Field(default_factory=list)
    activities: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    homework: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> Any:
        return _coerce_calendar_date(value)

    @field_validator("objectives", "activities", "materials", mode="before")
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return [] if value is None else value
