"""Derived view models — what the aggregation layer and page loaders return.

Nothing here is stored; every model is rebuilt from entity snapshots on
each page load.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import Field

from models.base import CamelModel
from models.entities import Assignment, ClassSection, Grade, LessonPlan, Student


class GradeBand(str, Enum):
    """Qualitative grade categories, best first."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class EventType(str, Enum):
    LESSON = "lesson"
    ASSIGNMENT = "assignment"


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

class CalendarEvent(CamelModel):
    """A lesson or an assignment due date shown on a calendar day."""
    id: str
    title: str
    type: EventType
    time: str
    date: dt.date


class CalendarCell(CamelModel):
    """One grid cell; ``date`` is None for the leading blanks."""
    date: dt.date | None = None
    is_today: bool = False
    events: list[CalendarEvent] = Field(default_factory=list)


class CalendarMonth(CamelModel):
    year: int
    month: int  # 0-based, January = 0
    label: str
    cells: list[CalendarCell] = Field(default_factory=list)
    upcoming: list[CalendarEvent] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

class AttendanceSummary(CamelModel):
    present: int = 0
    total: int = 0
    rate: float = 0.0


# ---------------------------------------------------------------------------
# Gradebook
# ---------------------------------------------------------------------------

class GradeCell(CamelModel):
    """One student x assignment cell; score is None when ungraded."""
    assignment_id: str
    grade_id: str | None = None
    score: float | None = None
    points: float
    percentage: float | None = None
    band: GradeBand | None = None
    display: str


class GradebookRow(CamelModel):
    student_id: str
    name: str
    email: str = ""
    initials: str = ""
    cells: list[GradeCell] = Field(default_factory=list)
    average: float | None = None
    average_band: GradeBand | None = None


class ClassStatistics(CamelModel):
    """Summary of the per-student averages of one class."""
    count: int = 0
    mean: float | None = None
    median: float | None = None
    min: float | None = None
    max: float | None = None
    distribution: dict[GradeBand, int] = Field(default_factory=dict)


class GradebookView(CamelModel):
    class_id: str
    class_name: str
    assignments: list[Assignment] = Field(default_factory=list)
    rows: list[GradebookRow] = Field(default_factory=list)
    statistics: ClassStatistics = Field(default_factory=ClassStatistics)


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

class DashboardSummary(CamelModel):
    today: dt.date
    today_classes: list[ClassSection] = Field(default_factory=list)
    upcoming_assignments: list[Assignment] = Field(default_factory=list)
    recent_grades: list[Grade] = Field(default_factory=list)
    attendance_summary: AttendanceSummary = Field(default_factory=AttendanceSummary)
    total_students: int = 0


class GradebookPage(CamelModel):
    classes: list[ClassSection] = Field(default_factory=list)
    selected_class_id: str | None = None
    gradebook: GradebookView | None = None


class StudentRow(CamelModel):
    student: Student
    average: float | None = None
    band: GradeBand | None = None
    attendance: AttendanceSummary = Field(default_factory=AttendanceSummary)


class StudentsPage(CamelModel):
    search: str = ""
    students: list[StudentRow] = Field(default_factory=list)


class ClassCard(CamelModel):
    class_section: ClassSection
    student_count: int = 0
    preview: list[Student] = Field(default_factory=list)
    remaining: int = 0


class ClassesPage(CamelModel):
    classes: list[ClassCard] = Field(default_factory=list)


class LessonDay(CamelModel):
    date: dt.date
    plans: list[LessonPlan] = Field(default_factory=list)


class LessonWeek(CamelModel):
    week_of: dt.date
    classes: list[ClassSection] = Field(default_factory=list)
    days: list[LessonDay] = Field(default_factory=list)
