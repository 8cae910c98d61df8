"""Gradebook aggregation: joins students, classes, assignments and grades.

Every function here is pure and synchronous: it reads entity snapshots and
returns new values without mutating its inputs. Structurally valid but
inconsistent data (a roster id with no student, a grade whose assignment was
deleted) degrades gracefully instead of raising:

- unknown roster ids are dropped from the resolved roster;
- grades whose assignment cannot be resolved are skipped.

Two empty-data policies differ on purpose: :func:`student_average` returns
``None`` when a student has no grades, while :func:`attendance_rate`
returns ``0`` when there are no attendance records.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TypeVar

import numpy as np

from errors import RecordValidationError
from models.entities import (
    Assignment,
    AttendanceRecord,
    AttendanceStatus,
    ClassSection,
    Grade,
    Student,
)
from models.views import (
    AttendanceSummary,
    ClassStatistics,
    GradeBand,
    GradebookRow,
    GradebookView,
    GradeCell,
)
from services.calendar_view import weekday_index

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Lower edge of each band, best first; anything below the last edge is POOR.
BAND_THRESHOLDS: tuple[tuple[float, GradeBand], ...] = (
    (90.0, GradeBand.EXCELLENT),
    (80.0, GradeBand.GOOD),
    (70.0, GradeBand.FAIR),
)

UNGRADED_DISPLAY = "—"


def index_by_id(entities: Iterable[T]) -> dict[str, T]:
    """Build an id → entity map; the first entity with a given id wins."""
    index: dict[str, T] = {}
    for entity in entities:
        index.setdefault(entity.id, entity)  # type: ignore[attr-defined]
    return index


# ---------------------------------------------------------------------------
# Roster
# ---------------------------------------------------------------------------

def resolve_roster(
    class_section: ClassSection,
    students: Sequence[Student] | Mapping[str, Student],
) -> list[Student]:
    """Students of a class, in the order the class lists their ids.

    Ids with no matching student are dropped. Pass a prebuilt
    :func:`index_by_id` map to avoid re-indexing per call.
    """
    by_id = students if isinstance(students, Mapping) else index_by_id(students)
    roster: list[Student] = []
    for student_id in class_section.student_ids:
        student = by_id.get(student_id)
        if student is None:
            logger.debug("Class %s lists unknown student %s", class_section.id, student_id)
            continue
        roster.append(student)
    return roster


def total_enrolled(classes: Iterable[ClassSection]) -> int:
    """Sum of roster sizes as listed (a student in two classes counts twice)."""
    return sum(len(c.student_ids) for c in classes)


def search_students(students: Iterable[Student], term: str) -> list[Student]:
    """Case-insensitive match on "first last" or email; a blank term keeps all."""
    needle = term.strip().lower()
    if not needle:
        return list(students)
    return [
        s for s in students
        if needle in f"{s.first_name} {s.last_name}".lower() or needle in s.email.lower()
    ]


# ---------------------------------------------------------------------------
# Grades
# ---------------------------------------------------------------------------

def class_assignments(class_id: str, assignments: Iterable[Assignment]) -> list[Assignment]:
    return [a for a in assignments if a.class_id == class_id]


def find_grade(student_id: str, assignment_id: str, grades: Iterable[Grade]) -> Grade | None:
    """First grade for the (student, assignment) pair in snapshot order.

    Duplicates are not expected; when they exist the earliest one wins.
    """
    for grade in grades:
        if grade.student_id == student_id and grade.assignment_id == assignment_id:
            return grade
    return None


def grade_percentage(grade: Grade, assignment: Assignment) -> float:
    return grade.score / assignment.points * 100


def student_average(
    student_id: str,
    assignments: Iterable[Assignment],
    grades: Sequence[Grade],
) -> float | None:
    """Unweighted mean of the student's per-assignment percentages.

    Each graded assignment counts once regardless of its point value.
    Returns ``None`` (not 0) when none of the assignments has a grade.
    Assignments with non-positive points are skipped.
    """
    percentages: list[float] = []
    for assignment in assignments:
        if assignment.points <= 0:
            logger.debug("Skipping assignment %s with %s points", assignment.id, assignment.points)
            continue
        grade = find_grade(student_id, assignment.id, grades)
        if grade is not None:
            percentages.append(grade_percentage(grade, assignment))
    if not percentages:
        return None
    return sum(percentages) / len(percentages)


def classify_percentage(percentage: float) -> GradeBand:
    """Band for a percentage; each band includes its lower edge.

    Out-of-range values still classify (negative → POOR, >100 → EXCELLENT).
    """
    for threshold, band in BAND_THRESHOLDS:
        if percentage >= threshold:
            return band
    return GradeBand.POOR


def validate_score(score: float, assignment: Assignment) -> float:
    """Check ``0 <= score <= assignment.points`` before a grade is written."""
    if not 0 <= score <= assignment.points:
        raise RecordValidationError(
            "score", f"must be between 0 and {assignment.points:g}"
        )
    return score


def recent_grades(grades: Iterable[Grade], limit: int = 5) -> list[Grade]:
    """Most recently submitted grades first; undated grades sort last."""
    grades = list(grades)
    dated = [g for g in grades if g.submitted_date is not None]
    undated = [g for g in grades if g.submitted_date is None]
    dated.sort(key=lambda g: _sortable_timestamp(g.submitted_date), reverse=True)
    return (dated + undated)[:limit]


def _sortable_timestamp(value: dt.datetime) -> float:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value.timestamp()


def upcoming_assignments(
    assignments: Iterable[Assignment],
    today: dt.date,
    limit: int = 5,
) -> list[Assignment]:
    """Assignments due today or later, soonest first."""
    due = [a for a in assignments if a.due_date is not None and a.due_date >= today]
    due.sort(key=lambda a: a.due_date)
    return due[:limit]


def classes_meeting_on(classes: Iterable[ClassSection], day: dt.date) -> list[ClassSection]:
    """Classes whose schedule includes the weekday of ``day``."""
    weekday = weekday_index(day)
    return [c for c in classes if weekday in c.schedule.days]


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

def attendance_summary(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    """Present / total counts and the present rate (0 when there are no records)."""
    records = list(records)
    total = len(records)
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    rate = present / total * 100 if total > 0 else 0.0
    return AttendanceSummary(present=present, total=total, rate=rate)


def attendance_rate(student_id: str, attendance: Iterable[AttendanceRecord]) -> float:
    """Percentage of the student's records marked present; 0 when there are none."""
    return attendance_summary(r for r in attendance if r.student_id == student_id).rate


def student_attendance(student_id: str, attendance: Iterable[AttendanceRecord]) -> AttendanceSummary:
    return attendance_summary(r for r in attendance if r.student_id == student_id)


def attendance_on(day: dt.date, attendance: Iterable[AttendanceRecord]) -> AttendanceSummary:
    return attendance_summary(r for r in attendance if r.date == day)


# ---------------------------------------------------------------------------
# Gradebook grid
# ---------------------------------------------------------------------------

def class_statistics(averages: Sequence[float]) -> ClassStatistics:
    """Descriptive statistics over per-student averages."""
    distribution = {band: 0 for band in GradeBand}
    for average in averages:
        distribution[classify_percentage(average)] += 1
    if not averages:
        return ClassStatistics(distribution=distribution)

    arr = np.array(averages, dtype=float)
    return ClassStatistics(
        count=len(averages),
        mean=round(float(np.mean(arr)), 2),
        median=round(float(np.median(arr)), 2),
        min=round(float(np.min(arr)), 2),
        max=round(float(np.max(arr)), 2),
        distribution=distribution,
    )


def _grade_cell(student_id: str, assignment: Assignment, grades: Sequence[Grade]) -> GradeCell:
    grade = find_grade(student_id, assignment.id, grades)
    if grade is None:
        return GradeCell(
            assignment_id=assignment.id,
            points=assignment.points,
            display=UNGRADED_DISPLAY,
        )
    percentage = grade_percentage(grade, assignment) if assignment.points > 0 else None
    return GradeCell(
        assignment_id=assignment.id,
        grade_id=grade.id,
        score=grade.score,
        points=assignment.points,
        percentage=percentage,
        band=classify_percentage(percentage) if percentage is not None else None,
        display=f"{grade.score:g}/{assignment.points:g}",
    )


def build_gradebook(
    class_section: ClassSection,
    students: Sequence[Student] | Mapping[str, Student],
    assignments: Iterable[Assignment],
    grades: Sequence[Grade],
) -> GradebookView:
    """Roster × class-assignment grid with per-student averages."""
    roster = resolve_roster(class_section, students)
    columns = class_assignments(class_section.id, assignments)

    rows: list[GradebookRow] = []
    averages: list[float] = []
    for student in roster:
        average = student_average(student.id, columns, grades)
        if average is not None:
            averages.append(average)
        rows.append(GradebookRow(
            student_id=student.id,
            name=student.full_name,
            email=student.email,
            initials=student.initials,
            cells=[_grade_cell(student.id, a, grades) for a in columns],
            average=average,
            average_band=classify_percentage(average) if average is not None else None,
        ))

    return GradebookView(
        class_id=class_section.id,
        class_name=class_section.name,
        assignments=columns,
        rows=rows,
        statistics=class_statistics(averages),
    )
