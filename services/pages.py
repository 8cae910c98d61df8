"""Page loaders and mutations: what each dashboard page fetches and derives.

Every loader fans out its snapshot fetches concurrently and fails as a
unit: the first failing fetch cancels its siblings and its exception
propagates unchanged (a :class:`errors.StoreError` becomes the page's single
error state). Nothing is retried; the caller reloads explicitly.

Mutations are one store call per user action (plus the reads they need).
They are not atomic across entities.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, TypeVar

from adapters.repositories import Repositories
from errors import NotFoundError
from models.entities import Grade, LessonPlan
from models.views import (
    CalendarMonth,
    ClassCard,
    ClassesPage,
    DashboardSummary,
    GradebookPage,
    LessonDay,
    LessonWeek,
    StudentRow,
    StudentsPage,
)
from services import calendar_view, gradebook

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")

CLASS_PREVIEW_SIZE = 3


async def fetch_all(page: str, *fetches: Awaitable[Any]) -> list[Any]:
    """Await every fetch concurrently; any failure fails the whole page."""
    tasks = [asyncio.ensure_future(fetch) for fetch in fetches]
    try:
        return list(await asyncio.gather(*tasks))
    except Exception as exc:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.warning("%s load failed: %s", page, exc)
        raise


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

async def load_dashboard(
    repos: Repositories,
    today: dt.date,
    list_limit: int = 5,
) -> DashboardSummary:
    classes, assignments, grades, attendance = await fetch_all(
        "dashboard",
        repos.classes.list(),
        repos.assignments.list(),
        repos.grades.list(),
        repos.attendance.list(),
    )
    return DashboardSummary(
        today=today,
        today_classes=gradebook.classes_meeting_on(classes, today),
        upcoming_assignments=gradebook.upcoming_assignments(assignments, today, list_limit),
        recent_grades=gradebook.recent_grades(grades, list_limit),
        attendance_summary=gradebook.attendance_on(today, attendance),
        total_students=gradebook.total_enrolled(classes),
    )


async def load_gradebook(repos: Repositories, class_id: str | None = None) -> GradebookPage:
    """Gradebook grid for ``class_id``, or for the first class when none is given."""
    classes, students, assignments, grades = await fetch_all(
        "gradebook",
        repos.classes.list(),
        repos.students.list(),
        repos.assignments.list(),
        repos.grades.list(),
    )
    selected_id = class_id or (classes[0].id if classes else None)
    if selected_id is None:
        return GradebookPage(classes=classes)

    selected = next((c for c in classes if c.id == selected_id), None)
    if selected is None:
        raise NotFoundError(table="classes", entity_id=selected_id)

    view = gradebook.build_gradebook(
        selected, gradebook.index_by_id(students), assignments, grades,
    )
    return GradebookPage(classes=classes, selected_class_id=selected.id, gradebook=view)


async def load_calendar(
    repos: Repositories,
    year: int,
    month: int,
    today: dt.date,
    window_days: int = 7,
    upcoming_limit: int = 5,
    default_time: str = calendar_view.DEFAULT_LESSON_TIME,
) -> CalendarMonth:
    """Month grid (0-based ``month``) plus the upcoming-week summary."""
    lesson_plans, assignments = await fetch_all(
        "calendar",
        repos.lesson_plans.list(),
        repos.assignments.list(),
    )
    month_view = calendar_view.build_month(
        year, month, lesson_plans, assignments, today, default_time,
    )
    month_view.upcoming = calendar_view.upcoming_events(
        today, lesson_plans, assignments,
        days=window_days, limit=upcoming_limit, default_time=default_time,
    )
    return month_view


async def load_students(repos: Repositories, search: str = "") -> StudentsPage:
    """Students matching ``search`` with their average, band and attendance."""
    students, assignments, grades, attendance = await fetch_all(
        "students",
        repos.students.list(),
        repos.assignments.list(),
        repos.grades.list(),
        repos.attendance.list(),
    )
    rows = []
    for student in gradebook.search_students(students, search):
        average = gradebook.student_average(student.id, assignments, grades)
        rows.append(StudentRow(
            student=student,
            average=average,
            band=gradebook.classify_percentage(average) if average is not None else None,
            attendance=gradebook.student_attendance(student.id, attendance),
        ))
    return StudentsPage(search=search, students=rows)


async def load_classes(repos: Repositories) -> ClassesPage:
    classes, students = await fetch_all(
        "classes",
        repos.classes.list(),
        repos.students.list(),
    )
    by_id = gradebook.index_by_id(students)
    cards = []
    for class_section in classes:
        roster = gradebook.resolve_roster(class_section, by_id)
        cards.append(ClassCard(
            class_section=class_section,
            student_count=len(roster),
            preview=roster[:CLASS_PREVIEW_SIZE],
            remaining=max(len(roster) - CLASS_PREVIEW_SIZE, 0),
        ))
    return ClassesPage(classes=cards)


async def load_lesson_plans(repos: Repositories, week_of: dt.date) -> LessonWeek:
    """Lesson plans for the school week (Monday to Friday) containing ``week_of``."""
    lesson_plans, classes = await fetch_all(
        "lesson plans",
        repos.lesson_plans.list(),
        repos.classes.list(),
    )
    days = calendar_view.school_week(week_of)
    return LessonWeek(
        week_of=days[0],
        classes=classes,
        days=[
            LessonDay(date=day, plans=calendar_view.lesson_plans_on_date(day, lesson_plans))
            for day in days
        ],
    )


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

async def record_grade(
    repos: Repositories,
    student_id: str,
    assignment_id: str,
    score: float,
    grades: Sequence[Grade] | None = None,
    now: dt.datetime | None = None,
) -> Grade:
    """Set a student's score on an assignment.

    Updates the first existing grade for the pair (see
    :func:`services.gradebook.find_grade`) or creates one. ``grades`` is the
    caller's snapshot; it is fetched when omitted.

    Raises:
        NotFoundError: The assignment does not exist.
        RecordValidationError: ``score`` is outside ``[0, points]``.
    """
    assignment = await repos.assignments.get_by_id(assignment_id)
    if assignment is None:
        raise NotFoundError(table="assignments", entity_id=assignment_id)
    gradebook.validate_score(score, assignment)

    if grades is None:
        grades = await repos.grades.list()
    submitted = now or dt.datetime.now(dt.timezone.utc)

    existing = gradebook.find_grade(student_id, assignment_id, grades)
    if existing is not None:
        return await repos.grades.update(
            existing.id, {"score": score, "submitted_date": submitted},
        )
    return await repos.grades.create({
        "student_id": student_id,
        "assignment_id": assignment_id,
        "score": score,
        "submitted_date": submitted,
        "feedback": "",
    })


async def move_lesson_plan(repos: Repositories, plan_id: str, target: dt.date) -> LessonPlan:
    """Reschedule a lesson plan to another day."""
    return await repos.lesson_plans.update(plan_id, {"date": target})


def merge_entity(snapshot: Sequence[EntityT], entity: EntityT) -> list[EntityT]:
    """New snapshot with ``entity`` replacing its id's entry, or appended."""
    merged = list(snapshot)
    for index, current in enumerate(merged):
        if current.id == entity.id:  # type: ignore[attr-defined]
            merged[index] = entity
            return merged
    merged.append(entity)
    return merged


def remove_entity(snapshot: Sequence[EntityT], entity_id: str) -> list[EntityT]:
    return [e for e in snapshot if e.id != entity_id]  # type: ignore[attr-defined]
