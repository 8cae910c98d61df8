"""Repository bundle — all six entity repositories around one shared store."""

from __future__ import annotations

from dataclasses import dataclass

from adapters.assignment_adapter import AssignmentRepository
from adapters.attendance_adapter import AttendanceRepository
from adapters.base import EntityRepository
from adapters.class_adapter import ClassRepository
from adapters.grade_adapter import GradeRepository
from adapters.lesson_plan_adapter import LessonPlanRepository
from adapters.student_adapter import StudentRepository
from config.settings import Settings, get_settings
from services.record_store import RecordStore


@dataclass
class Repositories:
    students: StudentRepository
    classes: ClassRepository
    assignments: AssignmentRepository
    grades: GradeRepository
    attendance: AttendanceRepository
    lesson_plans: LessonPlanRepository

    def for_table(self, table: str) -> EntityRepository | None:
        """Look up a repository by its record-store table name."""
        for repo in (
            self.students, self.classes, self.assignments,
            self.grades, self.attendance, self.lesson_plans,
        ):
            if repo.table == table:
                return repo
        return None


def build_repositories(store: RecordStore, settings: Settings | None = None) -> Repositories:
    """Wire every repository to ``store`` (passed by reference, not copied)."""
    settings = settings or get_settings()
    return Repositories(
        students=StudentRepository(
            store,
            avatar_base_url=settings.avatar_base_url,
            avatar_background=settings.avatar_background,
        ),
        classes=ClassRepository(store, default_days=settings.default_class_days),
        assignments=AssignmentRepository(store),
        grades=GradeRepository(store),
        attendance=AttendanceRepository(store),
        lesson_plans=LessonPlanRepository(store),
    )
