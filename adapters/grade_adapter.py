"""Adapter for the ``grades`` table → :class:`models.entities.Grade`.

Score range checks need the owning assignment, so they live with the
gradebook mutation (:func:`services.pages.record_grade`), not here.
"""

from __future__ import annotations

from adapters.base import EntityRepository, FieldMap
from models.entities import Grade

GRADE_FIELDS = FieldMap({
    "id": "id",
    "student_id": "studentId",
    "assignment_id": "assignmentId",
    "score": "score",
    "submitted_date": "submittedDate",
    "feedback": "feedback",
})


class GradeRepository(EntityRepository[Grade]):
    table = "grades"
    model = Grade
    field_map = GRADE_FIELDS
