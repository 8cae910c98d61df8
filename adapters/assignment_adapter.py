"""Adapter for the ``assignments`` table → :class:`models.entities.Assignment`."""

from __future__ import annotations

from typing import Any

from adapters.base import EntityRepository, FieldMap
from errors import RecordValidationError
from models.entities import Assignment

ASSIGNMENT_FIELDS = FieldMap({
    "id": "id",
    "class_id": "classId",
    "title": "title",
    "category": "category",
    "points": "points",
    "due_date": "dueDate",
})


def _check_points(fields: dict[str, Any]) -> None:
    if "points" not in fields:
        return
    try:
        points = float(fields["points"])
    except (TypeError, ValueError):
        raise RecordValidationError("points", "must be a number") from None
    if points <= 0:
        raise RecordValidationError("points", "must be greater than 0")


class AssignmentRepository(EntityRepository[Assignment]):
    table = "assignments"
    model = Assignment
    field_map = ASSIGNMENT_FIELDS

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        _check_points(fields)
        return fields

    def prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        _check_points(fields)
        return fields
