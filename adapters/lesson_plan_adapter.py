"""Adapter for the ``lesson-plans`` table → :class:`models.entities.LessonPlan`."""

from __future__ import annotations

from typing import Any

from adapters.base import EntityRepository, FieldMap
from models.entities import LessonPlan

LESSON_PLAN_FIELDS = FieldMap({
    "id": "id",
    "class_id": "classId",
    "date": "date",
    "title": "title",
    "time": "time",
    "objectives": "objectives",
    "activities": "activities",
    "materials": "materials",
    "homework": "homework",
})

_LIST_FIELDS = ("objectives", "activities", "materials")


def _drop_blank_entries(fields: dict[str, Any]) -> dict[str, Any]:
    for name in _LIST_FIELDS:
        items = fields.get(name)
        if items is not None:
            fields[name] = [item for item in items if isinstance(item, str) and item.strip()]
    return fields


class LessonPlanRepository(EntityRepository[LessonPlan]):
    table = "lesson-plans"
    model = LessonPlan
    field_map = LESSON_PLAN_FIELDS

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return _drop_blank_entries(fields)

    def prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        return _drop_blank_entries(fields)
