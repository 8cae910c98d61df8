"""Adapter for the ``classes`` table → :class:`models.entities.ClassSection`.

New classes start with an empty roster and, unless told otherwise, meet
every school day (Monday to Friday).
"""

from __future__ import annotations

from typing import Any

from adapters.base import EntityRepository, FieldMap
from models.entities import ClassSection
from services.record_store import RecordStore

CLASS_FIELDS = FieldMap({
    "id": "id",
    "name": "name",
    "subject": "subject",
    "period": "period",
    "room": "room",
    "schedule": "schedule",
    "student_ids": "studentIds",
})


class ClassRepository(EntityRepository[ClassSection]):
    table = "classes"
    model = ClassSection
    field_map = CLASS_FIELDS

    def __init__(self, store: RecordStore, default_days: list[int] | None = None) -> None:
        super().__init__(store)
        self._default_days = list(default_days) if default_days is not None else [1, 2, 3, 4, 5]

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        if fields.get("student_ids") is None:
            fields["student_ids"] = []
        schedule = fields.get("schedule")
        if schedule is None:
            fields["schedule"] = {"time": "", "days": list(self._default_days)}
        elif isinstance(schedule, dict) and "days" not in schedule:
            fields["schedule"] = {**schedule, "days": list(self._default_days)}
        return fields
