"""Adapter for the ``attendance`` table → :class:`models.entities.AttendanceRecord`."""

from __future__ import annotations

from adapters.base import EntityRepository, FieldMap
from models.entities import AttendanceRecord

ATTENDANCE_FIELDS = FieldMap({
    "id": "id",
    "student_id": "studentId",
    "date": "date",
    "status": "status",
})


class AttendanceRepository(EntityRepository[AttendanceRecord]):
    table = "attendance"
    model = AttendanceRecord
    field_map = ATTENDANCE_FIELDS
