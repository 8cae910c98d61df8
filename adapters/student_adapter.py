"""Adapter for the ``students`` table → :class:`models.entities.Student`."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from adapters.base import EntityRepository, FieldMap
from models.entities import Student
from services.record_store import RecordStore

STUDENT_FIELDS = FieldMap({
    "id": "id",
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "parent_contact": "parentContact",
    "notes": "notes",
    "photo_url": "photoUrl",
})


def avatar_url(first_name: str, last_name: str, base_url: str, background: str) -> str:
    """Initials avatar for a student without a photo."""
    query = urlencode({
        "name": f"{first_name} {last_name}".strip(),
        "background": background,
        "color": "fff",
    })
    return f"{base_url}?{query}"


class StudentRepository(EntityRepository[Student]):
    table = "students"
    model = Student
    field_map = STUDENT_FIELDS

    def __init__(
        self,
        store: RecordStore,
        avatar_base_url: str = "https://ui-avatars.com/api/",
        avatar_background: str = "2E7D32",
    ) -> None:
        super().__init__(store)
        self._avatar_base_url = avatar_base_url
        self._avatar_background = avatar_background

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        if not fields.get("photo_url"):
            fields["photo_url"] = avatar_url(
                fields.get("first_name", ""),
                fields.get("last_name", ""),
                self._avatar_base_url,
                self._avatar_background,
            )
        return fields
