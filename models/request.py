"""API request models."""

from __future__ import annotations

import datetime as dt

from models.base import CamelModel


class GradeUpdateRequest(CamelModel):
    """PUT /api/gradebook/grades — request body."""

    student_id: str
    assignment_id: str
    score: float


class LessonMoveRequest(CamelModel):
    """POST /api/lesson-plans/{plan_id}/move — request body."""

    date: dt.date
