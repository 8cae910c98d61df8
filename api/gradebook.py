"""Gradebook page and grade entry."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from adapters.repositories import Repositories
from api.deps import get_repositories
from models.entities import Grade
from models.request import GradeUpdateRequest
from models.views import GradebookPage
from services.pages import load_gradebook, record_grade

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gradebook", tags=["gradebook"])


@router.get("", response_model=GradebookPage)
async def gradebook_page(
    class_id: str | None = Query(default=None, alias="classId"),
    repos: Repositories = Depends(get_repositories),
):
    """Roster x assignment grid; defaults to the first class."""
    return await load_gradebook(repos, class_id)


@router.put("/grades", response_model=Grade)
async def put_grade(
    req: GradeUpdateRequest,
    repos: Repositories = Depends(get_repositories),
):
    """Create or update the grade for one student on one assignment."""
    grade = await record_grade(repos, req.student_id, req.assignment_id, req.score)
    logger.info(
        "Grade recorded: student=%s assignment=%s score=%s",
        req.student_id, req.assignment_id, req.score,
    )
    return grade
