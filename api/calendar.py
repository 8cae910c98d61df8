"""Calendar month view and weekly lesson planner."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query

from adapters.repositories import Repositories
from api.deps import get_repositories, get_today
from config.settings import get_settings
from errors import RecordValidationError
from models.entities import LessonPlan
from models.request import LessonMoveRequest
from models.views import CalendarMonth, LessonWeek
from services.calendar_view import shift_month
from services.pages import load_calendar, load_lesson_plans, move_lesson_plan

router = APIRouter(prefix="/api", tags=["calendar"])


@router.get("/calendar", response_model=CalendarMonth)
async def calendar_month(
    year: int | None = Query(default=None, ge=dt.MINYEAR, le=dt.MAXYEAR),
    month: int | None = Query(default=None, ge=0, le=11, description="0-based month"),
    delta: int = Query(default=0, description="months to move from year/month"),
    repos: Repositories = Depends(get_repositories),
    today: dt.date = Depends(get_today),
):
    """Month grid with events; ``delta=-1`` / ``delta=1`` navigate months."""
    settings = get_settings()
    year = today.year if year is None else year
    month = today.month - 1 if month is None else month
    year, month = shift_month(year, month, delta)
    if not dt.MINYEAR <= year <= dt.MAXYEAR:
        raise RecordValidationError(
            "delta", f"month outside years {dt.MINYEAR}-{dt.MAXYEAR}"
        )
    return await load_calendar(
        repos,
        year,
        month,
        today,
        window_days=settings.upcoming_window_days,
        upcoming_limit=settings.upcoming_display_limit,
        default_time=settings.default_lesson_time,
    )


@router.get("/lesson-plans", response_model=LessonWeek)
async def lesson_week(
    week_of: dt.date | None = Query(default=None, alias="weekOf"),
    repos: Repositories = Depends(get_repositories),
    today: dt.date = Depends(get_today),
):
    return await load_lesson_plans(repos, week_of or today)


@router.post("/lesson-plans/{plan_id}/move", response_model=LessonPlan)
async def move_lesson(
    plan_id: str,
    req: LessonMoveRequest,
    repos: Repositories = Depends(get_repositories),
):
    """Reschedule a lesson plan (drag-and-drop in the weekly planner)."""
    return await move_lesson_plan(repos, plan_id, req.date)
