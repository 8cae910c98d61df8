"""Dashboard, students and classes pages."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query

from adapters.repositories import Repositories
from api.deps import get_repositories, get_today
from config.settings import get_settings
from models.views import ClassesPage, DashboardSummary, StudentsPage
from services.pages import load_classes, load_dashboard, load_students

router = APIRouter(prefix="/api", tags=["pages"])


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(
    repos: Repositories = Depends(get_repositories),
    today: dt.date = Depends(get_today),
):
    """Today's classes, upcoming assignments, recent grades and attendance."""
    settings = get_settings()
    return await load_dashboard(repos, today, list_limit=settings.dashboard_list_limit)


@router.get("/students", response_model=StudentsPage)
async def students(
    search: str = Query(default=""),
    repos: Repositories = Depends(get_repositories),
):
    return await load_students(repos, search)


@router.get("/classes", response_model=ClassesPage)
async def classes(repos: Repositories = Depends(get_repositories)):
    return await load_classes(repos)
