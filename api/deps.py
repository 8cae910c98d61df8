"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

import datetime as dt

from adapters.repositories import Repositories, build_repositories
from services.record_store import get_record_store

_repos: Repositories | None = None


def get_repositories() -> Repositories:
    """Repositories over the process-wide record store (built on first use)."""
    global _repos
    if _repos is None:
        _repos = build_repositories(get_record_store())
    return _repos


def get_today() -> dt.date:
    """Today's date; overridden in tests to pin the calendar."""
    return dt.date.today()
