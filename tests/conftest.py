"""Shared pytest fixtures for the classroom dashboard tests.

Provides:
- ``store``: Fresh InMemoryRecordStore seeded with the sample records
- ``repos``: All six repositories wired to ``store``
- ``students`` / ``classes`` / ``assignments`` / ``grades`` / ``attendance`` /
  ``lesson_plans``: Parsed entity snapshots of the same sample records
"""

from __future__ import annotations

import pytest

from adapters.repositories import Repositories, build_repositories
from config.settings import Settings
from models.entities import (
    Assignment,
    AttendanceRecord,
    ClassSection,
    Grade,
    LessonPlan,
    Student,
)
from services import mock_data
from services.record_store import InMemoryRecordStore


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Fresh seeded store — isolated per test."""
    return InMemoryRecordStore(seed=mock_data.SEED)


@pytest.fixture
def repos(store: InMemoryRecordStore) -> Repositories:
    return build_repositories(store, Settings())


@pytest.fixture
def students() -> list[Student]:
    return [Student.model_validate(r) for r in mock_data.STUDENTS]


@pytest.fixture
def classes() -> list[ClassSection]:
    return [ClassSection.model_validate(r) for r in mock_data.CLASSES]


@pytest.fixture
def assignments() -> list[Assignment]:
    return [Assignment.model_validate(r) for r in mock_data.ASSIGNMENTS]


@pytest.fixture
def grades() -> list[Grade]:
    return [Grade.model_validate(r) for r in mock_data.GRADES]


@pytest.fixture
def attendance() -> list[AttendanceRecord]:
    return [AttendanceRecord.model_validate(r) for r in mock_data.ATTENDANCE]


@pytest.fixture
def lesson_plans() -> list[LessonPlan]:
    return [LessonPlan.model_validate(r) for r in mock_data.LESSON_PLANS]
