"""Shared fixtures for the task extraction tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from journal_tasks.logic import TaskExtractor

# A Saturday.
REFERENCE_TIME = datetime(2025, 3, 1, 9, 30)
TODAY = date(2025, 3, 1)


@pytest.fixture
def now() -> datetime:
    return REFERENCE_TIME


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def extractor(monkeypatch: pytest.MonkeyPatch) -> TaskExtractor:
    monkeypatch.delenv("TASK_EXTRACTOR_RESOLVE_WEEKDAYS", raising=False)
    return TaskExtractor()
