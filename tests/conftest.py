"""Shared test fixtures and utilities for taskdate tests."""

import pytest
from datetime import datetime, timezone

from taskdate.config import reload_config


# June 15, 2026 is a Monday
REFERENCE = datetime(2026, 6, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def reference():
    """Fixed reference instant: Monday 2026-06-15 10:30:00 UTC."""
    return REFERENCE


@pytest.fixture
def clean_config(monkeypatch):
    """Fixture that clears env overrides and reloads config around a test.

    Example:
        def test_default_week_start(clean_config):
            assert default_week_start() == 1
    """
    monkeypatch.delenv("TASKDATE_WEEK_START", raising=False)
    monkeypatch.delenv("TASKDATE_FUZZY_THRESHOLD", raising=False)
    reload_config()
    yield monkeypatch
    monkeypatch.undo()
    reload_config()
