"""Shared fixtures for the clarification engine tests."""

import pytest

from voice_clarify.agent.schemas import ClarificationConfig
from voice_clarify.agent.state import reset_sessions


@pytest.fixture(autouse=True)
def clean_sessions():
    """Every test starts with an empty session store."""
    reset_sessions()
    yield
    reset_sessions()


@pytest.fixture
def default_config():
    return ClarificationConfig()


@pytest.fixture
def generic_meeting_parse():
    """First parse of "Book a meeting tomorrow": generic title, no time or duration."""
    return {
        "title": "meeting",
        "due_date": "2026-02-28",
        "category": "work",
        "calendar": {},
    }


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from main import app

    return TestClient(app)
