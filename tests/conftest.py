"""
Pytest fixtures for Form Builder testing infrastructure.

This module provides:
1. Test environment settings
2. Mock fixtures (database session, form service, repository)
3. Authentication fixtures (see tests/fixtures/auth.py)
4. Common designer fixtures
"""

import os
import sys
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Settings are read lazily, but set the required ones before anything imports them
os.environ.setdefault("FORMBUILDER_ENVIRONMENT", "testing")
os.environ.setdefault("FORMBUILDER_SECRET_KEY", "test-secret-key-for-testing-must-be-32-chars")

# Import fixture modules
pytest_plugins = [
    "tests.fixtures.auth",
]


# ==================== SESSION FIXTURES ====================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables once per session."""
    os.environ["FORMBUILDER_ENVIRONMENT"] = "testing"
    os.environ["FORMBUILDER_SECRET_KEY"] = "test-secret-key-for-testing-must-be-32-chars"

    # Pick up the test environment in cached settings and database globals
    from formbuilder.config import get_settings
    from formbuilder.core.database import reset_db_state

    get_settings.cache_clear()
    reset_db_state()

    yield

    get_settings.cache_clear()
    reset_db_state()


# ==================== MOCK FIXTURES ====================


@pytest.fixture
def mock_session():
    """Mock AsyncSession for repository and service unit tests."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_form_repo():
    """Mock FormRepository with every collaborator method stubbed."""
    repo = AsyncMock()
    repo.get_form = AsyncMock(return_value=None)
    repo.list_forms = AsyncMock(return_value=[])
    repo.increment_visits = AsyncMock(return_value=None)
    repo.get_published_by_share_url = AsyncMock(return_value=None)
    repo.add_submission = AsyncMock(return_value=None)
    repo.get_form_with_submissions = AsyncMock(return_value=None)
    repo.get_stats = AsyncMock(return_value=(0, 0))
    return repo


# ==================== TEST DATA FIXTURES ====================


@pytest.fixture
def sample_layout_wire() -> list[dict[str, Any]]:
    """Stored layout with a title and one required text input."""
    return [
        {
            "id": "t1",
            "type": "TitleField",
            "extraAttributes": {"title": "Welcome"},
        },
        {
            "id": "n1",
            "type": "TextField",
            "extraAttributes": {
                "label": "Name",
                "helperText": "",
                "required": True,
                "placeholder": "",
            },
        },
    ]
