"""Shared pytest fixtures and configuration for all tests."""

import pytest
from dotenv import load_dotenv

from rankmetrics.data.models import RankedItem

# Load .env file at test startup (before any tests run)
load_dotenv()

SETTINGS_ENV_VARS = (
    "DEFAULT_LIST_SIZE",
    "DEFAULT_MAX_GRADE",
    "RELEVANCE_PROBABILITY",
    "RANDOM_SEED",
    "DISPLAY_PRECISION",
    "LOG_LEVEL",
)


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Args:
        monkeypatch: pytest's monkeypatch fixture for modifying environment.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DEFAULT_LIST_SIZE": "6",
        "DEFAULT_MAX_GRADE": "3",
        "RANDOM_SEED": "42",
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture(autouse=True)
def reset_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment to avoid test pollution.

    This fixture runs automatically for every test.
    """
    for key in SETTINGS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_ranking() -> list[RankedItem]:
    """Six graded items, relevant at ranks 1, 2 and 5.

    Grades: 3, 2, 3, 0, 1, 2.
    """
    grades = ["3", "2", "3", "0", "1", "2"]
    relevant = [True, True, False, False, True, False]
    return [
        RankedItem(item_id=f"item-{i}", grade_text=grade, is_relevant=flag)
        for i, (grade, flag) in enumerate(zip(grades, relevant))
    ]
