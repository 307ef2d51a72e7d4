"""Root conftest for enforcing the test suite time limit and isolating user settings."""

import os
import time
from pathlib import Path
from typing import Final

import pytest

from beacon.messages.config import CONFIG_PATH_ENV_VAR
from beacon.messages.config import LOG_LEVEL_ENV_VAR

# The whole suite is pure in-process work; anything slower than this points at a problem
_DEFAULT_MAX_DURATION_SECONDS: Final[float] = 30.0


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session: pytest.Session) -> None:
    setattr(session, "start_time", time.time())


@pytest.hookimpl(trylast=True)
def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Check that the total test session time is under the configured limit.

    PYTEST_MAX_DURATION overrides the limit (in seconds).
    """
    if not hasattr(session, "start_time"):
        return
    duration = time.time() - session.start_time
    max_duration = float(os.environ.get("PYTEST_MAX_DURATION", _DEFAULT_MAX_DURATION_SECONDS))
    if duration > max_duration:
        pytest.exit(
            f"Test suite took {duration:.2f}s, exceeding the {max_duration}s limit",
            returncode=1,
        )


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the real ~/.beacon/messages.toml and settings env vars."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
