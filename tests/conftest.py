"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_PIPE_ENV_VARIABLES = (
    "LINEPIPE_CHANNEL_CAPACITY",
    "LINEPIPE_READ_CHUNK_SIZE",
    "LINEPIPE_READ_TIMEOUT",
    "LINEPIPE_CLOSE_TIMEOUT",
    "LINEPIPE_ENCODING",
)


def pytest_sessionstart() -> None:
    """Add the project root and src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root, project_root / "src"):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _isolate_pipe_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer LINEPIPE_* overrides out of test runs."""
    for variable in _PIPE_ENV_VARIABLES:
        monkeypatch.delenv(variable, raising=False)
