"""Shared fixtures for scratchpad tests."""

from pathlib import Path

import pytest

from scratchpad.config import ScratchpadConfig
from scratchpad.sandbox.runner import ExecutionContext


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's SCRATCHPAD_* variables out of tests."""
    for name in ("SCRATCHPAD_HISTORY_FILE", "SCRATCHPAD_HISTORY_MAX_SIZE", "SCRATCHPAD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def history_file(tmp_path: Path) -> Path:
    """Path of a history file inside the test's temporary directory."""
    return tmp_path / "history.json"


@pytest.fixture
def config(history_file: Path) -> ScratchpadConfig:
    """Config whose history lives in the temporary directory."""
    return ScratchpadConfig(history_file_path=history_file)


@pytest.fixture
def context() -> ExecutionContext:
    """A fresh, empty execution context."""
    return ExecutionContext.fresh("test")
