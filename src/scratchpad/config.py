"""Configuration for scratchpad."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from scratchpad.exceptions import ConfigError

DEFAULT_HISTORY_FILE = Path.home() / ".scratchpad" / "history.json"
DEFAULT_HISTORY_MAX_SIZE = 100

_ENV_VARS: dict[str, str] = {
    "history_file_path": "SCRATCHPAD_HISTORY_FILE",
    "history_max_size": "SCRATCHPAD_HISTORY_MAX_SIZE",
    "log_level": "SCRATCHPAD_LOG_LEVEL",
}


@dataclass
class ScratchpadConfig:
    """Console settings.

    Args:
        history_file_path: File the history ring is persisted to.
        history_max_size: Upper bound on the number of history entries.
        log_level: Logging level name used by the command line entry point.
    """

    history_file_path: Path = field(default_factory=lambda: DEFAULT_HISTORY_FILE)
    history_max_size: int = DEFAULT_HISTORY_MAX_SIZE
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.history_file_path = Path(self.history_file_path).expanduser()
        try:
            self.history_max_size = int(self.history_max_size)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"history_max_size must be an integer, got {self.history_max_size!r}"
            ) from e
        if self.history_max_size <= 0:
            raise ConfigError(
                f"history_max_size must be positive, got {self.history_max_size}"
            )
        self.log_level = str(self.log_level).upper()

    @classmethod
    def load(cls, **overrides: Any) -> ScratchpadConfig:
        """Build a config from defaults, environment variables and overrides.

        Explicit overrides win over environment variables, which win over
        defaults. Overrides set to ``None`` are ignored.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown config option(s): {', '.join(sorted(unknown))}")

        values: dict[str, Any] = {}
        for name, env_var in _ENV_VARS.items():
            env_value = os.environ.get(env_var)
            if env_value:
                values[name] = env_value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
