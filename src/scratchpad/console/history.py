"""Bounded, deduplicated, file-backed history of submissions."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class PersistResult(Enum):
    """Outcome of a history load or save."""

    SAVED = "saved"
    LOADED = "loaded"
    SKIPPED = "skipped"
    MISSING = "missing"
    FAILED = "failed"


def _is_writable(path: Path) -> bool:
    """Check whether ``path`` can be written, creating parents if needed."""
    if path.exists():
        return os.access(path, os.W_OK)
    parent = path.parent
    while not parent.exists() and parent != parent.parent:
        parent = parent.parent
    return os.access(parent, os.W_OK)


class HistoryRing:
    """Ordered history of submitted texts with circular navigation.

    Entries never repeat: pushing an existing entry moves it to the tail.
    The bound is applied by :meth:`enforce_bound`, which keeps the *first*
    ``max_size`` entries. This prefix truncation drops the newest
    overflow rather than the oldest and is kept deliberately.

    Args:
        max_size: Upper bound on the number of entries.
        entries: Initial entries, oldest first.
    """

    def __init__(self, max_size: int = 100, entries: Iterable[str] | None = None) -> None:
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._entries: list[str] = []
        self._cursor: int = 0
        for entry in entries or ():
            self.push(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    @property
    def entries(self) -> list[str]:
        """Copy of the entries, oldest first."""
        return list(self._entries)

    @property
    def cursor(self) -> int:
        """Index of the entry last returned by navigation."""
        return self._cursor

    def push(self, entry: str) -> None:
        """Append ``entry`` at the tail, removing any earlier occurrence."""
        if entry in self._entries:
            self._entries.remove(entry)
        self._entries.append(entry)

    def enforce_bound(self) -> None:
        """Keep only the first ``max_size`` entries."""
        if len(self._entries) > self.max_size:
            logger.debug(
                "Truncating history from %d to %d entries", len(self._entries), self.max_size
            )
            del self._entries[self.max_size :]

    def navigate(self, direction: int) -> str | None:
        """Move the cursor by ``direction`` with wraparound and return the entry.

        Moving past either end wraps: forward to the first entry, backward
        to the last. Returns None when the ring is empty.
        """
        if not self._entries:
            return None
        target = self._cursor + direction
        if 0 <= target <= len(self._entries) - 1:
            self._cursor = target
        elif direction > 0:
            self._cursor = 0
        else:
            self._cursor = abs(len(self._entries) - 1)
        return self._entries[self._cursor]

    def previous(self) -> str | None:
        """Navigate one entry back."""
        return self.navigate(-1)

    def next(self) -> str | None:
        """Navigate one entry forward."""
        return self.navigate(1)

    def reset_cursor(self) -> None:
        """Return the cursor to the start of navigation."""
        self._cursor = 0

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
        self._cursor = 0

    def save(self, path: Path) -> PersistResult:
        """Write the bounded ring to ``path`` as a JSON array.

        The file is written to a temporary sibling and moved into place.
        An unwritable target is skipped.
        """
        path = Path(path)
        self.enforce_bound()
        if not _is_writable(path):
            logger.warning("History file %s is not writable; not saving", path)
            return PersistResult.SKIPPED
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self._entries, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.warning("Could not save history to %s: %s", path, e)
            return PersistResult.FAILED
        logger.debug("Saved %d history entries to %s", len(self._entries), path)
        return PersistResult.SAVED

    def load(self, path: Path) -> PersistResult:
        """Replace the entries with those stored in ``path``.

        A missing file leaves the ring untouched. A file that cannot be
        read or decoded empties the ring.
        """
        path = Path(path)
        if not path.exists():
            return PersistResult.MISSING
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, list) or not all(isinstance(e, str) for e in data):
                raise ValueError("expected a JSON array of strings")
        except (OSError, ValueError) as e:
            logger.warning("Corrupt history file %s; starting empty: %s", path, e)
            self.clear()
            return PersistResult.FAILED

        self.clear()
        for entry in data:
            self.push(entry)
        self.enforce_bound()
        logger.debug("Loaded %d history entries from %s", len(self._entries), path)
        return PersistResult.LOADED

    def cleanup(self, path: Path) -> PersistResult:
        """Clear the ring and immediately persist it empty."""
        self.clear()
        return self.save(path)
