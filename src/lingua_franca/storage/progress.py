"""Progress persistence (JSON + fcntl.flock + atomic write)."""

import contextlib
import fcntl
import json
import os
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path

import structlog
from pydantic import ValidationError

from ..models.progress import UserProgress

logger = structlog.get_logger()

PERSISTED_FIELDS = frozenset({"xp", "streak", "lastLogin", "cardsLearned", "level"})


class ProgressStore:
    """Single-record key-value store for the user's progress.

    The record lives in one JSON file. ``save`` replaces it whole; callers
    doing load-modify-save must hold ``locked()`` for the full cycle.

    Args:
        path: JSON file holding the record.
    """

    def __init__(self, path: Path):
        self.path = path
        self._lock_path = path.with_name(path.name + ".lock")
        self._mutex = threading.RLock()
        self._depth = 0

    def load(self) -> UserProgress:
        """Return the stored record, or defaults if missing, unreadable or incomplete."""
        if not self.path.exists():
            return UserProgress()
        try:
            with open(self.path, encoding="utf-8") as f:
                fcntl.flock(f, fcntl.LOCK_SH)
                data = json.load(f)
                fcntl.flock(f, fcntl.LOCK_UN)
            if not isinstance(data, dict):
                raise TypeError("progress record is not a JSON object")
            missing = PERSISTED_FIELDS - data.keys()
            if missing:
                raise ValueError(f"missing fields: {sorted(missing)}")
            return UserProgress.model_validate(data)
        except (OSError, ValueError, TypeError, ValidationError):
            logger.warning("progress_parse_failed", path=str(self.path))
            return UserProgress()

    def save(self, progress: UserProgress) -> None:
        """Atomically overwrite the stored record."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", dir=self.path.parent, delete=False, suffix=".json", encoding="utf-8"
        ) as tmp:
            json.dump(progress.to_record(), tmp)
        os.replace(tmp.name, self.path)

    @contextlib.contextmanager
    def locked(self) -> Iterator["ProgressStore"]:
        """Hold exclusive access to the record across threads and processes."""
        with self._mutex:
            if self._depth:
                # flock is already held by the outer frame
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._lock_path, "w") as lock_file:
                fcntl.flock(lock_file, fcntl.LOCK_EX)
                self._depth = 1
                try:
                    yield self
                finally:
                    self._depth = 0
                    fcntl.flock(lock_file, fcntl.LOCK_UN)
