"""Durable action log: the active source path plus the view history."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from taskproc_mcp.enums import ViewOpType
from taskproc_mcp.errors import StorageError
from taskproc_mcp.models.specs import ViewAction

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_FILENAME = ".taskproc.storage"


class _RecordEntry(BaseModel):
    type: str
    payload: str = ""


class ActionLogRecord(BaseModel):
    """On-disk shape: ``{"filepath": str, "history": [{"type": str, "payload": str}, ...]}``."""

    model_config = ConfigDict(extra="ignore")

    filepath: str
    history: list[_RecordEntry] = Field(...)


class ActionLog:
    """
    In-memory view history for one source file, with atomic persistence.

    The storage location is fixed at construction. ``persist()`` writes a
    temp file beside it and renames it into place, so a reader sees either
    the previous record or the new one, never a partial write.

    Thread-safety:
    - A single lock guards the source path and history.
    - Store/view locking is the caller's concern.
    """

    def __init__(self, storage_path: str | Path):
        self._storage_path = Path(storage_path)
        self._lock = threading.Lock()
        self._source_path: str | None = None
        self._history: list[ViewAction] = []

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    @property
    def source_path(self) -> str | None:
        with self._lock:
            return self._source_path

    @property
    def history(self) -> tuple[ViewAction, ...]:
        with self._lock:
            return tuple(self._history)

    def set_source(self, path: str) -> None:
        """Make ``path`` the active source; a new source invalidates any prior history."""
        with self._lock:
            self._source_path = path
            self._history.clear()

    def record(self, action: ViewAction) -> None:
        with self._lock:
            self._history.append(action)

    def clear(self) -> None:
        """Forget the source and history and delete the durable record."""
        with self._lock:
            try:
                self._storage_path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to remove storage file {self._storage_path}: {e}") from e
            self._source_path = None
            self._history.clear()

    def snapshot(self) -> tuple[str | None, tuple[ViewAction, ...]]:
        with self._lock:
            return self._source_path, tuple(self._history)

    def restore(self, state: tuple[str | None, tuple[ViewAction, ...]]) -> None:
        with self._lock:
            self._source_path = state[0]
            self._history = list(state[1])

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def persist(self) -> None:
        """
        Write the current source path and history to the storage file.

        Raises:
            StorageError: If there is no source path or the write fails; the
                existing storage file is left untouched
        """
        with self._lock:
            source_path = self._source_path
            history = list(self._history)

        if source_path is None:
            raise StorageError("No source file to persist")

        record = ActionLogRecord(
            filepath=source_path,
            history=[_RecordEntry(type=a.type.value, payload=a.payload) for a in history],
        )
        data = record.model_dump_json(indent=2)

        directory = self._storage_path.parent
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=self._storage_path.name + ".", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._storage_path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageError(f"Failed to write storage file {self._storage_path}: {e}") from e

        logger.debug("Persisted %d action(s) for %s", len(history), source_path)

    def load(self) -> bool:
        """
        Load the source path and history from the storage file.

        Returns:
            False if no storage file exists yet, True once loaded

        Raises:
            StorageError: If the file cannot be read or is not a valid record
        """
        if not self._storage_path.exists():
            return False

        try:
            raw = self._storage_path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read storage file {self._storage_path}: {e}") from e

        try:
            record = ActionLogRecord.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            raise StorageError(f"Malformed storage file {self._storage_path}: {e}") from e

        history: list[ViewAction] = []
        for entry in record.history:
            try:
                op_type = ViewOpType(entry.type)
            except ValueError:
                logger.warning("Skipping unknown action type '%s' in %s", entry.type, self._storage_path)
                continue
            history.append(ViewAction(type=op_type, payload=entry.payload))

        with self._lock:
            self._source_path = record.filepath
            self._history = history

        logger.info("Loaded view history: %d action(s) for %s", len(history), record.filepath)
        return True
