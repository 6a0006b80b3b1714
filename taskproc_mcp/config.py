"""Settings loaded from ``TASKPROC_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from taskproc_mcp.storage import DEFAULT_STORAGE_FILENAME

ENV_PREFIX = "TASKPROC"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Durable view history ----
    storage_dir: Path
    storage_filename: str

    # ---- Logging ----
    log_level: str
    log_file: Path | None

    @property
    def storage_path(self) -> Path:
        return self.storage_dir / self.storage_filename

    @staticmethod
    def from_env() -> "Settings":
        # The storage directory is captured now, not when the file is written.
        storage_dir = _env_path(_k("STORAGE_DIR"), Path.cwd())
        storage_filename = _env(_k("STORAGE_FILE"), DEFAULT_STORAGE_FILENAME)

        log_level = _env(_k("LOG_LEVEL"), "INFO").upper()
        raw_log_file = _env(_k("LOG_FILE"))
        log_file = Path(raw_log_file).expanduser() if raw_log_file else None

        return Settings(
            storage_dir=storage_dir.resolve(),
            storage_filename=storage_filename,
            log_level=log_level,
            log_file=log_file,
        )


def get_settings() -> Settings:
    return Settings.from_env()
