"""Runtime configuration.

Settings come from the environment; a ``.env`` file in the working
directory is loaded first if one exists, without overriding variables
that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Repo root when installed in editable mode
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _bool(val: str) -> bool:
    return val.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    ledger_enabled: bool = True
    log_level: str = "WARNING"
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = os.getenv("STOCKALLOC_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            ledger_enabled=_bool(os.getenv("STOCKALLOC_LEDGER_ENABLED", "true")),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        load_dotenv(override=False)
        _settings = Settings.from_env()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = None
    return get_settings()
