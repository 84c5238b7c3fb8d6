from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from infra.path import default_db_path

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER_WORKERS = 4
TRIGGER_MODES = ("async", "sync")


@dataclass(frozen=True)
class Settings:
    database_url: str
    trigger_mode: str = "async"
    trigger_workers: int = DEFAULT_TRIGGER_WORKERS
    log_level: str = "INFO"
    # None resolves to <user data dir>/logs
    log_dir: Path | None = None

    @property
    def synchronous_trigger(self) -> bool:
        return self.trigger_mode == "sync"


def _read(environ: Mapping[str, str], key: str) -> str:
    return (environ.get(key) or "").strip()


def _parse_workers(raw: str) -> int:
    if not raw:
        return DEFAULT_TRIGGER_WORKERS
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid PL_TRIGGER_WORKERS=%r, using %d", raw, DEFAULT_TRIGGER_WORKERS)
        return DEFAULT_TRIGGER_WORKERS
    if value <= 0:
        logger.warning("PL_TRIGGER_WORKERS must be positive, using %d", DEFAULT_TRIGGER_WORKERS)
        return DEFAULT_TRIGGER_WORKERS
    return value


def _parse_mode(raw: str) -> str:
    mode = raw.lower() or "async"
    if mode not in TRIGGER_MODES:
        logger.warning("Unknown PL_TRIGGER_MODE=%r, using 'async'", raw)
        return "async"
    return mode


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    database_url = _read(env, "PL_DATABASE_URL")
    if not database_url:
        database_url = f"sqlite:///{default_db_path().as_posix()}"

    log_dir_raw = _read(env, "PL_LOG_DIR")
    log_dir = Path(log_dir_raw) if log_dir_raw else None

    return Settings(
        database_url=database_url,
        trigger_mode=_parse_mode(_read(env, "PL_TRIGGER_MODE")),
        trigger_workers=_parse_workers(_read(env, "PL_TRIGGER_WORKERS")),
        log_level=(_read(env, "PL_LOG_LEVEL") or "INFO").upper(),
        log_dir=log_dir,
    )


__all__ = ["Settings", "load_settings", "DEFAULT_TRIGGER_WORKERS"]
