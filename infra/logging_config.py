# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.config import Settings
from infra.operational_support import (
    TraceIdLogFilter,
    configure_operational_support,
    install_global_exception_hooks,
)
from infra.path import user_data_dir


def setup_logging(settings: Settings | None = None) -> Path:
    """
    Configure application logging.
    Logs go to the per-user data directory unless PL_LOG_DIR says otherwise.
    """
    log_dir: Path = (settings.log_dir if settings and settings.log_dir else user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "app.log"
    level = logging.getLevelName(settings.log_level) if settings else logging.INFO
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear any existing handlers (setup may run more than once per process)
    logger.handlers.clear()

    # File handler (rotating)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    trace_filter = TraceIdLogFilter()
    file_handler.addFilter(trace_filter)
    file_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] [%(threadName)s] trace=%(trace_id)s %(name)s - %(message)s"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    support = configure_operational_support(log_dir / "support-events.jsonl")
    install_global_exception_hooks(support)
    support.emit_event(
        event_type="app.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file)},
    )
    return log_file
