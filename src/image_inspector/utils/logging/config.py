# ABOUTME: Logging configuration using loguru sinks with structlog routed through them
# ABOUTME: Dual-mode operation: interactive CLI vs production JSON logging

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


# Libraries whose own logging would interleave with the CLI output
WARNING_LOGGERS = ["httpx", "httpcore", "urllib3", "asyncio", "anyio"]


class LoguruBridge:
    """structlog logger that hands rendered events to loguru."""

    def __init__(self, name: str | None = None):
        self._logger = logger.bind(logger_name=name or "image_inspector")

    def _emit(self, level: str, message: str) -> None:
        self._logger.opt(depth=2).log(level, message)

    def debug(self, message: str) -> None:
        self._emit("DEBUG", message)

    def info(self, message: str) -> None:
        self._emit("INFO", message)

    def warning(self, message: str) -> None:
        self._emit("WARNING", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)

    def critical(self, message: str) -> None:
        self._emit("CRITICAL", message)

    msg = info
    warn = warning
    exception = error


def _bridge_factory(*args: Any) -> LoguruBridge:
    return LoguruBridge(args[0] if args else None)


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("IMAGE_INSPECTOR_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Configure third-party library logging to avoid CLI interference."""
    for logger_name in WARNING_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def setup_structlog(log_level: str) -> None:
    """Route structlog events into loguru, filtered at the configured level."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=_bridge_factory,
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()
    setup_structlog(log_level)

    # Set standard library logging level for compatibility with tests
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    # Remove default loguru handler
    logger.remove()
    logger.configure(extra={"logger_name": "image_inspector"})

    if mode == LoggingMode.INTERACTIVE:
        # Interactive mode: logs to files, the console belongs to rich output
        log_dir = Path("logs")
        try:
            log_dir.mkdir(exist_ok=True)
        except OSError:
            mode = LoggingMode.PRODUCTION

        if mode == LoggingMode.PRODUCTION:
            logger.add(sys.stdout, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)
            return

        log_file_path = log_file or str(log_dir / "image-inspector.log")

        # Human-readable logs
        logger.add(
            log_file_path,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[logger_name]} - {message}",
            rotation="10 MB",
            retention="7 days",
        )

        # JSON logs for machine processing
        logger.add(
            log_dir / "image-inspector.json",
            level=log_level,
            format="{time} | {level} | {name} | {message}",
            serialize=True,
            rotation="10 MB",
            retention="7 days",
        )

        # Errors only
        logger.add(
            log_dir / "errors.log",
            level="ERROR",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[logger_name]} - {message}",
            backtrace=True,
            diagnose=True,
        )
    else:
        # Production mode: JSON to stdout
        logger.add(sys.stdout, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    log_dir = Path("logs")

    return {
        "mode": mode,
        "log_directory": str(log_dir.absolute()) if log_dir.exists() else None,
        "log_files": {
            "main": str(log_dir / "image-inspector.log") if mode == LoggingMode.INTERACTIVE else None,
            "json": str(log_dir / "image-inspector.json") if mode == LoggingMode.INTERACTIVE else None,
            "errors": str(log_dir / "errors.log") if mode == LoggingMode.INTERACTIVE else None,
        },
        "third_party_suppressed": [*WARNING_LOGGERS, "py.warnings"],
    }
