"""
Logging configuration for jx-dashboard

Structured logging with structlog on top of the stdlib logging module:
- console output on stderr (colored on a TTY, JSON otherwise)
- optional rotating log file
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_size_mb: int = 10,
    backup_count: int = 3,
    enable_colors: bool = True,
) -> None:
    """Configure logging for jx-dashboard

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (None = stderr only)
        max_size_mb: Max log file size in MB before rotation
        backup_count: Number of backup files to keep
        enable_colors: Enable colored console output
    """
    log_level = LEVELS.get(level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if enable_colors and sys.stderr.isatty():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    # Loggers are not cached so a later configure() call (or a test capture)
    # takes effect on module-level loggers too.
    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging_from_config(config: dict, debug: bool = False) -> None:
    """Setup logging from a configuration dict

    Args:
        config: Configuration dictionary (see jx_dashboard.config.Config)
        debug: Force DEBUG level
    """
    logging_config = config.get("logging", {})

    if not logging_config.get("enabled", True) and not debug:
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        level="DEBUG" if debug else logging_config.get("level", "INFO"),
        log_file=logging_config.get("file"),
        max_size_mb=logging_config.get("max_size_mb", 10),
        backup_count=logging_config.get("backup_count", 3),
        enable_colors=config.get("output", {}).get("colors_enabled", True),
    )
