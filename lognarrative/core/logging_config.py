"""
Logging configuration for production use.

Provides structured logging with console and optional file output.
Integrates with config for environment-specific log levels.
"""

import logging
import logging.handlers
from typing import Optional

from .config import Config, config


def setup_logging(
    logger_name: str = "lognarrative",
    settings: Optional[Config] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Library modules only call logging.getLogger(__name__); the host
    application calls this once at start-up so that log_level, logs_dir and
    log_to_file take effect for the whole "lognarrative" logger tree.

    Args:
        logger_name: Name of the logger (typically the package name)
        settings: Settings to read level and file options from (defaults to global config)

    Returns:
        Configured logger instance
    """
    settings = settings or config
    logger = logging.getLogger(logger_name)

    # Don't add handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_to_file:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = settings.logs_dir / f"{logger_name}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(settings.log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
