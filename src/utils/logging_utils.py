"""
Centralized logging utility for the claims API.

Log level follows the ENVIRONMENT variable:
- INFO+ logs for non-production environments
- WARNING+ logs for production ("prod")
"""
import os
import logging
import json
from enum import Enum
from typing import Any, Dict

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LogLevel(Enum):
    """Enum for log levels to use with log_structured function."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def is_production() -> bool:
    return os.environ.get("ENVIRONMENT", "dev").lower() == "prod"


def get_log_level() -> int:
    return logging.WARNING if is_production() else logging.INFO


def get_logger(name):
    """
    Get a logger with the specified name, properly configured based on environment.

    Args:
        name (str): Name for the logger, typically __name__

    Returns:
        logging.Logger: Configured logger
    """
    log_level = get_log_level()
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Only add handler if not already added to avoid duplicate logs
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def log_structured(logger: logging.Logger, level: LogLevel, message: str, **kwargs: Any) -> None:
    """
    Log a message with additional context data.

    Outside production the context is appended as JSON. In production only
    the message is logged.

    Args:
        logger (logging.Logger): The logger to use
        level (LogLevel): Log level enum value
        message (str): The log message
        **kwargs: Additional context data to include in the structured log
    """
    log_method = getattr(logger, level.value)

    if is_production():
        log_method(message)
        return

    log_data: Dict[str, Any] = {"message": message, **kwargs}
    try:
        log_method("%s | Context: %s", message, json.dumps(log_data, default=str))
    except (TypeError, ValueError) as e:
        logger.warning("Failed to serialize log data: %s", e)
        log_method(message)
