"""
Logging configuration module for structured logging.

This module configures the application's logging system using structlog.
It provides structured logging capabilities with JSON formatting for production
and human-readable console output for development.
"""

import logging

import structlog


def configure_logging(log_level: str = "INFO", json_logs: bool = False):
    """
    Configures the application's logging system.

    Sets up structlog with ISO timestamps, the log level, and either JSON or
    console rendering. Events below ``log_level`` are dropped before rendering.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def mask_secret(value: str, visible: int = 4) -> str:
    """Return ``value`` with everything but its first ``visible`` characters masked."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)


# Create a singleton logger instance for the application
logger = structlog.get_logger()

__all__ = ["configure_logging", "mask_secret", "logger"]
