"""structlog setup for scripts and interactive use."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with ISO timestamps and console output.

    Args:
        level: Minimum level name, e.g. 'DEBUG' or 'WARNING'
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )
