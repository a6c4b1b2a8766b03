"""Logging helpers using structlog."""

import logging
import sys

import structlog


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger, configuring the stack on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)


def _stderr_logger(*args) -> structlog.PrintLogger:
    # resolved per logger so a swapped sys.stderr is picked up
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog and stdlib logging to write to stderr.

    Command output goes to stdout, so log lines never mix with it.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(numeric_level)
