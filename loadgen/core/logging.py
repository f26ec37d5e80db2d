"""Structured logging configuration for loadgen.

Uses structlog. Log events go to stderr so stdout carries only the plain-text
progress and summary lines.
"""

import logging
import sys

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _stderr_logger(*args):
    # sys.stderr is looked up per logger, not at configure time
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "info", json_output: bool = False):
    """Configure structured logging.

    Args:
        level: Minimum level name ('debug', 'info', 'warning', 'error')
        json_output: Render events as JSON lines instead of console text

    Returns:
        The configured structlog logger
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get(level.lower(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger()


# Global logger instance
logger = configure_logging()
