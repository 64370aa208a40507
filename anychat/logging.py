"""
Structured logging for the anychat CLI.

Adapters log through plain ``logging.getLogger(__name__)`` so that library
users keep control of their own logging setup. The CLI calls
``configure_logging`` once per process to route those records, and its own
structlog events, to stderr.
"""

import logging
import sys

import structlog

from anychat.config import settings


# Vendor SDK and transport loggers that log every request at INFO or DEBUG
VENDOR_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "google_genai")

_configured = False


def _renderer(log_format: str):
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(level: str | None = None, log_format: str | None = None):
    """Configure logging for the CLI.

    Args:
        level: Log level name; defaults to ``settings.log_level``
        log_format: ``json`` or ``console``; defaults to ``settings.log_format``

    NOTE:
        Handlers are bound to ``sys.__stderr__`` rather than ``sys.stderr``.
        Click's ``CliRunner`` swaps ``sys.stderr`` for a temporary stream and
        closes it afterwards; a handler bound to that stream would raise
        ``ValueError: I/O operation on closed file`` on the next log write.
    """
    global _configured
    if _configured:
        return

    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.__stderr__)
    handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s")

    # Request lines from the SDKs would drown out the CLI output
    for name in VENDOR_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(log_format or settings.log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
