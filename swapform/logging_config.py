"""
Logging for the swapform API and CLI.

Every record, whether it comes from structlog or a plain ``logging.getLogger``
call, is rendered by one structlog formatter on stderr. The CLI keeps stdout
for the form itself.
"""

import logging
import sys
from typing import Optional

import structlog

from . import __version__
from .config import settings

QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def add_service_info(logger, method_name, event_dict):
    """Stamp each event with the service name and version."""
    event_dict.setdefault("service", "swapform")
    event_dict.setdefault("version", __version__)
    return event_dict


def _pick_renderer(log_format: str, level: int):
    if log_format == "auto":
        log_format = "console" if level == logging.DEBUG else "json"
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.processors.JSONRenderer()


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Route stdlib and structlog output through one stderr handler.

    Args:
        log_level: Overrides settings.log_level
        log_format: "json", "console" or "auto"; overrides settings.log_format
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    renderer = _pick_renderer((log_format or settings.log_format).lower(), level)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
