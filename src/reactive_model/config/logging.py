"""structlog configuration for reactive_model.

Two output modes:
- Human (default): console-rendered output
- JSON (log_json=True): one structured JSON object per line

reactive_model is a library, so configuration is opt-in: nothing here runs
on import. When called, a single handler owned by reactive_model is placed
on the root logger. Calling again replaces that handler; handlers installed
by the application are left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from reactive_model.config.models import LoggingConfig

PACKAGE_LOGGER = "reactive_model"

# Loggers that stay at WARNING even in verbose mode.
QUIET_LOGGERS = ("pluggy",)

_HANDLER_MARKER = "_reactive_model_handler"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _build_handler(stream: TextIO, *, log_json: bool) -> logging.Handler:
    shared = _shared_processors()
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def installed_handlers() -> list[logging.Handler]:
    """Root handlers placed by :func:`configure_logging`."""
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_MARKER, False)]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output from reactive_model. When False,
            only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        stream: Destination; defaults to stderr.
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for handler in installed_handlers():
        root_logger.removeHandler(handler)
    root_logger.addHandler(_build_handler(stream or sys.stderr, log_json=log_json))
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging_from(config: LoggingConfig, *, stream: TextIO | None = None) -> None:
    """Apply a ``[logging]`` config section."""
    configure_logging(verbose=config.verbose, log_json=config.log_json, stream=stream)
