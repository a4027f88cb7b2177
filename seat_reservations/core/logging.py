"""
structlog setup for the reservation engine.

Every record goes through one stdout handler on the root logger. The
handler is named, so calling setup_logging again (a second bootstrap in the
same process, a test) replaces it instead of stacking a duplicate.
Production renders JSON lines, any other environment a coloured console.
"""

import logging
import sys
from typing import Optional

import structlog
from seat_reservations.core.config import Settings, get_settings

HANDLER_NAME = "seat_reservations"

# Chatty at INFO; their failures still reach us as StoreError
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "redis")


def _renderer(settings: Settings):
    if settings.ENVIRONMENT == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _install_handler(root: logging.Logger, handler: logging.Handler) -> None:
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()
    root.addHandler(handler)


def setup_logging(settings: Optional[Settings] = None) -> logging.Handler:
    """Configure structlog and the root handler. Returns the installed handler."""
    settings = settings or get_settings()

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings),
            ],
        )
    )

    root = logging.getLogger()
    _install_handler(root, handler)
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(app=settings.APP_NAME, environment=settings.ENVIRONMENT)
    return handler


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
