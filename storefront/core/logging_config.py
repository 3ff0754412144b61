import logging

import structlog

from storefront.core.config import settings

# visible characters of a cart session id in log output
_SESSION_PREFIX_CHARS = 8


def redact_cart_session(logger, method_name, event_dict):
    """Shorten cart session ids, bare or inside ``cart:<session>`` storage keys."""
    session_id = event_dict.get("session_id")
    if isinstance(session_id, str) and len(session_id) > _SESSION_PREFIX_CHARS:
        event_dict["session_id"] = f"{session_id[:_SESSION_PREFIX_CHARS]}…"

    key = event_dict.get("key")
    if isinstance(key, str) and key.startswith(f"{settings.CART_STORAGE_KEY}:"):
        prefix, _, session_id = key.partition(":")
        if len(session_id) > _SESSION_PREFIX_CHARS:
            event_dict["key"] = f"{prefix}:{session_id[:_SESSION_PREFIX_CHARS]}…"
    return event_dict


def configure_logging():
    """Configure structlog on top of stdlib logging for the storefront service."""
    level = logging.DEBUG if settings.DEBUG else logging.INFO
    renderer = structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_cart_session,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)
    # engine echo owns SQL logging
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    structlog.contextvars.bind_contextvars(
        service=settings.PROJECT_NAME,
        environment=settings.ENVIRONMENT,
        currency=settings.CURRENCY_CODE,
    )
