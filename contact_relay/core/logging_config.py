"""
Logging configuration for the contact relay.

- Structured JSON logging in production, console output elsewhere
- trace_id from the request context merged into every record
- Log level from LOG_LEVEL, falling back to a per-environment default
"""

import logging

import structlog

from contact_relay.core.config import Settings, settings as default_settings

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Default log levels per environment
_ENVIRONMENT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def configure_structlog(environment: str) -> None:
    """
    Configure structlog through the stdlib integration so that
    logger.info("event", key=val) and plain logging share one handler.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]


def get_log_level(config: Settings) -> str:
    """Explicit LOG_LEVEL wins, otherwise the environment default."""
    log_level = (config.log_level or "").upper()
    if log_level in _LEVELS and "log_level" in config.model_fields_set:
        return log_level
    return _ENVIRONMENT_LEVELS.get(config.environment, log_level or "INFO")


def configure_logging(config: Settings = default_settings) -> None:
    """
    Initialize logging for the application.

    Called once at import of the ASGI app.
    """
    configure_structlog(config.environment)

    logging.getLogger().setLevel(get_log_level(config))

    # Suppress noisy third-party loggers
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("aiosmtplib").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

