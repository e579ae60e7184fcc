"""structlog setup for the RepairHub API.

Both structlog and stdlib loggers (uvicorn, SQLAlchemy, our own
``logging.getLogger(__name__)`` calls) end up in one handler, rendered as JSON
or as console lines. Every record carries the request's ``trace_id`` and,
once a session is resolved, ``user_email``.
"""

import logging
import sys

import structlog

from repairhub.config import SERVICE_NAME

# Libraries whose INFO output is per-query or per-request noise
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncpg")


def _add_service(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        # JSON lines need tracebacks flattened into the event
        final_processors = [
            _add_service,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta]
            + final_processors,
            foreign_pre_chain=shared_processors + [structlog.stdlib.ExtraAdder()],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_request_context(trace_id: str, user_email: str | None = None) -> None:
    """Attach the request's trace id (and session email, if any) to every log line."""
    ctx = {"trace_id": trace_id}
    if user_email:
        ctx["user_email"] = user_email
    structlog.contextvars.bind_contextvars(**ctx)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
