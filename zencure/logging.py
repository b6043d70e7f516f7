"""
Structured logging for ZenCure.

structlog renders through the stdlib logging module: colored console output in
development, one JSON object per line everywhere else. Credentials that end up
in an event (passwords, bearer tokens) are masked before rendering.

Usage:
    from zencure.logging import get_logger, LogContext

    logger = get_logger(__name__)
    with LogContext(remedy_id=remedy.id):
        logger.info("remedy_stats_recomputed", review_count=3)
"""

import logging
import sys
import time
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import structlog
from structlog.types import EventDict, Processor

F = TypeVar("F", bound=Callable[..., Any])

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"password", "password_hash", "token", "access_token", "authorization"})
QUIET_PATHS = frozenset({"/health", "/health/ready"})

_configured = False


def _redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Mask credential values anywhere in the event.

    Validation errors carry the rejected request body (``errors[i]["input"]``),
    so nested dicts and lists are walked too. Nested containers are copied
    before masking; the caller's objects are left alone.
    """

    def scrub(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: REDACTED
                if isinstance(key, str) and key.lower() in SENSITIVE_KEYS and item is not None
                else scrub(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [scrub(item) for item in value]
        return value

    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS and value is not None:
            event_dict[key] = REDACTED
        elif isinstance(value, (dict, list, tuple)):
            event_dict[key] = scrub(value)
    return event_dict


def _add_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", "zencure")
    return event_dict


def build_processors(development: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service,
        _redact_secrets,
    ]
    if development:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return processors


def configure_logging(level: str | None = None, development: bool | None = None) -> None:
    """
    Configure structlog and the root stdlib logger.

    Level and renderer default to ``LOG_LEVEL`` and ``ENVIRONMENT``/``DEBUG``
    from settings. Safe to call more than once; later calls reconfigure.
    """
    global _configured
    from .config import get_settings

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    if development is None:
        development = settings.is_development

    logging.basicConfig(format="%(message)s", stream=sys.stdout, force=True)
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))
    # SQL echo stays off unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


class LogContext:
    """
    Bind keys to every log entry inside a ``with`` block.

    Nesting is safe: on exit each key goes back to the value it had before
    the block, so an inner ``LogContext(remedy_id=...)`` does not drop an
    outer ``request_id``.
    """

    def __init__(self, **values: Any):
        self.values = values
        self._manager = None

    def __enter__(self):
        self._manager = structlog.contextvars.bound_contextvars(**self.values)
        self._manager.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._manager.__exit__(exc_type, exc_val, exc_tb)
        self._manager = None
        return False


def log_timing(
    operation: str, logger: structlog.stdlib.BoundLogger | None = None
) -> Callable[[F], F]:
    """
    Log how long the decorated call took, in milliseconds.

    When the call returns a sized result (a list of remedies, say) its length
    is logged as ``result_count``. Exceptions are logged and re-raised.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _logger.warning(
                    "operation_failed",
                    operation=operation,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                    error_type=type(e).__name__,
                )
                raise

            fields: dict[str, Any] = {
                "operation": operation,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            }
            if hasattr(result, "__len__"):
                fields["result_count"] = len(result)
            _logger.info("operation_complete", **fields)
            return result

        return wrapper  # type: ignore

    return decorator


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs one ``request_complete`` entry per HTTP request.

    Health checks are logged at debug level so they do not flood the output.
    The request id is taken from ``scope["state"]`` when an outer middleware
    has set one.
    """

    def __init__(self, app):
        self.app = app
        self.logger = _LazyLogger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        path = scope.get("path", "")
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if path in QUIET_PATHS and status_code < 400:
                log = self.logger.debug
            elif status_code >= 500:
                log = self.logger.error
            elif status_code >= 400:
                log = self.logger.warning
            else:
                log = self.logger.info

            log(
                "request_complete",
                method=scope.get("method", ""),
                path=path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                request_id=scope.get("state", {}).get("request_id"),
            )


class _LazyLogger:
    """Defers logger creation until first use so importing never configures logging."""

    def __init__(self, name: str):
        self._name = name
        self._logger: structlog.stdlib.BoundLogger | None = None

    def __getattr__(self, name: str):
        if self._logger is None:
            self._logger = get_logger(self._name)
        return getattr(self._logger, name)


api_logger = _LazyLogger("api")
scoring_logger = _LazyLogger("scoring")
moderation_logger = _LazyLogger("moderation")
aggregation_logger = _LazyLogger("aggregation")


__all__ = [
    "LogContext",
    "RequestLoggingMiddleware",
    "aggregation_logger",
    "api_logger",
    "configure_logging",
    "get_logger",
    "log_timing",
    "moderation_logger",
    "scoring_logger",
]
