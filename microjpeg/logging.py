"""Structured logging for the MicroJPEG SDK."""

import logging
import sys
from typing import Any, Dict, Optional

import structlog

SENSITIVE_KEYS = {"api_key", "authorization", "password", "token", "secret"}


def filter_sensitive_data(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Mask credentials anywhere in the event, including nested dicts."""

    def _filter(obj: Any, depth: int = 0) -> Any:
        if depth > 10:
            return "***DEPTH_LIMIT***"
        if isinstance(obj, dict):
            return {
                key: "***REDACTED***"
                if str(key).lower() in SENSITIVE_KEYS
                else _filter(value, depth + 1)
                for key, value in obj.items()
            }
        if isinstance(obj, list):
            return [_filter(item, depth + 1) for item in obj]
        return obj

    return _filter(event_dict)


class LevelFilteredBoundLogger(structlog.stdlib.BoundLogger):
    """stdlib-backed logger that drops events below the logger's level.

    The level check runs before the processor chain, whether or not the host
    application configured structlog.
    """

    def _proxy_to_logger(
        self,
        method_name: str,
        event: Optional[str] = None,
        *event_args: Any,
        **event_kw: Any,
    ) -> Any:
        level = logging.getLevelName(method_name.upper())
        if isinstance(level, int) and not self._logger.isEnabledFor(level):
            return None
        return super()._proxy_to_logger(method_name, event, *event_args, **event_kw)


def setup_logging(log_level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structlog on top of the standard library logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON format for logs
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        filter_sensitive_data,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=LevelFilteredBoundLogger,
        cache_logger_on_first_use=True,
    )

    # Always use stderr so CLI output on stdout stays clean
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> LevelFilteredBoundLogger:
    """Get a logger backed by the stdlib logger of the same name.

    Output follows the host application's logging setup, so an application
    that never configures logging sees nothing below WARNING.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=LevelFilteredBoundLogger)
