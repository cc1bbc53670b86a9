from __future__ import annotations

import os
import sys
from enum import Enum
from logging import StreamHandler
from typing import Any, cast

import structlog
from pydantic import BaseModel
from structlog.typing import EventDict, Processor, WrappedLogger

from common.utils.msgspec import encode_json
from common.utils.utils import is_dict

_EXCLUDED_KEYS = {"password", "secret"}


def _should_use_json_logging() -> bool:
    """Use JSON logs outside local/dev, while allowing opt-in locally via flag."""

    app_env = os.getenv("APP_ENV", "local").lower()
    if app_env not in ("development", "local", "test"):
        return True
    log_json_format_env = os.getenv("LOG_JSON_FORMAT") or os.getenv("TABLE_ENUM_LOG_JSON_FORMAT")
    if log_json_format_env is None:
        return False
    return log_json_format_env.lower() in {"true", "1", "t", "yes"}


def _get_formatter_name() -> str:
    return "json" if _should_use_json_logging() else "plain"


def _process_values(
    _logger: WrappedLogger,
    _name: str,
    event_dict: EventDict,
) -> EventDict:
    """A structlog processor that serializes pydantic models, enums and model classes."""

    for key, value in list(event_dict.items()):
        _process_value(event_dict, key, value)

    return event_dict


def _process_value(event_dict: EventDict, key: str, value: Any) -> None:
    """Process a single value and update the event_dict directly.

    Removes ``None`` values and excluded keys, dumps pydantic models, replaces
    enum members with their values and recurses into dictionaries.
    """
    if key in _EXCLUDED_KEYS or value is None:
        event_dict.pop(key, None)
        return

    processed_value = value

    if isinstance(value, BaseModel):
        processed_value = value.model_dump(exclude_none=True, mode="json")
    elif isinstance(value, Enum):
        processed_value = value.value
    elif isinstance(value, type):
        processed_value = value.__qualname__

    if is_dict(processed_value):
        for k, v in list(processed_value.items()):
            _process_value(processed_value, k, v)

    event_dict[key] = processed_value


def json_serializer(value: EventDict, **_: Any) -> str:
    return encode_json(value).decode("utf-8")


def _ensure_event_dict(_logger: WrappedLogger, _name: str, event_dict: Any) -> EventDict:
    """Ensure event_dict is a dict, not a string.

    Stdlib loggers pass pre-formatted strings as record.msg.
    """
    if event_dict is None:
        return {"event": ""}
    if isinstance(event_dict, dict):
        return cast(EventDict, event_dict)
    return {"event": str(event_dict)}


def _human_readable_renderer(_logger: WrappedLogger, _name: str, event_dict: EventDict) -> str:
    """Render logs as ``HH:MM:SS [level] logger event (key=value, ...)``."""
    level = str(event_dict.pop("level", "info")).upper()
    timestamp = str(event_dict.pop("timestamp", ""))
    logger_name = str(event_dict.pop("logger", ""))
    event = str(event_dict.pop("event", ""))
    exception = event_dict.pop("exception", None)

    # ISO timestamps from TimeStamper, keep the time part only
    parts = [timestamp[11:19]] if len(timestamp) >= 19 else []
    parts.append(f"[{level:<5}]")
    if logger_name:
        parts.append(logger_name)
    parts.append(event)

    line = " ".join(parts)
    if event_dict:
        line += " (" + ", ".join(f"{key}={value}" for key, value in event_dict.items()) + ")"
    if exception:
        line += f"\n{exception}"
    return line


class StdLoggingConfig:
    foreign_pre_chain_processors: list[Processor] = [
        _ensure_event_dict,  # Must be first to handle stringified messages from stdlib loggers
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _process_values,
    ]

    structlog_processors = [*foreign_pre_chain_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter]

    # Compact JSON output (single line per log entry) for log parsers
    json_renderer: list[Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(sort_keys=True, default=json_serializer, indent=None),
    ]

    console_renderer: list[Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.processors.format_exc_info,
        _human_readable_renderer,
    ]

    formatters = {
        "json": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": json_renderer,
            "foreign_pre_chain": foreign_pre_chain_processors,
        },
        "plain": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": console_renderer,
            "foreign_pre_chain": foreign_pre_chain_processors,
        },
    }

    logger_factory = structlog.stdlib.LoggerFactory()

    handlers: dict[str, Any] = {}


def _get_handlers() -> dict[str, Any]:
    """Get handlers with formatter selection based on environment."""
    return {
        "standard": {
            "class": StreamHandler,
            "level": "DEBUG",
            "stream": sys.stdout,
            "formatter": _get_formatter_name(),
        }
    }


StdLoggingConfig.handlers = _get_handlers()


common_logger_config: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": StdLoggingConfig.formatters,
    "handlers": StdLoggingConfig.handlers,
    "root": {
        "handlers": ["standard"],
        "level": "INFO",
    },
    "loggers": {
        "sqlalchemy.engine": {
            "handlers": ["standard"],
            "propagate": False,
            "level": "WARNING",
        },
        "sqlalchemy.pool": {
            "handlers": ["standard"],
            "propagate": False,
            "level": "WARNING",
        },
    },
}

