"""Logging configuration for the ytcaptions command-line tool.

Library modules only create module loggers and pass structured context
through ``extra=``. This module turns that context into output, either
human-readable with trailing ``key:value`` pairs or JSON lines.
"""

from collections.abc import Mapping
from contextvars import ContextVar
import copy
import json
import logging
from logging.config import dictConfig
import sys
from typing import Any, Literal

_original_log_record_factory = logging.getLogRecordFactory()


def custom_record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    """Create a log record carrying exception attributes and the cause chain.

    Public attributes of every exception in the chain (``video_id``,
    ``url``, ``status_code`` and so on) are collected into
    ``exc_custom_attrs``; the chain messages go to ``semantic_trace``.

    Args:
        *args: Arguments passed to the original log record factory.
        **kwargs: Keyword arguments passed to the original log record factory.

    Returns:
        The enriched log record.
    """
    record = _original_log_record_factory(*args, **kwargs)
    if not record.exc_info or not record.exc_info[1]:
        return record

    collected_attrs: dict[str, Any] = {}
    chain_messages: list[str] = []
    current_exc: BaseException | None = record.exc_info[1]
    while current_exc:
        for name, val in vars(current_exc).items():
            if not name.startswith("_") and val is not None:
                collected_attrs.setdefault(name, val)
        chain_messages.append(str(current_exc) or type(current_exc).__name__)
        current_exc = current_exc.__cause__ or current_exc.__context__

    if collected_attrs:
        record.exc_custom_attrs = collected_attrs
    record.semantic_trace = chain_messages
    return record


_context_id_var: ContextVar[str | None] = ContextVar("context_id", default=None)


def set_context_id(context_id: str) -> None:
    """Tag all log records of the current async context with ``context_id``.

    Args:
        context_id: The context identifier, e.g. the video being processed.
    """
    _context_id_var.set(context_id)


class ContextIdFilter(logging.Filter):
    """Inject the current context id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        context_id = _context_id_var.get()
        if context_id is not None:
            record.context_id = context_id
        return True


_should_include_stacktrace: bool = False

_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "asctime",
    "message",
    "context_id",
    "taskName",
    "exc_custom_attrs",
    "semantic_trace",
}


class HumanReadableExtrasFormatter(logging.Formatter):
    """Format records as one readable line followed by their extra fields.

    Exception details are shown as the cause chain unless stack traces
    were enabled in ``setup_logging``.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
        validate: bool = True,
        *,
        defaults: Mapping[str, Any] | None = None,
    ):
        super().__init__(fmt, datefmt, style, validate, defaults=defaults)

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, dict | list | tuple):
            try:
                return json.dumps(value, sort_keys=True, separators=(", ", ":"))
            except TypeError:
                return f"[Unserializable Value: {type(value).__name__}]"
        return str(value)

    def format(self, record: logging.LogRecord) -> str:
        prefix = [self.formatTime(record, self.datefmt), record.levelname]
        prefix.append(f"[{record.name}]")
        ctx_id = getattr(record, "context_id", None)
        if ctx_id is not None:
            prefix.append(f"CtxID:{ctx_id}")

        extras: dict[str, Any] = dict(getattr(record, "exc_custom_attrs", None) or {})
        extras.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )

        parts = [" ".join(prefix)]
        if extras:
            parts.append(
                " ".join(f"{k}:{self._format_value(v)}" for k, v in extras.items())
            )
        parts.append(f"- {record.getMessage()}".rstrip())
        line = " ".join(parts)

        if record.exc_info:
            if _should_include_stacktrace:
                if not record.exc_text:
                    record.exc_text = self.formatException(record.exc_info)
                line += "\n" + record.exc_text
            else:
                trace: list[str] = getattr(record, "semantic_trace", None) or []
                for i, msg in enumerate(trace):
                    line += f"\nError: {msg}" if i == 0 else f"\n  Caused by: {msg}"

        if record.stack_info:
            line += "\n" + self.formatStack(record.stack_info)
        return line


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "context_id_filter": {
            "()": ContextIdFilter,
        },
    },
    "formatters": {
        "human_readable_formatter": {
            "()": HumanReadableExtrasFormatter,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json_formatter": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console_handler": {
            "class": "logging.StreamHandler",
            "formatter": "human_readable_formatter",
            # stdout carries the command output
            "stream": "ext://sys.stderr",
            "filters": ["context_id_filter"],
        },
    },
    "loggers": {
        "ytcaptions": {
            "handlers": ["console_handler"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console_handler"],
        "level": "WARNING",
    },
}


def setup_logging(
    log_format_type: Literal["human", "json"],
    app_log_level_name: str,
    include_stacktrace: bool,
) -> None:
    """Configure logging for the command-line tool.

    Args:
        log_format_type: Format for logs ('human' or 'json').
        app_log_level_name: Logging level name for the ytcaptions loggers.
        include_stacktrace: Whether to include full stack traces in error logs.
    """
    global _should_include_stacktrace
    _should_include_stacktrace = include_stacktrace

    logging.setLogRecordFactory(custom_record_factory)

    config = copy.deepcopy(LOGGING_CONFIG)
    log_level = app_log_level_name.upper()
    if not isinstance(logging.getLevelNamesMapping().get(log_level), int):
        print(
            f"Warning: Invalid LOG_LEVEL '{app_log_level_name}'. Defaulting to INFO.",
            file=sys.stderr,
        )
        log_level = "INFO"
    config["loggers"]["ytcaptions"]["level"] = log_level

    if log_format_type.lower() == "json":
        config["handlers"]["console_handler"]["formatter"] = "json_formatter"

    dictConfig(config)
