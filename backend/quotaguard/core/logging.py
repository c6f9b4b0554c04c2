"""Logging for quotaguard.

A single module-level ``logger`` is configured from settings. Callers that
know something about the current request derive a ``ContextualLogger`` via
``logger.with_context(...)``; the dimensions are attached to every record
and rendered by the configured formatter.
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from pythonjsonlogger import jsonlogger

from quotaguard.core.config import LogFormat, settings


class JSONFormatter(jsonlogger.JsonFormatter):
    """Render records as one JSON object per line; context dimensions become fields."""

    def __init__(self) -> None:
        super().__init__(
            "%(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            timestamp=True,
        )

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        # Dimensions are already merged into the record as top-level extras.
        log_record.pop("dimensions", None)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that appends context dimensions as key=value."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        dims = getattr(record, "dimensions", None)
        if dims:
            rendered = " ".join(f"{k}={v}" for k, v in dims.items())
            return f"{base} [{rendered}]"
        return base


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a dict of dimensions (request_id, account_id, ...)."""

    def __init__(self, logger: logging.Logger, dimensions: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(dimensions or {}))
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        extra["dimensions"] = dict(extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions merged in."""
        merged = {**self.dimensions, **{k: str(v) for k, v in dimensions.items()}}
        return ContextualLogger(self.logger, merged)


def _configure_root_logger() -> logging.Logger:
    base = logging.getLogger("quotaguard")
    base.setLevel(settings.LOG_LEVEL.upper())
    if not base.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.LOG_FORMAT == LogFormat.JSON:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(TextFormatter())
        base.addHandler(handler)
    base.propagate = False
    return base


logger = ContextualLogger(_configure_root_logger())
