import logging
import os
from typing import Any, MutableMapping, Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | user=%(user_id)s | %(message)s"

CONTEXT_FIELDS = ("user_id", "stage")


class ContextFilter(logging.Filter):
    """Fills missing context fields with "-" so the formatter never raises KeyError."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that merges bound context into every record's ``extra``."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Initialize root logger with the app formatter and context filter."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL), logging.INFO)
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # uvicorn --reload re-imports; drop handlers from the previous run
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; ensure root is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)


def bind(logger: logging.Logger, **context: Any) -> ContextAdapter:
    """Return ``logger`` with ``context`` attached to every record, e.g. ``bind(log, user_id=7)``."""
    return ContextAdapter(logger, context)
