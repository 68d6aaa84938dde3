"""Quote-scoped logging fields carried on a context variable.

Fields are isolated per thread and per asyncio task.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})
_fields: ContextVar[Mapping[str, Any]] = ContextVar("drift_pricing_log_fields", default=_EMPTY)


class LogContext:
    """Read access to the fields bound by the innermost ``log_context``."""

    @staticmethod
    def get() -> Mapping[str, Any]:
        return _fields.get()

    @staticmethod
    def clear() -> None:
        _fields.set(_EMPTY)


class ContextFilter(logging.Filter):
    """Copies bound context fields onto records that do not already carry them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _fields.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind fields for log records emitted inside the block.

    Nested blocks see the union of all enclosing fields; the enclosing set is
    restored on exit.
    """
    token = _fields.set(MappingProxyType({**_fields.get(), **fields}))
    try:
        yield
    finally:
        _fields.reset(token)


@contextmanager
def log_quote_context(quote_id: str, **fields: Any) -> Iterator[None]:
    """Bind a quote id, reusing it as the correlation id unless one is given."""
    fields.setdefault("correlation_id", quote_id)
    with log_context(quote_id=quote_id, **fields):
        yield
