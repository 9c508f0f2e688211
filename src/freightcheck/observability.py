"""Run-scoped logging helpers shared by the API and the CLI."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_run_id_ctx: ContextVar[Optional[str]] = ContextVar("freightcheck_run_id", default=None)


def current_run_id() -> Optional[str]:
    """Return the active run_id if set."""

    return _run_id_ctx.get()


@contextmanager
def run_scope(run_id: Optional[str] = None) -> Iterator[str]:
    """Bind a run_id (new unless given) for the duration of the block."""

    value = run_id or current_run_id() or str(uuid.uuid4())
    token = _run_id_ctx.set(value)
    try:
        yield value
    finally:
        _run_id_ctx.reset(token)


def redact_api_key(raw: Optional[str]) -> str:
    """Return a redacted representation of an API key for safe logging."""

    if not raw:
        return "<missing>"
    if len(raw) <= 3:
        return "***"
    return f"{raw[:4]}***"


def log_event(message: str, *, level: int = logging.INFO, **extra: object) -> None:
    """Log an event with the active run_id attached under ``record.payload``."""

    payload = {"run_id": current_run_id(), **extra}
    logger.log(level, message, extra={"payload": payload})
