# src/logging/context.py - v1
"""Contextual logging support: attach request_id, caller and task to log records."""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

# Set per inbound request; asyncio tasks inherit a copy on creation.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_caller: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "caller", default=None
)
_task: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "task", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    caller: str | None = None
    task: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        caller=_caller.get(),
        task=_task.get(),
    )


def set_request_context(request_id: str | None = None, caller: str | None = None) -> str:
    """Set request-level context. Generates a request id when none is given."""
    rid = request_id or uuid.uuid4().hex[:12]
    _request_id.set(rid)
    _caller.set(caller)
    return rid


def set_task_context(task: str | None) -> None:
    """Set the generation task currently being served."""
    _task.set(task)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _caller.set(None)
    _task.set(None)
