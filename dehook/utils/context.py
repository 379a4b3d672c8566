"""
Trigger Context Utilities.

Tracks which hook pipeline step is currently running so log lines emitted
from inside a handler can be correlated with the hook that called it.

Usage:
    from dehook.utils.context import current_hook

    async def audit(ctx, record):
        hook_name, step = current_hook()
        logger.info("Auditing", hook_name=hook_name, step=step)
        return record
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional


# Task-local (async-safe) state for the running pipeline step
_hook_name: ContextVar[Optional[str]] = ContextVar("hook_name", default=None)
_hook_step: ContextVar[Optional[int]] = ContextVar("hook_step", default=None)


def current_hook() -> tuple[Optional[str], Optional[int]]:
    """Get the hook name and step index being run, or (None, None)."""
    return _hook_name.get(), _hook_step.get()


@contextmanager
def trigger_scope(name: str, step: int) -> Iterator[None]:
    """Mark `name`/`step` as the running pipeline step for the enclosed block."""
    name_token = _hook_name.set(name)
    step_token = _hook_step.set(step)
    try:
        yield
    finally:
        _hook_step.reset(step_token)
        _hook_name.reset(name_token)


# ============================================================
# STRUCTLOG PROCESSOR
# ============================================================

def add_trigger_context(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds the running hook step to all logs.

    Explicit `hook_name`/`step` fields on the event win.
    """
    hook_name, step = current_hook()

    if hook_name is not None:
        event_dict.setdefault("hook_name", hook_name)
    if step is not None:
        event_dict.setdefault("hook_step", step)

    return event_dict
