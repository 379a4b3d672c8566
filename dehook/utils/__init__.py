"""Logging and trigger-context helpers."""

from .context import add_trigger_context, current_hook, trigger_scope
from .logging import configure_logging

__all__ = [
    "add_trigger_context",
    "current_hook",
    "trigger_scope",
    "configure_logging",
]
