"""
Hook operations addressed by owning object.
"""
from __future__ import annotations

from typing import Any, Awaitable

from .attachment import require
from .registry import Handler, HandlerArg

PRE_PREFIX = "pre-"
POST_PREFIX = "post-"


def pre_hook_name(name: str) -> str:
    return PRE_PREFIX + name


def post_hook_name(name: str) -> str:
    return POST_PREFIX + name


def register_before(obj: Any, name: str, handler: HandlerArg) -> Any:
    """Register a handler on the 'pre-' hook of `name`."""
    return require(obj).on(pre_hook_name(name), handler)


def register_after(obj: Any, name: str, handler: HandlerArg) -> Any:
    """Register a handler on the 'post-' hook of `name`."""
    return require(obj).on(post_hook_name(name), handler)


def remove_hook(obj: Any, name: str, handler: Handler | None = None) -> bool:
    """Remove one handler, or the whole hook, from `obj`."""
    return require(obj).off(name, handler)


def fire_custom(obj: Any, name: str, *args: Any) -> Awaitable[Any]:
    """Trigger hook `name` on `obj`, with `obj` as the handler context."""
    return require(obj).trigger(obj, name, *args)


class Hook:
    """
    Static helpers mirroring the module functions, chainable.

    Example:
    ```python
    Hook.before(doc, "save", validate).after(doc, "save", notify)
    await Hook.custom_trigger(doc, "reindex")
    ```
    """

    @staticmethod
    def on(obj: Any, name: str, handler: HandlerArg) -> type[Hook]:
        require(obj).on(name, handler)
        return Hook

    @staticmethod
    def off(obj: Any, name: str, handler: Handler | None = None) -> type[Hook]:
        require(obj).off(name, handler)
        return Hook

    @staticmethod
    def before(obj: Any, name: str, handler: HandlerArg) -> type[Hook]:
        return Hook.on(obj, pre_hook_name(name), handler)

    @staticmethod
    def after(obj: Any, name: str, handler: HandlerArg) -> type[Hook]:
        return Hook.on(obj, post_hook_name(name), handler)

    @staticmethod
    def custom_trigger(obj: Any, name: str, *args: Any) -> Awaitable[Any]:
        return fire_custom(obj, name, *args)
