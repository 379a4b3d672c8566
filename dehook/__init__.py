"""
dehook: pre/post hooks for async Python objects.

Usage:
    from dehook import Hookable, hooked, register_before

    class Document(Hookable):
        @hooked(is_async=True)
        async def save(self, record):
            ...

    doc = Document()
    register_before(doc, "save", normalize_record)
    await doc.save({"title": "draft"})
"""

from .core.config import HookSettings, get_settings
from .core.hooks import (
    HookError,
    InvalidHandlerError,
    HandlerExecutionError,
    MissingRegistryError,
    HookRegistry,
    Handler,
    normalize_args,
    Hookable,
    hookable,
    attach,
    lookup,
    require,
    Hook,
    PRE_PREFIX,
    POST_PREFIX,
    pre_hook_name,
    post_hook_name,
    register_before,
    register_after,
    remove_hook,
    fire_custom,
    HookConfig,
    hooked,
    with_hooks,
    drain_background,
)
from .utils.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    "HookSettings",
    "get_settings",
    "configure_logging",
    "HookError",
    "InvalidHandlerError",
    "HandlerExecutionError",
    "MissingRegistryError",
    "HookRegistry",
    "Handler",
    "normalize_args",
    "Hookable",
    "hookable",
    "attach",
    "lookup",
    "require",
    "Hook",
    "PRE_PREFIX",
    "POST_PREFIX",
    "pre_hook_name",
    "post_hook_name",
    "register_before",
    "register_after",
    "remove_hook",
    "fire_custom",
    "HookConfig",
    "hooked",
    "with_hooks",
    "drain_background",
]
