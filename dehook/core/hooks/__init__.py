"""
Hook system for objects.

Objects own named hooks (ordered lists of async handlers). Triggering a
hook pipes its arguments through the handlers in order. Methods wrapped
with `hooked` fire `pre-<name>` before the body and `post-<name>` after it.
"""

from .errors import (
    HookError,
    InvalidHandlerError,
    HandlerExecutionError,
    MissingRegistryError,
)
from .registry import HookRegistry, Handler, normalize_args
from .attachment import Hookable, hookable, attach, lookup, require
from .facade import (
    Hook,
    PRE_PREFIX,
    POST_PREFIX,
    pre_hook_name,
    post_hook_name,
    register_before,
    register_after,
    remove_hook,
    fire_custom,
)
from .decorators import HookConfig, hooked, with_hooks, drain_background

__all__ = [
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
