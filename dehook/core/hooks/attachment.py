"""
Attaching hook registries to objects.

Every hookable object carries its own registry in the `hooks` attribute,
created when the object is constructed.
"""
from __future__ import annotations

from typing import Any, Optional, TypeVar
from functools import wraps

from .errors import MissingRegistryError
from .registry import HookRegistry

REGISTRY_ATTR = "hooks"

C = TypeVar("C", bound=type)


def attach(obj: Any) -> HookRegistry:
    """Give `obj` a registry unless it already has one. Returns the registry."""
    registry = lookup(obj)
    if registry is None:
        registry = HookRegistry()
        setattr(obj, REGISTRY_ATTR, registry)
    return registry


def lookup(obj: Any) -> Optional[HookRegistry]:
    """Get the registry attached to `obj`, or None."""
    registry = getattr(obj, REGISTRY_ATTR, None)
    if isinstance(registry, HookRegistry):
        return registry
    return None


def require(obj: Any) -> HookRegistry:
    """Get the registry attached to `obj`, raising MissingRegistryError if absent."""
    registry = lookup(obj)
    if registry is None:
        raise MissingRegistryError(obj)
    return registry


def _copy_hookable(obj: Any) -> Any:
    """Shallow copy that gets its own registry holding the same handlers."""
    cls = type(obj)
    new = cls.__new__(cls)
    new.__dict__.update(obj.__dict__)
    registry = lookup(obj)
    if registry is not None:
        setattr(new, REGISTRY_ATTR, registry.copy())
    return new


class Hookable:
    """
    Base class for objects that own hooks.

    Example:
    ```python
    class Document(Hookable):
        def __init__(self, title: str):
            super().__init__()
            self.title = title

    doc = Document("draft")
    doc.hooks.on("pre-save", validate)
    ```

    The registry is created in __new__, so it is already there when
    __init__ runs.
    """

    hooks: HookRegistry

    def __new__(cls, *args: Any, **kwargs: Any):
        obj = super().__new__(cls)
        attach(obj)
        return obj

    def __copy__(self):
        return _copy_hookable(self)


def hookable(cls: C) -> C:
    """
    Class decorator that attaches a registry to every new instance.

    The registry is created after the class's own __init__ runs, so the
    constructor itself cannot register hooks on `self.hooks`. Use the
    Hookable base class for that.
    """
    if "__copy__" not in cls.__dict__:
        cls.__copy__ = _copy_hookable

    original_init = cls.__init__

    @wraps(original_init)
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        original_init(self, *args, **kwargs)
        attach(self)

    cls.__init__ = __init__
    return cls
