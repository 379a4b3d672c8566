"""
Per-object hook registry.

Hooks are named, ordered lists of async handlers. Triggering a hook runs
its handlers one after another as a pipeline: each handler receives the
previous handler's output as its positional arguments.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Sequence, Union
import inspect
import logging

import structlog

from dehook.utils.context import trigger_scope
from .errors import InvalidHandlerError

logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
)

Handler = Callable[..., Awaitable[Any]]
HandlerArg = Union[Handler, Sequence[Handler]]


def normalize_args(value: Any) -> list[Any]:
    """
    Turn a handler result into the next handler's positional arguments.

    None gives no arguments, a list or tuple is spread, anything else is
    passed as the single argument.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class HookRegistry:
    """
    Registry of hook handlers owned by a single object.

    Example usage:
    ```python
    registry = HookRegistry()

    async def add_one(ctx, x):
        return x + 1

    async def double(ctx, x):
        return x * 2

    registry.on("save", add_one).on("save", double)
    await registry.trigger(ctx, "save", 3)  # 8
    ```
    """

    def __init__(self):
        self._hooks: dict[str, list[Handler]] = {}

    def on(self, name: str, handler: HandlerArg) -> HookRegistry:
        """
        Append a handler, or a list of handlers, to the hook `name`.

        Raises InvalidHandlerError before touching the registry if the
        argument is not a callable or a list/tuple of callables.
        """
        if callable(handler):
            new_handlers = [handler]
        elif isinstance(handler, (list, tuple)) and all(callable(h) for h in handler):
            new_handlers = list(handler)
        else:
            raise InvalidHandlerError(
                f"Invalid handler for hook {name!r}: expected a callable or a list of callables, "
                f"got {type(handler).__name__}"
            )

        self._hooks.setdefault(name, []).extend(new_handlers)

        for h in new_handlers:
            logger.debug("hook_registered", hook_name=name, handler=_handler_name(h))
        return self

    def off(self, name: str, handler: Handler | None = None) -> bool:
        """
        Remove handlers from the hook `name`.

        Without `handler` the whole hook is dropped. With `handler` only its
        first registration is removed; the list is kept even if it ends up
        empty.
        """
        if name not in self._hooks:
            return False

        if handler is None:
            del self._hooks[name]
            logger.debug("hook_removed", hook_name=name)
            return True

        hooks = self._hooks[name]
        for i, h in enumerate(hooks):
            if h is handler:
                del hooks[i]
                logger.debug("hook_unregistered", hook_name=name, handler=_handler_name(handler))
                return True
        return False

    async def trigger(self, context: Any, name: str, *args: Any) -> Any:
        """
        Run the handlers of `name` in registration order.

        Each handler is called as `handler(context, *args)` where args come
        from the previous step's normalized output. Returns the last output,
        or the arguments as a list when the hook has no handlers.

        The handler list is copied when the trigger starts; registrations
        made while the pipeline runs apply to the next trigger.
        """
        output: Any = list(args)
        if name not in self._hooks:
            return output

        hooks = list(self._hooks[name])
        for step, hook in enumerate(hooks):
            logger.debug("hook_step", hook_name=name, step=step, handler=_handler_name(hook))
            with trigger_scope(name, step):
                output = hook(context, *normalize_args(output))
                if inspect.isawaitable(output):
                    output = await output

        return output

    def has(self, name: str) -> bool:
        """Check if any handlers are registered for name."""
        return bool(self._hooks.get(name))

    def handlers(self, name: str) -> list[Handler]:
        """Copy of the handlers registered for name."""
        return list(self._hooks.get(name, []))

    def names(self) -> list[str]:
        """Sorted hook names, including hooks left with an empty list."""
        return sorted(self._hooks.keys())

    def clear(self) -> None:
        self._hooks.clear()

    def copy(self) -> HookRegistry:
        """New registry with the same handlers; later changes are not shared."""
        registry = HookRegistry()
        registry._hooks = {name: list(hooks) for name, hooks in self._hooks.items()}
        return registry

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())

    def __repr__(self) -> str:
        return f"<HookRegistry hooks={self.names()!r}>"
