"""
Method interception: fire pre/post hooks around a method body.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, TypeVar
from dataclasses import dataclass, replace
from functools import partial, wraps
import asyncio
import inspect
import logging

import structlog

from .attachment import require
from .facade import post_hook_name, pre_hook_name
from .registry import normalize_args

logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
)

F = TypeVar("F", bound=Callable[..., Any])

# Strong references to detached hook tasks until they finish
_background_tasks: set[asyncio.Task] = set()


@dataclass(frozen=True)
class HookConfig:
    """
    Interception options.

    is_async: await the hooks and thread data through them (pre-hook output
        becomes the method arguments, post-hook output the return value)
    background: fire hooks without awaiting them or using their results
    pre / post: restrict to one side; setting both or neither runs both
    name: hook base name, defaults to the method name
    """
    is_async: bool = False
    background: bool = False
    pre: bool = False
    post: bool = False
    name: Optional[str] = None

    @property
    def runs_pre(self) -> bool:
        return self.pre or not self.post

    @property
    def runs_post(self) -> bool:
        return self.post or not self.pre

    @property
    def threaded(self) -> bool:
        return self.is_async and not self.background


async def _run_threaded(
    obj: Any,
    body: Callable[..., Any],
    name: str,
    config: HookConfig,
    args: tuple,
    kwargs: dict,
) -> Any:
    registry = require(obj)
    pre_name, post_name = pre_hook_name(name), post_hook_name(name)

    call_args: Any = args
    if config.runs_pre and registry.has(pre_name):
        call_args = await registry.trigger(obj, pre_name, *args)

    result = body(*normalize_args(call_args), **kwargs)
    if inspect.isawaitable(result):
        result = await result

    if config.runs_post and registry.has(post_name):
        result = await registry.trigger(obj, post_name, *normalize_args(result))
    return result


def _log_detached_failure(name: str, task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("detached_hook_failed", hook_name=name, exc_info=exc)


def _fire_detached(obj: Any, name: str, args: tuple) -> None:
    registry = require(obj)
    if not registry.has(name):
        return

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None:
        # Plain sync caller: run the pipeline to completion here
        try:
            asyncio.run(registry.trigger(obj, name, *args))
        except Exception:
            logger.error("detached_hook_failed", hook_name=name, exc_info=True)
        return

    task = loop.create_task(registry.trigger(obj, name, *args), name=f"dehook:{name}")
    _background_tasks.add(task)
    task.add_done_callback(partial(_log_detached_failure, name))


def _run_detached(
    obj: Any,
    body: Callable[..., Any],
    name: str,
    config: HookConfig,
    args: tuple,
    kwargs: dict,
) -> Any:
    if config.runs_pre:
        _fire_detached(obj, pre_hook_name(name), args)
    result = body(*args, **kwargs)
    if config.runs_post:
        _fire_detached(obj, post_hook_name(name), args)
    return result


async def _run_detached_async(
    obj: Any,
    body: Callable[..., Awaitable[Any]],
    name: str,
    config: HookConfig,
    args: tuple,
    kwargs: dict,
) -> Any:
    if config.runs_pre:
        _fire_detached(obj, pre_hook_name(name), args)
    result = await body(*args, **kwargs)
    if config.runs_post:
        _fire_detached(obj, post_hook_name(name), args)
    return result


def with_hooks(
    obj: Any,
    name: str,
    body: Callable[..., Any],
    *args: Any,
    config: Optional[HookConfig] = None,
    **kwargs: Any,
) -> Any:
    """
    Call `body(*args, **kwargs)` surrounded by the pre/post hooks of `name` on `obj`.

    Returns a coroutine when the hooks are threaded (`is_async`) or the
    body is a coroutine function, otherwise the body's result.

    Example:
    ```python
    class Document(Hookable):
        async def save(self, record):
            return await with_hooks(
                self, "save", self._write, record,
                config=HookConfig(is_async=True),
            )
    ```
    """
    config = config or HookConfig()
    name = config.name or name

    if config.threaded:
        return _run_threaded(obj, body, name, config, args, kwargs)
    if inspect.iscoroutinefunction(body):
        return _run_detached_async(obj, body, name, config, args, kwargs)
    return _run_detached(obj, body, name, config, args, kwargs)


def hooked(config: Optional[HookConfig] = None, **options: Any) -> Callable[[F], F]:
    """
    Decorator firing `pre-<name>` / `post-<name>` hooks around a method.

    Options are the HookConfig fields and override `config` when both are
    given. The owning instance must have a registry attached (see Hookable).

    Example:
    ```python
    class Document(Hookable):
        @hooked(is_async=True)
        async def save(self, record):
            ...
    ```
    """
    if callable(config):
        # Bare @hooked
        return hooked()(config)

    config = replace(config or HookConfig(), **options)

    def decorator(func: F) -> F:
        name = config.name or func.__name__

        if config.threaded:
            @wraps(func)
            async def threaded_wrapper(self, *args: Any, **kwargs: Any) -> Any:
                return await _run_threaded(self, partial(func, self), name, config, args, kwargs)

            return threaded_wrapper  # type: ignore[return-value]

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(self, *args: Any, **kwargs: Any) -> Any:
                return await _run_detached_async(self, partial(func, self), name, config, args, kwargs)

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            return _run_detached(self, partial(func, self), name, config, args, kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


async def drain_background() -> None:
    """Wait for all detached hook tasks scheduled so far to finish."""
    while _background_tasks:
        await asyncio.gather(*list(_background_tasks), return_exceptions=True)
