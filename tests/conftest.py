"""
Pytest fixtures for testing.

Provides:
- A fresh hook registry
- A hookable sample class with wrapped methods
- A call recorder for asserting handler order
"""

import logging

import pytest
import structlog

from dehook import HookConfig, HookRegistry, Hookable, hooked, with_hooks


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep logging configuration from leaking between tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def registry() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def ctx() -> object:
    """Opaque handler context."""
    return object()


# ============ Call Recorder ============


class CallRecorder:
    """Records handler calls in order."""

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []

    def handler(self, label: str, returns=None, *, echo: bool = False):
        """
        Build an async handler that records (label, args).

        With echo=True the handler returns its own arguments list,
        otherwise it returns `returns`.
        """
        async def _handler(ctx, *args):
            self.calls.append((label, args))
            return list(args) if echo else returns

        _handler.__qualname__ = f"recorded_{label}"
        return _handler

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.calls]


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


# ============ Sample Hookable Class ============


class Document(Hookable):
    """Sample hookable class covering each interception mode."""

    def __init__(self, title: str = "draft"):
        self.title = title
        self.saved: list = []
        self.rendered: list = []

    @hooked(is_async=True)
    async def save(self, record, *, flush: bool = False):
        self.saved.append((record, flush))
        return {"saved": record}

    @hooked(is_async=True, name="store")
    async def persist(self, a, b):
        return a + b

    @hooked(is_async=True, pre=True)
    async def validate(self, value):
        return value

    @hooked(is_async=True, post=True)
    async def publish(self, value):
        return value

    @hooked(is_async=True)
    def compute(self, x):
        return x * 10

    @hooked
    def render(self, fmt):
        self.rendered.append(fmt)
        return f"{self.title}.{fmt}"

    @hooked(background=True, is_async=True)
    async def sync_remote(self, target):
        return f"synced:{target}"

    async def archive(self, reason):
        return await with_hooks(
            self, "archive", self._archive, reason,
            config=HookConfig(is_async=True),
        )

    async def _archive(self, reason):
        return f"archived:{reason}"


@pytest.fixture
def document() -> Document:
    return Document()
