"""
Hook error taxonomy.
"""


class HookError(Exception):
    """Base class for hook errors."""
    pass


class InvalidHandlerError(HookError, TypeError):
    """Raised when `on` is given something that is not a handler or a list of handlers."""
    pass


class HandlerExecutionError(HookError):
    """
    Failure raised by a handler during a trigger.

    Handler exceptions propagate unchanged, so the registry never raises
    this itself. Callers that want a single type to catch can wrap failures
    in it.
    """
    pass


class MissingRegistryError(HookError, LookupError):
    """Raised when a hook operation targets an object with no registry attached."""

    def __init__(self, obj: object):
        self.obj = obj
        super().__init__(f"No hook registry attached to {type(obj).__name__} instance")
