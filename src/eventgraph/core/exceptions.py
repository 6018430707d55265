from __future__ import annotations

from typing import Any, Dict, Mapping


class EventGraphError(Exception):
    """Base exception for eventgraph."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidArgumentError(EventGraphError, ValueError):
    """Raised when a required argument is missing."""

    def __init__(
        self,
        message: str = "",
        *,
        argument: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if argument:
            ctx["argument"] = argument
        EventGraphError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.argument = argument


class TypeMismatchError(EventGraphError, TypeError):
    """Raised when a value has the wrong kind (e.g. a non-callable resolver)."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        EventGraphError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


class InvalidStateError(EventGraphError, RuntimeError):
    """Raised when an operation is not allowed in the object's current state."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        EventGraphError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class LinkNotImplementedError(EventGraphError, NotImplementedError):
    """Raised when the abstract link contract is invoked directly."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        EventGraphError.__init__(self, message, context=context)
        NotImplementedError.__init__(self, message)


class GraphDefinitionError(EventGraphError, ValueError):
    """Raised when a declarative graph definition cannot be loaded."""

    def __init__(
        self,
        message: str = "",
        *,
        index: int | None = None,
        source: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if index is not None:
            ctx["index"] = index
        if source:
            ctx["source"] = source
        EventGraphError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ConfigError(EventGraphError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        EventGraphError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "EventGraphError",
    "InvalidArgumentError",
    "TypeMismatchError",
    "InvalidStateError",
    "LinkNotImplementedError",
    "GraphDefinitionError",
    "ConfigError",
]
