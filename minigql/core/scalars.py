"""Handlers for custom scalar types.

Built-in scalars (String, Int, Boolean, Float, ID) are coerced by the
executor itself. Any other scalar declared in a schema needs a handler that
turns resolved Python values into result values.

Example usage:
    from minigql.core.scalars import ScalarRegistry

    registry = ScalarRegistry()

    class MoneyHandler:
        def serialize(self, value):
            return f"{value:.2f}"

    registry.register("Money", MoneyHandler())
    executor = Executor(schema, scalars=registry)
"""

from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers."""

    def serialize(self, value: Any) -> Any:
        """Convert a resolved Python value to its result representation."""
        ...


class DateTimeHandler:
    """Handler for DateTime scalars using ISO 8601 format."""

    def serialize(self, value: datetime | str) -> str:
        """Convert datetime to ISO 8601 string. Strings pass through."""
        if isinstance(value, str):
            return value
        return value.isoformat()


class DateHandler:
    """Handler for Date scalars using ISO 8601 date format."""

    def serialize(self, value: date | str) -> str:
        if isinstance(value, str):
            return value
        return value.isoformat()


class UUIDHandler:
    """Handler for UUID scalars."""

    def serialize(self, value: UUID | str) -> str:
        """Convert UUID to string."""
        return str(value)


class JSONHandler:
    """Handler for JSON scalars (pass-through)."""

    def serialize(self, value: Any) -> Any:
        return value


class ScalarRegistry:
    """Registry mapping custom scalar names to their handlers.

    Example:
        registry = ScalarRegistry()
        handler = registry.get("DateTime")
        handler.serialize(datetime(2024, 1, 15))  # "2024-01-15T00:00:00"
    """

    def __init__(self):
        self._handlers: dict[str, ScalarHandler] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register("DateTime", DateTimeHandler())
        self.register("Date", DateHandler())
        self.register("UUID", UUIDHandler())
        self.register("JSON", JSONHandler())
        self.register("JSONObject", JSONHandler())

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        self._handlers[scalar_name] = handler

    def get(self, scalar_name: str) -> ScalarHandler | None:
        """Get the handler for a scalar type, or None if not registered."""
        return self._handlers.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a handler is registered for a scalar type."""
        return scalar_name in self._handlers

    def names(self) -> set[str]:
        """Names of all scalars with a registered handler."""
        return set(self._handlers)
