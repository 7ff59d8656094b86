"""Default field lookup used when a field has no resolver.

Hosts whose values are not plain mappings or objects can pass their own
FieldLookup to the Executor.

Example:
    class RowLookup:
        def __call__(self, source, field_name):
            return source.get_column(field_name)

    executor = Executor(schema, field_resolver=RowLookup())
"""

import inspect
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FieldLookup(Protocol):
    """Protocol for reading a field's raw value off a parent value."""

    def __call__(self, source: Any, field_name: str) -> Any:
        """Return the raw value of field_name on source, or None."""
        ...


def default_field_resolver(source: Any, field_name: str) -> Any:
    """Resolve a field from a mapping key, an attribute or a zero-argument method.

    Mappings are only consulted by key. Any other value is read by attribute;
    a bound method is invoked without arguments. Stored callables (functions,
    classes, callable objects) are returned as they are. Missing fields
    resolve to None.
    """
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(field_name)

    value = getattr(source, field_name, None)
    if inspect.ismethod(value) and field_name not in getattr(source, "__dict__", ()):
        return value()
    return value
