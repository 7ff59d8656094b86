"""Type-directed shaping of resolved values.

The Coercer turns a raw value returned by a resolver into the shape its
declared type requires. Nullability is checked after coercing the wrapped
type, so a NonNull field fails only once its inner value turned out null.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import fields, is_dataclass
from decimal import Decimal
from numbers import Real
from typing import Any

from pydantic import BaseModel

from .errors import CoercionError
from .scalars import ScalarRegistry
from .types import GraphQLType, ScalarKind, TypeKind

NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

TRUE_STRINGS = {"1", "true", "on", "yes"}
FALSE_STRINGS = {"0", "false", "off", "no", ""}


def is_numeric(value: Any) -> bool:
    """True for real numbers and numeric strings. Booleans are not numeric."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (Real, Decimal)):
        return True
    return isinstance(value, str) and NUMERIC_RE.match(value) is not None


def is_list_like(value: Any) -> bool:
    """True for iterables that represent a sequence of items.

    Strings, bytes, mappings and pydantic models are iterable in Python but
    stand for a single value here.
    """
    if isinstance(value, (str, bytes, bytearray, Mapping, BaseModel)):
        return False
    return isinstance(value, Iterable)


class Coercer:
    """Coerces raw values against type descriptors."""

    def __init__(self, scalars: ScalarRegistry | None = None):
        self.scalars = scalars if scalars is not None else ScalarRegistry()

    def coerce(self, value: Any, type_: GraphQLType) -> Any:
        """Coerce value to type_.

        Raises:
            CoercionError: If the value does not fit the type.
        """
        kind = type_.kind
        if kind is TypeKind.NON_NULL:
            coerced = self.coerce(value, type_.of_type)
            if coerced is None:
                raise non_null_error(type_)
            return coerced
        if kind is TypeKind.LIST:
            if value is None:
                return None
            if not is_list_like(value):
                value = [value]
            item_type = type_.of_type
            return [self.coerce(item, item_type) for item in value]
        if kind is TypeKind.SCALAR:
            return self.coerce_scalar(value, type_)
        if kind is TypeKind.OBJECT:
            return self.coerce_object(value, type_)
        raise CoercionError(f"Unsupported type kind for coercion: {kind}")

    def coerce_scalar(self, value: Any, type_: GraphQLType) -> Any:
        if value is None:
            return None

        scalar_kind = type_.scalar_kind
        if scalar_kind is None:
            handler = self.scalars.get(type_.name)
            if handler is None:
                raise CoercionError(f"Unknown scalar type: {type_.name}")
            return handler.serialize(value)

        if scalar_kind in (ScalarKind.STRING, ScalarKind.ID):
            return str(value)
        if scalar_kind is ScalarKind.INT:
            return _coerce_int(value)
        if scalar_kind is ScalarKind.BOOLEAN:
            return _coerce_boolean(value)
        # ScalarKind.FLOAT
        if not is_numeric(value):
            raise CoercionError(f"Value is not a valid Float: {value!r}")
        return float(value)

    def coerce_object(self, value: Any, type_: GraphQLType) -> dict[str, Any] | None:
        """Return an already-resolved composite value as a plain dict."""
        if value is None:
            return None
        if isinstance(value, Mapping):
            return dict(value)
        if isinstance(value, BaseModel):
            return value.model_dump()
        if not isinstance(value, type):
            if is_dataclass(value):
                return {f.name: getattr(value, f.name) for f in fields(value)}
            if hasattr(value, "__dict__"):
                return dict(vars(value))
            slots = _slot_names(value)
            if slots:
                return {name: getattr(value, name) for name in slots if hasattr(value, name)}
        raise CoercionError(
            f"Value cannot be coerced to object type {type_.name}: {value!r}"
        )


def _slot_names(value: Any) -> list[str]:
    """Slot attribute names declared along the class hierarchy of value."""
    names = []
    for klass in type(value).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


def non_null_error(type_: GraphQLType) -> CoercionError:
    return CoercionError(f"Cannot return null for non-nullable type {type_.name}.")


def _coerce_int(value: Any) -> int:
    if not is_numeric(value):
        raise CoercionError(f"Value is not a valid Int: {value!r}")
    text = str(value)
    if "." in text:
        raise CoercionError(f"Value is not a valid Int: {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise CoercionError(f"Value is not a valid Int: {value!r}") from exc
    if str(as_int) != text:
        raise CoercionError(f"Value is not a valid Int: {value!r}")
    return as_int


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, int, float)):
        text = str(value).strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    # Unrecognised forms fall back to plain truthiness
    return bool(value)
