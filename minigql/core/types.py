"""Type descriptors for minigql schemas.

A schema is built from four kinds of type: scalars, objects, lists and
non-null wrappers. All four are represented by a single GraphQLType value
whose payload depends on its kind:

    Object    -> field map (name -> FieldDefinition)
    List      -> wrapped element type
    NonNull   -> wrapped nullable type
    Scalar    -> nothing

Example:
    user = object_type("User", {
        "id": FieldDefinition(non_null(scalar("ID"))),
        "name": FieldDefinition(scalar("String")),
        "friends": FieldDefinition(list_of(...)),
    })

Object fields may be given as a zero-argument callable returning the field
map, which allows a type to reference itself or types declared later.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Union

from .errors import GraphQLError


class TypeKind(Enum):
    """The closed set of shapes a type descriptor can take."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"


class ScalarKind(str, Enum):
    """Built-in scalar types."""
    STRING = "String"
    INT = "Int"
    BOOLEAN = "Boolean"
    FLOAT = "Float"
    ID = "ID"

    @classmethod
    def lookup(cls, name: str) -> "ScalarKind | None":
        """Return the built-in scalar with this name, or None for custom scalars."""
        try:
            return cls(name)
        except ValueError:
            return None


BUILTIN_SCALAR_DESCRIPTIONS = {
    ScalarKind.STRING: (
        "The `String` scalar type represents textual data, represented as "
        "UTF-8 character sequences."
    ),
    ScalarKind.INT: "The `Int` scalar type represents a signed 32-bit integer.",
    ScalarKind.BOOLEAN: "The `Boolean` scalar type represents `true` or `false`.",
    ScalarKind.FLOAT: (
        "The `Float` scalar type represents a signed double-precision "
        "fractional value."
    ),
    ScalarKind.ID: (
        "The `ID` scalar type represents a unique identifier, serialized in "
        "the same way as a String."
    ),
}


@dataclass
class Argument:
    """Declared argument of a field. Kept for schema tooling; never evaluated."""
    type: "GraphQLType"
    description: str | None = None
    default_value: Any = None


@dataclass
class FieldDefinition:
    """A field on an object type.

    resolve receives (parent_value, args) and returns the raw field value.
    When it is None the executor falls back to its default field lookup.
    """
    type: "GraphQLType"
    description: str | None = None
    args: dict[str, Argument] = field(default_factory=dict)
    resolve: Callable[[Any, dict[str, Any]], Any] | None = None


FieldMap = Mapping[str, Union[FieldDefinition, "GraphQLType"]]
FieldThunk = Callable[[], FieldMap]


@dataclass(eq=False)
class GraphQLType:
    """A type descriptor. Use the module-level builders to create one.

    Types are compared by kind and name: two descriptors built separately with
    the same name are the same type.
    """
    name: str
    kind: TypeKind
    description: str | None = None
    field_source: FieldMap | FieldThunk | None = field(default=None, repr=False)
    wrapped: "GraphQLType | None" = field(default=None, repr=False)

    def __post_init__(self):
        self._fields: dict[str, FieldDefinition] | None = None

    def __eq__(self, other):
        if not isinstance(other, GraphQLType):
            return NotImplemented
        return self.kind is other.kind and self.name == other.name

    def __hash__(self):
        return hash((self.kind, self.name))

    def __str__(self):
        return self.name

    @property
    def is_object(self) -> bool:
        return self.kind is TypeKind.OBJECT

    @property
    def is_wrapper(self) -> bool:
        return self.kind in (TypeKind.LIST, TypeKind.NON_NULL)

    @property
    def scalar_kind(self) -> ScalarKind | None:
        """The built-in scalar this type is, if any."""
        if self.kind is not TypeKind.SCALAR:
            return None
        return ScalarKind.lookup(self.name)

    @property
    def of_type(self) -> "GraphQLType":
        """The wrapped type of a List or NonNull."""
        if not self.is_wrapper:
            raise GraphQLError(
                f"Cannot get 'ofType' from a non-LIST or non-NON_NULL type ({self.name})."
            )
        return self.wrapped

    @property
    def named_type(self) -> "GraphQLType":
        """The innermost type with all List/NonNull layers removed."""
        current = self
        while current.is_wrapper:
            current = current.wrapped
        return current

    @property
    def nullable_type(self) -> "GraphQLType":
        """This type without a NonNull wrapper."""
        if self.kind is TypeKind.NON_NULL:
            return self.wrapped
        return self

    def get_fields(self) -> dict[str, FieldDefinition]:
        """Return the field map of an object type."""
        if not self.is_object:
            raise GraphQLError(
                f"Cannot get fields from a non-object type ({self.name})."
            )
        if self._fields is None:
            source = self.field_source() if callable(self.field_source) else self.field_source
            self._fields = {
                name: _as_field(definition)
                for name, definition in (source or {}).items()
            }
        return self._fields

    def get_field(self, name: str) -> FieldDefinition | None:
        """Look up a single field of an object type."""
        if not self.is_object:
            raise GraphQLError(
                f"Cannot get field '{name}' from a non-object type ({self.name})."
            )
        return self.get_fields().get(name)


def _as_field(definition: FieldDefinition | GraphQLType) -> FieldDefinition:
    if isinstance(definition, GraphQLType):
        return FieldDefinition(type=definition)
    return definition


def scalar(name: str | ScalarKind, description: str | None = None) -> GraphQLType:
    """Create a scalar type. Built-in names get their standard description."""
    kind = ScalarKind.lookup(name)
    if kind is not None:
        name = kind.value
        if description is None:
            description = BUILTIN_SCALAR_DESCRIPTIONS[kind]
    return GraphQLType(name=name, kind=TypeKind.SCALAR, description=description)


def object_type(
    name: str,
    fields: FieldMap | FieldThunk,
    description: str | None = None,
) -> GraphQLType:
    """Create an object type from a field map or a thunk returning one."""
    return GraphQLType(
        name=name,
        kind=TypeKind.OBJECT,
        description=description,
        field_source=fields,
    )


def list_of(of_type: GraphQLType) -> GraphQLType:
    """Wrap a type in a list."""
    return GraphQLType(name=f"[{of_type.name}]", kind=TypeKind.LIST, wrapped=of_type)


def non_null(of_type: GraphQLType) -> GraphQLType:
    """Wrap a type as non-nullable. Wrapping a NonNull returns it unchanged."""
    if of_type.kind is TypeKind.NON_NULL:
        return of_type
    return GraphQLType(name=f"{of_type.name}!", kind=TypeKind.NON_NULL, wrapped=of_type)


def builtin_scalars() -> list[GraphQLType]:
    """Fresh descriptors for every built-in scalar."""
    return [scalar(kind) for kind in ScalarKind]
