"""Schema: root operation types plus a flattened name -> type map."""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import SchemaValidationError
from .types import GraphQLType, TypeKind, builtin_scalars

logger = logging.getLogger(__name__)


class Schema:
    """A query root, an optional mutation root and every type reachable from them.

    Extra types (such as scalars no field refers to) can be passed in types.

    The type map is filled once at construction by a depth-first walk that
    starts from the built-in scalars. A name that is already registered is
    never visited again, so self-referencing object types are safe.
    """

    def __init__(
        self,
        query_type: GraphQLType,
        mutation_type: GraphQLType | None = None,
        types: Iterable[GraphQLType] | None = None,
    ):
        if query_type.kind is not TypeKind.OBJECT:
            raise SchemaValidationError("Query type must be an ObjectType.")
        if mutation_type is not None and mutation_type.kind is not TypeKind.OBJECT:
            raise SchemaValidationError("Mutation type must be an ObjectType.")

        self._query_type = query_type
        self._mutation_type = mutation_type
        self._type_map: dict[str, GraphQLType] = {}

        for builtin in builtin_scalars():
            self._register_type(builtin)
        self._register_type(query_type)
        if mutation_type is not None:
            self._register_type(mutation_type)
        for extra in types or ():
            self._register_type(extra)

        logger.debug("Schema registered %d types", len(self._type_map))

    def _register_type(self, type_: GraphQLType):
        """Register a type and everything reachable from it."""
        if type_.name in self._type_map:
            return
        self._type_map[type_.name] = type_

        if type_.kind is TypeKind.OBJECT:
            for definition in type_.get_fields().values():
                self._register_type(definition.type)
        elif type_.is_wrapper:
            self._register_type(type_.of_type)

    @property
    def query_type(self) -> GraphQLType:
        return self._query_type

    @property
    def mutation_type(self) -> GraphQLType | None:
        return self._mutation_type

    @property
    def type_map(self) -> Mapping[str, GraphQLType]:
        """Read-only view of every registered type by name."""
        return MappingProxyType(self._type_map)

    def get_type(self, name: str) -> GraphQLType | None:
        """Look up a registered type by name."""
        return self._type_map.get(name)

    def get_root_type(self, operation_type: str) -> GraphQLType | None:
        """Return the root type for 'query' or 'mutation'."""
        if operation_type == "query":
            return self._query_type
        if operation_type == "mutation":
            return self._mutation_type
        return None

    @property
    def custom_scalars(self) -> list[GraphQLType]:
        """Registered scalars that are not built in."""
        return [
            t for t in self._type_map.values()
            if t.kind is TypeKind.SCALAR and t.scalar_kind is None
        ]

    @property
    def object_types(self) -> list[GraphQLType]:
        """Registered object types in registration order."""
        return [t for t in self._type_map.values() if t.kind is TypeKind.OBJECT]
