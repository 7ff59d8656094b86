"""Executor for parsed selection trees.

Walks a selection tree against the schema's root type and a root value,
producing a result dict with exactly the requested shape. Execution is a
single synchronous depth-first walk; the first error aborts the request.
"""

import logging
from typing import Any

from .coercion import Coercer, is_list_like, non_null_error
from .errors import CoercionError, ExecutionError, GraphQLError, ResolverError
from .parser import ParsedQuery, QueryParser, SelectionTree
from .resolvers import FieldLookup, default_field_resolver
from .scalars import ScalarRegistry
from .schema import Schema
from .types import FieldDefinition, GraphQLType, TypeKind

logger = logging.getLogger(__name__)


class Executor:
    """Executes selection trees against a schema.

    Examples:
        executor = Executor(schema)
        parsed = QueryParser().parse("{ user { name } }")
        executor.execute(parsed.operation_type, parsed.selections, root_value)

        # Custom lookup for fields without a resolver
        executor = Executor(schema, field_resolver=my_lookup)

        # Extra custom scalars
        executor = Executor(schema, scalars=registry)
    """

    def __init__(
        self,
        schema: Schema,
        field_resolver: FieldLookup = default_field_resolver,
        scalars: ScalarRegistry | None = None,
    ):
        """Initialize the executor.

        Args:
            schema: The schema to execute against
            field_resolver: Lookup used for fields that have no resolver
            scalars: Handlers for custom scalars (defaults to ScalarRegistry())
        """
        self.schema = schema
        self.field_resolver = field_resolver
        self.coercer = Coercer(scalars)

    def execute(
        self,
        operation_type: str,
        selections: SelectionTree,
        root_value: Any = None,
    ) -> dict[str, Any]:
        """Execute a selection tree.

        Args:
            operation_type: 'query' or 'mutation'
            selections: Selection tree produced by QueryParser
            root_value: Source value handed to root field resolvers

        Returns:
            The result tree

        Raises:
            GraphQLError: On the first failure encountered
        """
        if operation_type == "query":
            root_type = self.schema.query_type
        elif operation_type == "mutation":
            root_type = self.schema.mutation_type
            if root_type is None:
                raise ExecutionError("Schema does not define a Mutation type.")
        else:
            raise ExecutionError(f"Unsupported operation type: {operation_type}")

        logger.debug("Executing %s on %s", operation_type, root_type.name)
        return self.resolve_selections(selections, root_type, root_value)

    def execute_parsed(self, parsed: ParsedQuery, root_value: Any = None) -> dict[str, Any]:
        """Execute the output of QueryParser.parse()."""
        return self.execute(parsed.operation_type, parsed.selections, root_value)

    def resolve_selections(
        self,
        selections: SelectionTree,
        current_type: GraphQLType,
        source: Any,
    ) -> dict[str, Any]:
        """Resolve every requested field of current_type on source."""
        if current_type.kind is not TypeKind.OBJECT:
            raise ExecutionError(
                f"Cannot resolve selections on a non-object type ({current_type.name})."
            )

        result = {}
        for field_name, nested in selections.items():
            definition = current_type.get_field(field_name)
            if definition is None:
                raise ExecutionError(
                    f'Cannot query field "{field_name}" on type "{current_type.name}".',
                    extensions={"field": field_name, "type": current_type.name},
                )
            value = self._resolve_field_value(field_name, definition, source)
            result[field_name] = self._complete_value(definition.type, nested, value)
        return result

    def _resolve_field_value(
        self,
        field_name: str,
        definition: FieldDefinition,
        source: Any,
    ) -> Any:
        """Produce the raw value of a field from its resolver or the default lookup."""
        try:
            if definition.resolve is not None:
                return definition.resolve(source, {})
            return self.field_resolver(source, field_name)
        except GraphQLError:
            raise
        except Exception as e:
            raise ResolverError(
                f'Resolver for field "{field_name}" threw an exception: {e}',
                extensions={"field": field_name},
                original_error=e,
            ) from e

    def _complete_value(
        self,
        field_type: GraphQLType,
        selections: SelectionTree,
        value: Any,
    ) -> Any:
        """Recurse into object selections or hand the value to the coercer.

        A NonNull wrapper around an object or a list of objects is looked
        through to decide on recursion and enforced on the outcome.
        """
        nullable = field_type.nullable_type

        if nullable.kind is TypeKind.OBJECT and selections:
            if value is None:
                completed = None
            else:
                completed = self.resolve_selections(selections, nullable, value)
            return _check_non_null(completed, field_type)

        if nullable.kind is TypeKind.LIST and nullable.of_type.nullable_type.is_object:
            completed = self._complete_object_list(nullable, selections, value)
            return _check_non_null(completed, field_type)

        return self.coercer.coerce(value, field_type)

    def _complete_object_list(
        self,
        list_type: GraphQLType,
        selections: SelectionTree,
        value: Any,
    ) -> list[Any] | None:
        if value is None:
            return None
        if not is_list_like(value):
            raise CoercionError(
                f"Value is not iterable for List type {list_type.name}: {value!r}"
            )

        item_type = list_type.of_type
        object_type = item_type.nullable_type
        items = []
        for item in value:
            if item is None:
                completed = None
            else:
                completed = self.resolve_selections(selections, object_type, item)
            items.append(_check_non_null(completed, item_type))
        return items


def _check_non_null(value: Any, type_: GraphQLType) -> Any:
    if value is None and type_.kind is TypeKind.NON_NULL:
        raise non_null_error(type_)
    return value


def execute_query(
    schema: Schema,
    query: str,
    root_value: Any = None,
    **executor_options: Any,
) -> dict[str, Any]:
    """Parse query text and execute it against schema in one call.

    Keyword arguments are passed on to Executor (field_resolver, scalars).
    """
    parsed = QueryParser().parse(query)
    return Executor(schema, **executor_options).execute_parsed(parsed, root_value)
