"""Core modules for schema definition, query parsing and execution."""

from .coercion import Coercer
from .errors import (
    CoercionError,
    ExecutionError,
    GraphQLError,
    QuerySyntaxError,
    ResolverError,
    SchemaValidationError,
    format_response,
)
from .executor import Executor, execute_query
from .parser import ParsedQuery, QueryParser, parse_query
from .printer import SchemaPrinter, print_query, print_schema
from .resolvers import FieldLookup, default_field_resolver
from .scalars import (
    DateHandler,
    DateTimeHandler,
    JSONHandler,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
)
from .schema import Schema
from .sdl import SchemaLoader
from .types import (
    Argument,
    FieldDefinition,
    GraphQLType,
    ScalarKind,
    TypeKind,
    list_of,
    non_null,
    object_type,
    scalar,
)

__all__ = [
    # Errors
    "GraphQLError",
    "SchemaValidationError",
    "QuerySyntaxError",
    "ExecutionError",
    "ResolverError",
    "CoercionError",
    "format_response",
    # Types
    "TypeKind",
    "ScalarKind",
    "GraphQLType",
    "FieldDefinition",
    "Argument",
    "scalar",
    "object_type",
    "list_of",
    "non_null",
    # Schema
    "Schema",
    "SchemaLoader",
    # Parser
    "ParsedQuery",
    "QueryParser",
    "parse_query",
    # Execution
    "Coercer",
    "Executor",
    "execute_query",
    "FieldLookup",
    "default_field_resolver",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "DateTimeHandler",
    "DateHandler",
    "UUIDHandler",
    "JSONHandler",
    # Printing
    "SchemaPrinter",
    "print_schema",
    "print_query",
]
