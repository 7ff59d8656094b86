"""Schema loader for GraphQL SDL files using graphql-core.

Builds minigql type descriptors from `.graphqls` files so a schema can be
declared in SDL instead of Python. Resolvers are attached by type and field
name:

    loader = SchemaLoader("./schema", resolvers={
        "Query": {"hello": lambda root, args: "World"},
    })
    schema = loader.load()

Only object types, `extend type`, custom scalars and the `schema { ... }`
block are understood. Interfaces, enums, unions and input types are skipped.
"""

import logging
import os
from typing import Any, Callable

from graphql import (
    DocumentNode,
    FieldDefinitionNode,
    GraphQLSyntaxError,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    parse,
    value_from_ast_untyped,
)

from ..config import Settings, get_settings
from .errors import SchemaValidationError
from .schema import Schema
from .types import (
    Argument,
    FieldDefinition,
    GraphQLType,
    ScalarKind,
    list_of,
    non_null,
    object_type,
    scalar,
)

logger = logging.getLogger(__name__)

ResolverMap = dict[str, dict[str, Callable[[Any, dict[str, Any]], Any]]]


def _description(node) -> str | None:
    return node.description.value if node.description else None


class SchemaLoader:
    """Loads SDL files or text into a Schema."""

    def __init__(
        self,
        schema_path: str | None = None,
        resolvers: ResolverMap | None = None,
        settings: Settings | None = None,
    ):
        """Initialize a loader.

        Args:
            schema_path: Path to a schema file or a directory of schema files
            resolvers: Field resolvers keyed by type name, then field name
            settings: Settings providing the schema file suffixes
        """
        self.schema_path = schema_path
        self.resolvers = resolvers or {}
        self.settings = settings or get_settings()
        self.current_file = ""

        self._field_nodes: dict[str, list[FieldDefinitionNode]] = {}
        self._object_descriptions: dict[str, str | None] = {}
        self._scalars: dict[str, GraphQLType] = {}
        self._types: dict[str, GraphQLType] = {}
        self._root_names = {"query": "Query", "mutation": "Mutation"}

    @classmethod
    def from_sdl(cls, sdl: str, resolvers: ResolverMap | None = None) -> Schema:
        """Build a Schema straight from SDL text."""
        loader = cls(resolvers=resolvers)
        loader.add_source(sdl)
        return loader.build()

    def load(self) -> Schema:
        """Read every schema file under schema_path and build the Schema."""
        if self.schema_path is None:
            raise ValueError("SchemaLoader.load() needs a schema_path")

        schema_files = self._collect_schema_files()
        if not schema_files:
            raise SchemaValidationError(f"No schema files found at {self.schema_path}")

        for file_path in schema_files:
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                self.add_source(f.read(), self.current_file)
        return self.build()

    def add_source(self, content: str, name: str = "<sdl>"):
        """Parse one SDL document and record its definitions."""
        try:
            document = parse(content)
        except GraphQLSyntaxError as e:
            raise SchemaValidationError(
                f"Error parsing {name}: {e.message}", original_error=e
            ) from e
        self._process_document(document, name)

    def _collect_schema_files(self) -> list[str]:
        """Collect schema files from path."""
        suffixes = tuple(self.settings.schema_suffixes)
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(suffixes):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(suffixes):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _process_document(self, document: DocumentNode, name: str):
        for definition in document.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition)
            elif isinstance(definition, ObjectTypeExtensionNode):
                self._merge_extension_fields(definition)
            elif isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)
            else:
                logger.warning("Skipping unsupported %s in %s", definition.kind, name)

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        name = node.name.value
        if ScalarKind.lookup(name) is not None:
            return
        self._scalars[name] = scalar(name, _description(node))

    def _process_object_type(self, node: ObjectTypeDefinitionNode):
        name = node.name.value
        self._object_descriptions[name] = _description(node)
        self._add_fields(name, node.fields)

    def _merge_extension_fields(self, node: ObjectTypeExtensionNode):
        """Merge `extend type X { ... }` fields into X."""
        name = node.name.value
        # The base definition, seen before or after, supplies the description
        self._object_descriptions.setdefault(name, None)
        self._add_fields(name, node.fields)

    def _add_fields(self, type_name: str, field_nodes):
        existing = self._field_nodes.setdefault(type_name, [])
        existing_names = {f.name.value for f in existing}
        for node in field_nodes or ():
            if node.name.value not in existing_names:
                existing.append(node)
                existing_names.add(node.name.value)

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        for operation_node in node.operation_types:
            operation = operation_node.operation.value
            if operation not in self._root_names:
                logger.warning("Skipping unsupported %s root type", operation)
                continue
            self._root_names[operation] = operation_node.type.name.value

    def build(self) -> Schema:
        """Create the Schema from everything added so far."""
        query_name = self._root_names["query"]
        if query_name not in self._field_nodes:
            raise SchemaValidationError(f'Schema does not define a "{query_name}" type.')

        for type_name in self.resolvers:
            if type_name not in self._field_nodes:
                logger.warning("Resolvers given for unknown type %s", type_name)

        query_type = self._object(query_name)
        mutation_name = self._root_names["mutation"]
        mutation_type = None
        if mutation_name in self._field_nodes:
            mutation_type = self._object(mutation_name)

        # Scalars declared but never referenced are still part of the schema
        return Schema(query_type, mutation_type, types=self._scalars.values())

    def _object(self, name: str) -> GraphQLType:
        if name not in self._types:
            self._types[name] = object_type(
                name,
                lambda: self._build_fields(name),
                description=self._object_descriptions.get(name),
            )
        return self._types[name]

    def _build_fields(self, type_name: str) -> dict[str, FieldDefinition]:
        type_resolvers = self.resolvers.get(type_name, {})
        fields = {}
        for node in self._field_nodes[type_name]:
            args = {}
            for arg_node in node.arguments or ():
                default = None
                if arg_node.default_value is not None:
                    default = value_from_ast_untyped(arg_node.default_value)
                args[arg_node.name.value] = Argument(
                    type=self._build_type(arg_node.type),
                    description=_description(arg_node),
                    default_value=default,
                )
            fields[node.name.value] = FieldDefinition(
                type=self._build_type(node.type),
                description=_description(node),
                args=args,
                resolve=type_resolvers.get(node.name.value),
            )
        return fields

    def _build_type(self, type_node: TypeNode) -> GraphQLType:
        """Turn an SDL type reference into a type descriptor."""
        if isinstance(type_node, NonNullTypeNode):
            return non_null(self._build_type(type_node.type))
        if isinstance(type_node, ListTypeNode):
            return list_of(self._build_type(type_node.type))
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return self._named_type(type_node.name.value)

    def _named_type(self, name: str) -> GraphQLType:
        if ScalarKind.lookup(name) is not None:
            return scalar(name)
        if name in self._scalars:
            return self._scalars[name]
        if name in self._field_nodes:
            return self._object(name)
        raise SchemaValidationError(f'Unknown type "{name}" referenced in schema.')
