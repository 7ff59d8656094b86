"""Printers for schemas and parsed queries.

print_schema renders a Schema as SDL through a Jinja2 template, so the
output can be fed back to SchemaLoader. print_query renders a ParsedQuery
as indented query text.

Custom templates are supported via the template_dir parameter:
    printer = SchemaPrinter(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import json
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .parser import ParsedQuery, SelectionTree
from .schema import Schema
from .types import Argument, FieldDefinition

SCHEMA_TEMPLATE = "schema.graphqls.j2"


def block_string(text: str) -> str:
    """Escape text for use inside a GraphQL block string."""
    if not text:
        return ""
    return text.replace('"""', '\\"""')


def literal(value: Any) -> str:
    """Render a Python value as a GraphQL literal."""
    if isinstance(value, dict):
        items = ", ".join(f"{k}: {literal(v)}" for k, v in value.items())
        return f"{{{items}}}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(literal(v) for v in value) + "]"
    return json.dumps(value)


class SchemaPrinter:
    """Renders schemas as SDL.

    Available templates to override:
        - schema.graphqls.j2
    """

    def __init__(self, template_dir: str | None = None):
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("minigql", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["block_string"] = block_string

    def print_schema(self, schema: Schema) -> str:
        query_name = schema.query_type.name
        mutation_name = schema.mutation_type.name if schema.mutation_type else None
        template = self.env.get_template(SCHEMA_TEMPLATE)
        content = template.render(
            schema_block=query_name != "Query" or mutation_name not in (None, "Mutation"),
            query_name=query_name,
            mutation_name=mutation_name,
            scalars=schema.custom_scalars,
            objects=[
                {
                    "name": t.name,
                    "description": t.description,
                    "fields": [
                        {"description": d.description, "signature": field_signature(n, d)}
                        for n, d in t.get_fields().items()
                    ],
                }
                for t in schema.object_types
            ],
        )
        return content.rstrip() + "\n"


def field_signature(name: str, definition: FieldDefinition) -> str:
    """Render `name(arg: Type = default): Type`."""
    args = ""
    if definition.args:
        args = "(" + ", ".join(
            _argument_signature(arg_name, arg) for arg_name, arg in definition.args.items()
        ) + ")"
    return f"{name}{args}: {definition.type.name}"


def _argument_signature(name: str, arg: Argument) -> str:
    signature = f"{name}: {arg.type.name}"
    if arg.default_value is not None:
        signature += f" = {literal(arg.default_value)}"
    return signature


def print_schema(schema: Schema) -> str:
    """Render schema as SDL with the package templates."""
    return SchemaPrinter().print_schema(schema)


def print_query(parsed: ParsedQuery, indent: str = "  ") -> str:
    """Render a parsed query as query text."""
    lines = [f"{parsed.operation_type} {{"]
    _print_selections(parsed.selections, 1, indent, lines)
    lines.append("}")
    return "\n".join(lines)


def _print_selections(selections: SelectionTree, depth: int, indent: str, lines: list[str]):
    prefix = indent * depth
    for name, nested in selections.items():
        if nested:
            lines.append(f"{prefix}{name} {{")
            _print_selections(nested, depth + 1, indent, lines)
            lines.append(f"{prefix}}}")
        else:
            lines.append(f"{prefix}{name}")
