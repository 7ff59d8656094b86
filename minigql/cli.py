"""Command-line interface for minigql."""

import json
import sys
from pathlib import Path

import click

from .config import get_settings
from .core.errors import GraphQLError, format_response
from .core.executor import Executor
from .core.parser import QueryParser
from .core.printer import print_schema
from .core.sdl import SchemaLoader


def read_query(query: str | None, query_file: str | None) -> str:
    """Return query text from the argument, a file, or stdin ('-')."""
    if query_file:
        return Path(query_file).read_text()
    if query is None or query == "-":
        return sys.stdin.read()
    return query


def dump(data) -> str:
    return json.dumps(data, indent=2, default=str)


def load_root_value(data_file: str):
    """Read the JSON root value for execute."""
    try:
        return json.loads(Path(data_file).read_text())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise GraphQLError(f"Error reading data file {data_file}: {e}", original_error=e) from e


def fail(error: GraphQLError, debug: bool | None = None):
    """Print error as a JSON response and exit with status 1."""
    click.echo(dump(format_response(error=error, debug=debug)))
    sys.exit(1)


@click.group()
@click.version_option(package_name="minigql")
def main():
    """Minimal query engine for embedded schemas.

    Parse selection queries and execute them against SDL schemas.
    """
    pass


@main.command()
@click.argument("query", required=False)
@click.option(
    "--file",
    "-f",
    "query_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Read the query from a file.",
)
def parse(query: str | None, query_file: str | None):
    """Parse a query and print its selection tree as JSON.

    Examples:

        minigql parse '{ user { name } }'

        minigql parse -f ./query.graphql
    """
    try:
        parsed = QueryParser().parse(read_query(query, query_file))
    except GraphQLError as e:
        fail(e)
    click.echo(dump(parsed.to_dict()))


@main.command()
@click.argument("query", required=False)
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to an SDL schema file or a directory of schema files.",
)
@click.option(
    "--data",
    "-d",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file used as the root value.",
)
@click.option(
    "--file",
    "-f",
    "query_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Read the query from a file.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Include debug details in error output (also enabled by MINIGQL_DEBUG).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def execute(
    query: str | None,
    schema: str,
    data: str | None,
    query_file: str | None,
    debug: bool,
    verbose: bool,
):
    """Execute a query against an SDL schema and a JSON root value.

    Fields are read from the root value by name; the output is a JSON
    response holding either "data" or "errors".

    Examples:

        minigql execute -s ./schema.graphqls -d ./data.json '{ user { name } }'

        minigql execute -s ./schema -f ./query.graphql
    """
    settings = get_settings()
    debug = debug or settings.debug

    root_value = None
    try:
        if data:
            root_value = load_root_value(data)
        loaded = SchemaLoader(schema, settings=settings).load()
        if verbose:
            click.echo(f"Schema: {Path(schema).resolve()}", err=True)
            click.echo(f"  Types: {len(loaded.type_map)}", err=True)
            click.echo(f"  Mutations: {'yes' if loaded.mutation_type else 'no'}", err=True)

        parsed = QueryParser().parse(read_query(query, query_file))
        result = Executor(loaded).execute_parsed(parsed, root_value)
    except GraphQLError as e:
        fail(e, debug)

    click.echo(dump(format_response(data=result)))


@main.command(name="schema")
@click.option(
    "--schema",
    "-s",
    "schema_path",
    required=True,
    type=click.Path(exists=True),
    help="Path to an SDL schema file or a directory of schema files.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the SDL to a file instead of stdout.",
)
def schema_command(schema_path: str, output: str | None):
    """Load a schema and print it back as normalised SDL.

    Examples:

        minigql schema -s ./schema

        minigql schema -s ./schema -o ./combined.graphqls
    """
    try:
        loaded = SchemaLoader(schema_path).load()
    except GraphQLError as e:
        fail(e)

    sdl = print_schema(loaded)
    if output:
        output_path = Path(output).resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(sdl)
        click.echo(f"Done! Wrote schema to {output_path}")
    else:
        click.echo(sdl, nl=False)


if __name__ == "__main__":
    main()
