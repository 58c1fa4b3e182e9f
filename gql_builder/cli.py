"""Command-line interface for gql-builder."""

import logging

import click
from graphql import GraphQLError, build_schema

from .core.errors import QueryBuilderError
from .core.formatting import Formatting
from .core.schema import build_builder_types, load_schema_sdl, operation_type_for


def _load_schema(schema: str):
    try:
        return build_schema(load_schema_sdl(schema))
    except (GraphQLError, FileNotFoundError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="gql-builder")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Build GraphQL query documents from a schema."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or a directory of .graphql/.graphqls files.",
)


@main.command()
@schema_option
@click.option("--type", "-t", "type_name", default="Query", show_default=True, help="Root type to select from.")
@click.option(
    "--operation",
    type=click.Choice(["query", "mutation", "subscription"]),
    default=None,
    help="Operation type (default: derived from the schema root types).",
)
@click.option("--name", "-n", "operation_name", default=None, help="Operation name.")
@click.option("--compact/--indented", default=False, help="Output style (default: indented).")
@click.option(
    "--indent-size",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    envvar="GQL_BUILDER_INDENT_SIZE",
    help="Spaces per nesting level in indented output.",
)
@click.option("--scalars-only", is_flag=True, help="Select only fields without sub-selections.")
def render(
    schema: str,
    type_name: str,
    operation: str | None,
    operation_name: str | None,
    compact: bool,
    indent_size: int,
    scalars_only: bool,
):
    """Print a document selecting every field of a type.

    Examples:

        gql-builder render --schema ./schema.graphqls

        gql-builder render -s ./schema -t Mutation --name CreateAll --compact
    """
    graphql_schema = _load_schema(schema)
    builders = build_builder_types(graphql_schema)
    if type_name not in builders:
        raise click.ClickException(f"Unknown type: {type_name}")

    try:
        builder = builders[type_name](
            operation or operation_type_for(graphql_schema, type_name),
            operation_name,
        )
        if scalars_only:
            builder.with_all_scalar_fields()
        else:
            builder.with_all_fields()
        formatting = Formatting.COMPACT if compact else Formatting.INDENTED
        click.echo(builder.build(formatting, indent_size))
    except QueryBuilderError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@schema_option
def types(schema: str):
    """List the types a document can select from."""
    builders = build_builder_types(_load_schema(schema))
    for name, builder_type in sorted(builders.items()):
        click.echo(f"{name} ({len(builder_type.ALL_FIELDS)} fields)")


if __name__ == "__main__":
    main()
