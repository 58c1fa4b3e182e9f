"""Builder classes derived at runtime from a GraphQL schema, using graphql-core.

Produces the same ``TYPE_NAME`` / ``ALL_FIELDS`` contract generated builder
code publishes, so a schema file is enough to auto-populate documents:

    builders = build_builder_types(load_schema_sdl("schema.graphqls"))
    query = builders["Query"]("query", "Everything").with_all_fields()
    print(query.build())
"""

import logging
import os
import re

from graphql import (
    GraphQLSchema,
    build_schema,
    get_named_type,
    is_interface_type,
    is_object_type,
    is_union_type,
)

from .fields import FieldMetadata
from .query_builder import QueryBuilder

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")


def to_snake_case(name: str) -> str:
    """Convert camelCase to snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()


def collect_schema_files(schema_path: str) -> list[str]:
    """Collect schema files from a file or directory path, sorted."""
    files = []
    if os.path.isfile(schema_path):
        files.append(schema_path)
    else:
        for root, _, filenames in os.walk(schema_path):
            for filename in filenames:
                if filename.endswith(SCHEMA_EXTENSIONS):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def load_schema_sdl(schema_path: str) -> str:
    """Read and concatenate every schema file found at ``schema_path``."""
    files = collect_schema_files(schema_path)
    if not files:
        raise FileNotFoundError(f"No {'/'.join(SCHEMA_EXTENSIONS)} files found in {schema_path}")

    parts = []
    for file_path in files:
        with open(file_path) as f:
            parts.append(f.read())
    logger.info("Loaded %d schema file(s) from %s", len(files), schema_path)
    return "\n".join(parts)


def _make_fragment_method(fragment_type: type[QueryBuilder]):
    def with_type_fragment(self, builder):
        return self.with_fragment(builder)

    with_type_fragment.__annotations__ = {"builder": fragment_type}
    with_type_fragment.__name__ = f"with_{to_snake_case(fragment_type.TYPE_NAME)}_fragment"
    with_type_fragment.__qualname__ = with_type_fragment.__name__
    return with_type_fragment


def build_builder_types(sdl: str | GraphQLSchema) -> dict[str, type[QueryBuilder]]:
    """Create a ``QueryBuilder`` subclass per object, interface and union type.

    Args:
        sdl: Schema definition text, or an already built schema

    Returns:
        Mapping from GraphQL type name to builder class
    """
    schema = sdl if isinstance(sdl, GraphQLSchema) else build_schema(sdl)

    composite = {
        name: graphql_type
        for name, graphql_type in schema.type_map.items()
        if not name.startswith("__")
        and (is_object_type(graphql_type) or is_interface_type(graphql_type) or is_union_type(graphql_type))
    }

    # Create every class first so field descriptors can reference any of them
    builders: dict[str, type[QueryBuilder]] = {
        name: type(f"{name}QueryBuilder", (QueryBuilder,), {"TYPE_NAME": name})
        for name in composite
    }

    for name, graphql_type in composite.items():
        builder_type = builders[name]

        if not is_union_type(graphql_type):
            fields = []
            for field_name, field in graphql_type.fields.items():
                target = builders.get(get_named_type(field.type).name)
                fields.append(FieldMetadata(field_name, is_complex=target is not None, builder_type=target))
            builder_type.ALL_FIELDS = tuple(fields)

        if is_interface_type(graphql_type) or is_union_type(graphql_type):
            for possible in schema.get_possible_types(graphql_type):
                method = _make_fragment_method(builders[possible.name])
                setattr(builder_type, method.__name__, method)

        logger.debug("Built %s with %d field(s)", builder_type.__name__, len(builder_type.ALL_FIELDS))

    return builders


def operation_type_for(schema: GraphQLSchema, type_name: str) -> str:
    """Return ``"mutation"``/``"subscription"`` for those root types, else ``"query"``."""
    if schema.mutation_type and schema.mutation_type.name == type_name:
        return "mutation"
    if schema.subscription_type and schema.subscription_type.name == type_name:
        return "subscription"
    return "query"
