"""Core modules for building GraphQL documents."""

from .arguments import ArgumentInfo, build_argument_clause
from .directives import GraphQLDirective, IncludeDirective, SkipDirective
from .errors import (
    EnumResolutionError,
    FormattingUnsupportedError,
    InvalidIdentifierError,
    MissingTypeNameError,
    QueryBuilderError,
)
from .fields import (
    FieldCriteria,
    FieldMetadata,
    FragmentCriteria,
    ObjectFieldCriteria,
    ScalarFieldCriteria,
)
from .formatting import Formatting, get_indentation, validate_identifier
from .inputs import GraphQLInputObject, InputObject, InputPropertyInfo
from .parameters import (
    GRAPHQL_TYPES,
    QueryParameter,
    TypeRegistry,
    as_parameter,
    graphql_type,
    infer_graphql_type_name,
)
from .query_builder import QueryBuilder
from .response import ErrorLocation, GraphQLResponse, QueryError
from .schema import build_builder_types, load_schema_sdl
from .values import ValueKind, build_input_object, classify_value, encode_value, graphql_enum

__all__ = [
    # Errors
    "QueryBuilderError",
    "InvalidIdentifierError",
    "FormattingUnsupportedError",
    "MissingTypeNameError",
    "EnumResolutionError",
    # Formatting
    "Formatting",
    "get_indentation",
    "validate_identifier",
    # Values
    "ValueKind",
    "classify_value",
    "encode_value",
    "build_input_object",
    "graphql_enum",
    "GraphQLInputObject",
    "InputObject",
    "InputPropertyInfo",
    # Variables
    "QueryParameter",
    "TypeRegistry",
    "GRAPHQL_TYPES",
    "as_parameter",
    "graphql_type",
    "infer_graphql_type_name",
    # Arguments and directives
    "ArgumentInfo",
    "build_argument_clause",
    "GraphQLDirective",
    "IncludeDirective",
    "SkipDirective",
    # Fields
    "FieldMetadata",
    "FieldCriteria",
    "ScalarFieldCriteria",
    "ObjectFieldCriteria",
    "FragmentCriteria",
    # Query Builder
    "QueryBuilder",
    # Response
    "GraphQLResponse",
    "QueryError",
    "ErrorLocation",
    # Schema
    "build_builder_types",
    "load_schema_sdl",
]
