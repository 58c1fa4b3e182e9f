"""Query builder for GraphQL operations.

A ``QueryBuilder`` is a mutable selection set. The root builder of a document
carries the operation type and name; nested builders back object fields and
inline fragments. Generated subclasses publish ``TYPE_NAME`` and
``ALL_FIELDS`` and add typed ``with_<field>()`` methods on top of the generic
ones defined here.

Example usage:
    class HumanQueryBuilder(QueryBuilder):
        TYPE_NAME = "Human"
        ALL_FIELDS = (FieldMetadata("id"), FieldMetadata("name"))

    builder = HumanQueryBuilder("query", "Heroes").with_all_fields()
    builder.build(Formatting.COMPACT)  # 'query Heroes{id,name}'
"""

import inspect
import logging
from typing import Any, Iterable, Mapping, Sequence, TypeVar, get_type_hints

from .arguments import ArgumentInfo
from .directives import GraphQLDirective
from .errors import InvalidIdentifierError, MissingTypeNameError
from .fields import (
    FieldCriteria,
    FieldMetadata,
    FragmentCriteria,
    ObjectFieldCriteria,
    ScalarFieldCriteria,
)
from .formatting import Formatting, get_indentation, validate_identifier
from .parameters import QueryParameter
from .values import encode_value

logger = logging.getLogger(__name__)

TQueryBuilder = TypeVar("TQueryBuilder", bound="QueryBuilder")

Arguments = Sequence[ArgumentInfo] | Mapping[str, Any] | None


def _to_arguments(args: Arguments) -> list[ArgumentInfo]:
    """Accept ``ArgumentInfo`` lists or ``{name: value}`` mappings."""
    if not args:
        return []
    if isinstance(args, Mapping):
        return [ArgumentInfo.of(name, value) for name, value in args.items()]
    return list(args)


class QueryBuilder:
    """Builds GraphQL documents from field selections.

    Args:
        operation_type: ``"query"``, ``"mutation"`` or ``"subscription"`` for a
            document root; None for a nested selection
        operation_name: Optional operation name
    """

    TYPE_NAME: str = ""
    ALL_FIELDS: tuple[FieldMetadata, ...] = ()

    def __init__(self, operation_type: str | None = None, operation_name: str | None = None):
        validate_identifier("operation_name", operation_name)
        self._operation_type = operation_type
        self._operation_name = operation_name
        self._field_criteria: dict[str, FieldCriteria] = {}
        self._fragments: dict[str, FragmentCriteria] | None = None
        self._parameters: list[ArgumentInfo] | None = None

    @property
    def all_fields(self) -> tuple[FieldMetadata, ...]:
        return type(self).ALL_FIELDS

    @property
    def has_fields(self) -> bool:
        return bool(self._field_criteria)

    @property
    def has_selections(self) -> bool:
        """True if an object field backed by this builder would render."""
        return bool(self._field_criteria) or bool(self._fragments)

    @property
    def parameters(self) -> list[QueryParameter]:
        return [info.value for info in self._parameters or []]

    def clear(self):
        """Remove all fields, fragments and variable declarations."""
        self._field_criteria.clear()
        if self._fragments is not None:
            self._fragments.clear()
        if self._parameters is not None:
            self._parameters.clear()

    def build(self, formatting: Formatting = Formatting.INDENTED, indent_size: int = 2) -> str:
        """Build the GraphQL document text.

        Args:
            formatting: Compact or indented output
            indent_size: Spaces per nesting level in indented output

        Returns:
            Complete GraphQL document (or selection set for nested builders)
        """
        return self._build(formatting, 1, indent_size)

    def _build(self, formatting: Formatting, level: int, indent_size: int) -> str:
        indented = formatting == Formatting.INDENTED
        space = " " if indented else ""
        parts = []

        if self._operation_type:
            parts.append(self._operation_type)
            if self._operation_name:
                parts.append(f" {self._operation_name}")
            if self._parameters:
                parts.append(self._build_variable_declarations(formatting, level, indent_size))
            parts.append(space)

        parts.append("{")
        if indented:
            parts.append("\n")

        separator = ""
        criteria = list(self._field_criteria.values()) + list((self._fragments or {}).values())
        for criterion in criteria:
            text = criterion.build(formatting, level, indent_size)
            if indented:
                parts.append(text)
                parts.append("\n")
            elif text:
                parts.append(separator)
                parts.append(text)
                separator = ","

        if indented:
            parts.append(get_indentation(level - 1, indent_size))
        parts.append("}")
        return "".join(parts)

    def _build_variable_declarations(self, formatting: Formatting, level: int, indent_size: int) -> str:
        """Build the declaration clause: ``($id: ID!, $first: Int = 10)``."""
        indented = formatting == Formatting.INDENTED
        space = " " if indented else ""
        parts = [space, "("]
        separator = ""

        for info in self._parameters:
            parameter = info.value
            type_name = parameter.graphql_type_name
            if not type_name:
                raise MissingTypeNameError(parameter.name, "could not infer GraphQL type name")

            parts.append(separator)
            if indented:
                parts.append("\n")
                parts.append(get_indentation(level, indent_size))

            parts.append(f"${parameter.name}:{space}{type_name}")
            if not type_name.endswith("!"):
                default = encode_value(parameter.value, info.format_mask, formatting, 0, indent_size)
                parts.append(f"{space}={space}{default}")
            separator = ","

        parts.append(")")
        return "".join(parts)

    # Mutation

    def _include_scalar_field(self, field_name: str, args: Arguments = None, directives=None):
        self._field_criteria[field_name] = ScalarFieldCriteria(field_name, _to_arguments(args), directives)

    def _include_object_field(self, field_name: str, builder: "QueryBuilder", args: Arguments = None, directives=None):
        self._field_criteria[field_name] = ObjectFieldCriteria(field_name, builder, _to_arguments(args), directives)

    def _include_fragment(self, builder: "QueryBuilder", directives=None):
        if not builder.TYPE_NAME:
            raise InvalidIdentifierError("TYPE_NAME", builder.TYPE_NAME)
        if self._fragments is None:
            self._fragments = {}
        self._fragments[builder.TYPE_NAME] = FragmentCriteria(builder, directives)

    def _include_fields(self, fields: Iterable[FieldMetadata], ancestors: tuple[type, ...] = ()):
        """Include fields, recursing into object fields.

        ``ancestors`` holds the builder classes being populated above this
        one on the current branch; an object field whose builder class is
        among them is skipped so cyclic type graphs terminate.
        """
        for field in fields:
            if field.builder_type is None:
                self._include_scalar_field(field.name)
                continue

            if any(issubclass(field.builder_type, t) for t in ancestors):
                logger.debug(
                    "Skipping %s.%s: %s already being populated",
                    type(self).__name__, field.name, field.builder_type.__name__,
                )
                continue

            chain = ancestors + (type(self),)
            builder = _initialize_child(field.builder_type, chain)
            for method, fragment_type in _fragment_methods(field.builder_type):
                method(builder, _initialize_child(fragment_type, chain))

            self._include_object_field(field.name, builder)

    # Fluent API

    def with_all_fields(self: TQueryBuilder) -> TQueryBuilder:
        """Select every field, recursively, stopping at cycles."""
        self._include_fields(self.all_fields)
        return self

    def with_all_scalar_fields(self: TQueryBuilder) -> TQueryBuilder:
        """Select every field that has no sub-selection."""
        self._include_fields(f for f in self.all_fields if not f.is_complex)
        return self

    def except_field(self: TQueryBuilder, field_name: str) -> TQueryBuilder:
        if field_name is None:
            raise ValueError("field_name is required")
        self._field_criteria.pop(field_name, None)
        return self

    def with_type_name(self: TQueryBuilder) -> TQueryBuilder:
        self._include_scalar_field("__typename")
        return self

    def with_scalar_field(
        self: TQueryBuilder,
        field_name: str,
        args: Arguments = None,
        directives: Sequence[GraphQLDirective] | None = None,
    ) -> TQueryBuilder:
        self._include_scalar_field(field_name, args, directives)
        return self

    def with_object_field(
        self: TQueryBuilder,
        field_name: str,
        builder: "QueryBuilder",
        args: Arguments = None,
        directives: Sequence[GraphQLDirective] | None = None,
    ) -> TQueryBuilder:
        self._include_object_field(field_name, builder, args, directives)
        return self

    def with_fragment(
        self: TQueryBuilder,
        builder: "QueryBuilder",
        directives: Sequence[GraphQLDirective] | None = None,
    ) -> TQueryBuilder:
        """Add ``... on <builder.TYPE_NAME> { ... }``; replaces a fragment on the same type."""
        self._include_fragment(builder, directives)
        return self

    def with_parameter(self: TQueryBuilder, parameter: QueryParameter) -> TQueryBuilder:
        """Declare a variable in the operation header.

        Declaring a variable with an existing name replaces the earlier
        declaration in place.
        """
        if not parameter.name:
            raise InvalidIdentifierError("name", parameter.name)
        if self._parameters is None:
            self._parameters = []
        info = ArgumentInfo(parameter.name, parameter, parameter.format_mask)
        for i, existing in enumerate(self._parameters):
            if existing.name == parameter.name:
                self._parameters[i] = info
                break
        else:
            self._parameters.append(info)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fields={list(self._field_criteria)!r})"


def _initialize_child(builder_type: type[QueryBuilder], ancestors: tuple[type, ...]) -> QueryBuilder:
    builder = builder_type()
    builder._include_fields(builder.all_fields, ancestors)
    return builder


def _fragment_methods(builder_type: type[QueryBuilder]) -> tuple:
    """Find ``with_<type>_fragment(builder)`` methods of a builder class.

    Returns (function, fragment builder class) pairs, cached on the class.
    """
    cached = vars(builder_type).get("__fragment_methods__")
    if cached is None:
        cached = _find_fragment_methods(builder_type)
        builder_type.__fragment_methods__ = cached
    return cached


def _find_fragment_methods(builder_type: type[QueryBuilder]) -> tuple:
    methods = []
    for name, member in inspect.getmembers(builder_type, inspect.isfunction):
        if name == "with_fragment" or not (name.startswith("with_") and name.endswith("_fragment")):
            continue
        params = list(inspect.signature(member).parameters.values())[1:]
        if len(params) != 1:
            continue
        try:
            hints = get_type_hints(member)
        except NameError:
            logger.debug("Unresolvable annotations on %s.%s", builder_type.__name__, name)
            continue
        fragment_type = hints.get(params[0].name)
        if (
            isinstance(fragment_type, type)
            and issubclass(fragment_type, QueryBuilder)
            and fragment_type is not QueryBuilder
        ):
            methods.append((member, fragment_type))
    return tuple(methods)
