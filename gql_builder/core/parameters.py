"""Query variables and GraphQL type-name inference.

A ``QueryParameter`` is either a named variable, declared in the operation
header and referenced as ``$name``, or an unnamed wrapper whose value is
inlined as a literal wherever it is used.

Example usage:
    from uuid import uuid4
    from gql_builder.core.parameters import QueryParameter

    user_id = QueryParameter("id", uuid4(), nullable=False)
    user_id.graphql_type_name  # "ID!"

    limit = QueryParameter("limit", 10, "Int")
    tags = QueryParameter("tags", [], value_type=list[str])  # "[String]"
"""

import collections.abc
import types
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, TypeVar, Union, get_args, get_origin
from uuid import UUID

from .errors import FormattingUnsupportedError, MissingTypeNameError
from .formatting import strip_whitespace, supports_format, validate_identifier

T = TypeVar("T", bound=type)


class TypeRegistry:
    """Reverse mapping from Python classes to GraphQL type names.

    Generated object, input and enum classes register themselves here so that
    variables holding their instances can be declared without spelling out
    the GraphQL type.

    Example:
        registry = TypeRegistry()
        registry.register(OrderStatus, "OrderStatus")
        registry.get(OrderStatus)  # "OrderStatus"
    """

    def __init__(self):
        self._names: dict[type, str] = {}

    def register(self, python_type: type, graphql_name: str):
        """Register the GraphQL name for a Python class."""
        validate_identifier("graphql_name", graphql_name)
        self._names[python_type] = graphql_name

    def get(self, python_type: type) -> str | None:
        """Get the registered GraphQL name, or None if not registered."""
        return self._names.get(python_type)

    def has(self, python_type: type) -> bool:
        """Check if a class is registered."""
        return python_type in self._names


GRAPHQL_TYPES = TypeRegistry()


def graphql_type(graphql_name: str, registry: TypeRegistry | None = None) -> Callable[[T], T]:
    """Class decorator registering a generated class under its GraphQL name."""

    def decorator(cls: T) -> T:
        (registry or GRAPHQL_TYPES).register(cls, graphql_name)
        cls.__graphql_type_name__ = graphql_name
        return cls

    return decorator


def _unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``Optional[X]`` / ``X | None``; other annotations unchanged."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def infer_graphql_type_name(value_type: Any, registry: TypeRegistry | None = None) -> str | None:
    """Infer the GraphQL type name of a Python class or typing annotation.

    Returns None when no mapping exists.
    """
    registry = registry or GRAPHQL_TYPES
    value_type = _unwrap_optional(value_type)

    origin = get_origin(value_type)
    if origin is not None:
        if origin in (Union, types.UnionType) or not isinstance(origin, type):
            return None
        if issubclass(origin, collections.abc.Mapping) or not issubclass(origin, collections.abc.Iterable):
            return None
        args = get_args(value_type)
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            args = args[:1]
        if len(args) != 1:
            return None
        item_type = infer_graphql_type_name(args[0], registry)
        return None if item_type is None else f"[{item_type}]"

    if not isinstance(value_type, type):
        return None

    registered = registry.get(value_type)
    if registered:
        return registered

    # Unregistered enums render member names, never primitive literals
    if issubclass(value_type, Enum):
        return None

    if issubclass(value_type, bool):
        return "Boolean"
    if issubclass(value_type, (float, Decimal)):
        return "Float"
    if issubclass(value_type, UUID):
        return "ID"
    if issubclass(value_type, int):
        return "Int"
    if issubclass(value_type, str):
        return "String"

    return None


def _infer_from_value(value: Any, registry: TypeRegistry | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        item = next((v for v in value if v is not None), None)
        item_type = _infer_from_value(item, registry)
        return None if item_type is None else f"[{item_type}]"
    return infer_graphql_type_name(type(value), registry)


class QueryParameter:
    """A GraphQL variable, or an inline literal when it has no name.

    Args:
        name: Variable name without ``$``; None for an inline literal
        value: Current value, also used as the declared default value
        graphql_type_name: Explicit GraphQL type, e.g. ``"[ID!]!"``
        nullable: When False, ``!`` is appended to an inferred type name
        value_type: Type or typing annotation used for inference instead of
            the runtime value, e.g. ``list[UUID]``
        format_mask: Format spec applied to the value when rendered
        registry: Reverse type mapping used for inference
    """

    def __init__(
        self,
        name: str | None = None,
        value: Any = None,
        graphql_type_name: str | None = None,
        *,
        nullable: bool = True,
        value_type: Any = None,
        format_mask: str | None = None,
        registry: TypeRegistry | None = None,
    ):
        name = name.strip() if name is not None else None
        validate_identifier("name", name)

        if graphql_type_name is not None:
            graphql_type_name = strip_whitespace(graphql_type_name)
            if not graphql_type_name:
                raise MissingTypeNameError(name, "graphql_type_name must not be empty")
        else:
            if value_type is not None:
                graphql_type_name = infer_graphql_type_name(value_type, registry)
            else:
                graphql_type_name = _infer_from_value(value, registry)
            if graphql_type_name is not None and not nullable:
                graphql_type_name += "!"

        self._name = name
        self.graphql_type_name = graphql_type_name
        self.value = value
        self.value_type = value_type
        self._format_mask = None
        self.format_mask = format_mask

    @property
    def name(self) -> str | None:
        return self._name

    @name.setter
    def name(self, value: str | None):
        validate_identifier("name", value)
        self._name = value

    @property
    def format_mask(self) -> str | None:
        return self._format_mask

    @format_mask.setter
    def format_mask(self, mask: str | None):
        if mask:
            formatted_type = self._formatted_type()
            if not supports_format(formatted_type):
                raise FormattingUnsupportedError(formatted_type, mask)
        self._format_mask = mask

    @property
    def is_non_null(self) -> bool:
        return bool(self.graphql_type_name) and self.graphql_type_name.endswith("!")

    def _formatted_type(self) -> type:
        if self.value is not None:
            return type(self.value)
        declared = _unwrap_optional(self.value_type)
        return declared if isinstance(declared, type) else type(None)

    def __repr__(self) -> str:
        return (
            f"QueryParameter(name={self._name!r}, value={self.value!r}, "
            f"graphql_type_name={self.graphql_type_name!r})"
        )


def as_parameter(value: Any) -> QueryParameter:
    """Wrap a raw value as an inline literal; parameters pass through unchanged."""
    if isinstance(value, QueryParameter):
        return value
    return QueryParameter(None, value)
