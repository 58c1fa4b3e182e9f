"""Encoding of Python values as GraphQL literals.

``encode_value`` classifies a value into one ``ValueKind`` (checked in
precedence order) and renders it:

    encode_value(None)                      # null
    encode_value(True)                      # true
    encode_value("O'Brien")                 # "O'Brien"
    encode_value([1, 2, 3])                 # [1,2,3]
    encode_value(date(2024, 1, 15))         # "2024-01-15"
    encode_value(Decimal("9.5"), "08.3f")   # "0009.500"
"""

import numbers
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable
from uuid import UUID

from pydantic import BaseModel

from .errors import EnumResolutionError, FormattingUnsupportedError
from .formatting import Formatting, get_indentation, supports_format
from .inputs import GraphQLInputObject, InputPropertyInfo
from .parameters import QueryParameter


class ValueKind(Enum):
    """Value shapes, in the order they are checked."""
    VARIABLE = "variable"
    NULL = "null"
    FORMATTED = "formatted"
    ENUM = "enum"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    INPUT_OBJECT = "input_object"
    TEXT = "text"
    SEQUENCE = "sequence"
    NUMBER = "number"
    OTHER = "other"


def graphql_enum(**aliases: str):
    """Class decorator declaring wire names for enum members.

    Example:
        @graphql_enum(CREATED_AT="createdAt")
        class SortField(Enum):
            CREATED_AT = 1
            NAME = 2      # rendered as NAME
    """

    def decorator(cls):
        unknown = set(aliases) - set(cls.__members__)
        if unknown:
            raise ValueError(f"{cls.__name__} has no members {sorted(unknown)}")
        cls.__graphql_aliases__ = dict(aliases)
        return cls

    return decorator


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray, Mapping, BaseModel))


def classify_value(value: Any, format_mask: str | None = None) -> ValueKind:
    """Return the shape ``value`` is rendered as."""
    if isinstance(value, QueryParameter):
        return ValueKind.VARIABLE
    if value is None:
        return ValueKind.NULL
    sequence = _is_sequence(value)
    if format_mask and not sequence:
        return ValueKind.FORMATTED
    if isinstance(value, Enum):
        return ValueKind.ENUM
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (datetime, date, time)):
        return ValueKind.TEMPORAL
    if isinstance(value, (GraphQLInputObject, BaseModel, Mapping)):
        return ValueKind.INPUT_OBJECT
    if isinstance(value, (str, UUID)):
        return ValueKind.TEXT
    if sequence:
        return ValueKind.SEQUENCE
    if isinstance(value, (numbers.Integral, float, Decimal)):
        return ValueKind.NUMBER
    return ValueKind.OTHER


def encode_value(
    value: Any,
    format_mask: str | None = None,
    formatting: Formatting = Formatting.COMPACT,
    level: int = 0,
    indent_size: int = 2,
) -> str:
    """Render ``value`` as a GraphQL literal."""
    kind = classify_value(value, format_mask)
    return _ENCODERS[kind](value, format_mask, formatting, level, indent_size)


def _encode_variable(parameter, format_mask, formatting, level, indent_size):
    if parameter.name is not None:
        return f"${parameter.name}"
    return encode_value(
        parameter.value, format_mask or parameter.format_mask, formatting, level, indent_size
    )


def _encode_formatted(value, format_mask, formatting, level, indent_size):
    if not supports_format(type(value)):
        raise FormattingUnsupportedError(type(value), format_mask)
    try:
        text = format(value, format_mask)
    except (TypeError, ValueError) as e:
        raise FormattingUnsupportedError(type(value), format_mask) from e
    return f'"{text}"'


def _encode_enum(value, format_mask, formatting, level, indent_size):
    enum_type = type(value)
    if value.name is None or enum_type.__members__.get(value.name) is not value:
        raise EnumResolutionError(f"enum member resolution failed for {value!r}")
    aliases = getattr(enum_type, "__graphql_aliases__", {})
    return aliases.get(value.name, value.name)


def _encode_boolean(value, format_mask, formatting, level, indent_size):
    return "true" if value else "false"


def _encode_temporal(value, format_mask, formatting, level, indent_size):
    return f'"{value.isoformat()}"'


def _encode_input_object(value, format_mask, formatting, level, indent_size):
    return build_input_object(value, formatting, level + 2, indent_size)


def _encode_text(value, format_mask, formatting, level, indent_size):
    return f'"{value}"'


def _encode_sequence(value, format_mask, formatting, level, indent_size):
    parts = ["["]
    delimiter = ""
    for item in value:
        parts.append(delimiter)
        if formatting == Formatting.INDENTED:
            parts.append("\n")
            parts.append(get_indentation(level + 1, indent_size))
        parts.append(encode_value(item, format_mask, formatting, level, indent_size))
        delimiter = ","
    parts.append("]")
    return "".join(parts)


def _encode_number(value, format_mask, formatting, level, indent_size):
    return str(value)


def _encode_other(value, format_mask, formatting, level, indent_size):
    return f'"{value}"'


_ENCODERS: dict[ValueKind, Callable[..., str]] = {
    ValueKind.VARIABLE: _encode_variable,
    ValueKind.NULL: lambda *_: "null",
    ValueKind.FORMATTED: _encode_formatted,
    ValueKind.ENUM: _encode_enum,
    ValueKind.BOOLEAN: _encode_boolean,
    ValueKind.TEMPORAL: _encode_temporal,
    ValueKind.INPUT_OBJECT: _encode_input_object,
    ValueKind.TEXT: _encode_text,
    ValueKind.SEQUENCE: _encode_sequence,
    ValueKind.NUMBER: _encode_number,
    ValueKind.OTHER: _encode_other,
}


def _property_values(value: Any) -> Iterable[InputPropertyInfo]:
    if isinstance(value, GraphQLInputObject):
        return value.get_property_values()
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True, exclude_unset=True)
    return (InputPropertyInfo(str(name), item) for name, item in value.items())


def build_input_object(
    value: GraphQLInputObject | BaseModel | Mapping,
    formatting: Formatting = Formatting.COMPACT,
    level: int = 0,
    indent_size: int = 2,
) -> str:
    """Render an input object as ``{name:value,...}``.

    Properties are indented at ``level`` and the closing brace one level
    shallower in indented mode.
    """
    indented = formatting == Formatting.INDENTED
    value_separator = ": " if indented else ":"
    parts = ["{"]
    if indented:
        parts.append("\n")

    separator = ""
    for prop in _property_values(value):
        parts.append(get_indentation(level, indent_size) if indented else separator)
        parts.append(prop.name)
        parts.append(value_separator)
        parts.append(encode_value(prop.value, prop.format_mask, formatting, level, indent_size))
        separator = ","
        if indented:
            parts.append("\n")

    if indented:
        parts.append(get_indentation(level - 1, indent_size))
    parts.append("}")
    return "".join(parts)
