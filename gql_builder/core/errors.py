"""Exceptions raised while assembling or rendering GraphQL documents."""

from typing import Any


class QueryBuilderError(Exception):
    """Base class for all query builder errors."""


class InvalidIdentifierError(QueryBuilderError, ValueError):
    """Raised when a name does not match the GraphQL identifier grammar."""

    def __init__(self, argument: str, value: Any):
        self.argument = argument
        self.value = value
        super().__init__(f"{argument}: value must match [_A-Za-z][_0-9A-Za-z]* (got {value!r})")


class FormattingUnsupportedError(QueryBuilderError, TypeError):
    """Raised when a format mask is used with a value that cannot be formatted."""

    def __init__(self, value_type: type, format_mask: str | None = None):
        self.value_type = value_type
        self.format_mask = format_mask
        message = f"{value_type.__name__} does not support custom formatting"
        if format_mask:
            message += f" with mask {format_mask!r}"
        super().__init__(message)


class MissingTypeNameError(QueryBuilderError, ValueError):
    """Raised when a variable has no usable GraphQL type name."""

    def __init__(self, parameter_name: str | None, message: str = "GraphQL type name required"):
        self.parameter_name = parameter_name
        if parameter_name:
            message = f"{message} for variable ${parameter_name}"
        super().__init__(message)


class EnumResolutionError(QueryBuilderError, RuntimeError):
    """Raised when an enum value's member metadata cannot be located."""
