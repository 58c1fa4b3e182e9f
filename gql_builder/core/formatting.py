"""Formatting modes and small text helpers shared by the renderers."""

import re
from enum import Enum

from .errors import InvalidIdentifierError

_IDENTIFIER = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
_WHITESPACE = re.compile(r"\s")


class Formatting(Enum):
    """Text rendering styles."""
    COMPACT = "compact"    # No extraneous whitespace
    INDENTED = "indented"  # One selection per line


def get_indentation(level: int, indent_size: int) -> str:
    """Return the leading spaces for a nesting level."""
    return " " * (level * indent_size)


def validate_identifier(argument: str, identifier: str | None) -> None:
    """Check a caller-supplied name against the GraphQL name grammar.

    ``None`` is accepted; it stands for "no name".
    """
    if identifier is not None and not _IDENTIFIER.match(identifier):
        raise InvalidIdentifierError(argument, identifier)


def strip_whitespace(text: str | None) -> str | None:
    """Remove every whitespace character, e.g. ``"[ Int ! ]"`` -> ``"[Int!]"``."""
    if text is None:
        return None
    return _WHITESPACE.sub("", text)


def supports_format(value_type: type) -> bool:
    """Return True if ``value_type`` implements its own ``__format__``."""
    return getattr(value_type, "__format__", object.__format__) is not object.__format__
