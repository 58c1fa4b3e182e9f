"""Field and directive arguments."""

from dataclasses import dataclass
from typing import Any, Sequence

from .formatting import Formatting
from .parameters import QueryParameter, as_parameter
from .values import encode_value


@dataclass
class ArgumentInfo:
    """A single ``name: value`` argument.

    A named ``value`` renders as a variable reference (``$name``); an unnamed
    one renders its value inline.
    """
    name: str
    value: QueryParameter
    format_mask: str | None = None

    @classmethod
    def of(cls, name: str, value: Any, format_mask: str | None = None) -> "ArgumentInfo":
        """Create an argument from a raw value or a ``QueryParameter``."""
        parameter = as_parameter(value)
        return cls(name=name, value=parameter, format_mask=format_mask or parameter.format_mask)


def build_argument_clause(
    args: Sequence[ArgumentInfo] | None,
    formatting: Formatting,
    level: int,
    indent_size: int,
) -> str:
    """Render ``(a: 1, b: $b)``; empty text when there are no arguments."""
    if not args:
        return ""
    space = " " if formatting == Formatting.INDENTED else ""
    rendered = (
        f"{arg.name}:{space}{encode_value(arg.value, arg.format_mask, formatting, level, indent_size)}"
        for arg in args
    )
    return f"({f',{space}'.join(rendered)})"
