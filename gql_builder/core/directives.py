"""GraphQL directives attachable to fields and fragment spreads."""

from typing import Any, Iterable

from .arguments import ArgumentInfo, build_argument_clause
from .formatting import Formatting, validate_identifier
from .parameters import QueryParameter, as_parameter


class GraphQLDirective:
    """A named directive with ordered arguments, e.g. ``@include(if: $flag)``.

    Re-adding an argument replaces its value; ``None`` values are ignored.
    """

    def __init__(self, name: str):
        validate_identifier("name", name)
        self.name = name
        self._arguments: dict[str, QueryParameter] = {}

    @property
    def arguments(self) -> list[tuple[str, QueryParameter]]:
        return list(self._arguments.items())

    def add_argument(self, name: str, value: Any):
        if value is None:
            return
        self._arguments[name] = as_parameter(value)

    def build(self, formatting: Formatting, level: int, indent_size: int) -> str:
        prefix = " @" if formatting == Formatting.INDENTED else "@"
        args = [ArgumentInfo(name, value) for name, value in self._arguments.items()]
        return prefix + self.name + build_argument_clause(args, formatting, level, indent_size)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, arguments={self.arguments!r})"


class IncludeDirective(GraphQLDirective):
    """``@include(if: ...)``: keep the selection only when the condition holds."""

    def __init__(self, if_: bool | QueryParameter):
        super().__init__("include")
        self.add_argument("if", if_)


class SkipDirective(GraphQLDirective):
    """``@skip(if: ...)``: drop the selection when the condition holds."""

    def __init__(self, if_: bool | QueryParameter):
        super().__init__("skip")
        self.add_argument("if", if_)


def build_directives(
    directives: Iterable[GraphQLDirective] | None,
    formatting: Formatting,
    level: int,
    indent_size: int,
) -> str:
    """Render directives in order; empty text when there are none."""
    if not directives:
        return ""
    return "".join(d.build(formatting, level, indent_size) for d in directives)
