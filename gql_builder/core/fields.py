"""Field descriptors and the renderable entries of a selection set."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from .arguments import ArgumentInfo, build_argument_clause
from .directives import GraphQLDirective, build_directives
from .formatting import Formatting, get_indentation

if TYPE_CHECKING:
    from .query_builder import QueryBuilder


@dataclass(frozen=True)
class FieldMetadata:
    """Describes one field of a generated builder type.

    ``builder_type`` is the builder class of the field's object type; it is
    None for scalar and enum fields.
    """
    name: str
    is_complex: bool = False
    builder_type: type["QueryBuilder"] | None = None


class FieldCriteria:
    """Base class for entries of a selection set."""

    def __init__(
        self,
        field_name: str,
        args: Sequence[ArgumentInfo] | None = None,
        directives: Sequence[GraphQLDirective] | None = None,
    ):
        self.field_name = field_name
        self.args = list(args) if args else []
        self.directives = list(directives) if directives else []

    def build(self, formatting: Formatting, level: int, indent_size: int) -> str:
        """Render the entry; empty text means it is suppressed."""
        raise NotImplementedError

    @staticmethod
    def _indentation(formatting: Formatting, level: int, indent_size: int) -> str:
        return get_indentation(level, indent_size) if formatting == Formatting.INDENTED else ""

    def _build_clauses(self, formatting: Formatting, level: int, indent_size: int) -> str:
        return (
            build_argument_clause(self.args, formatting, level, indent_size)
            + build_directives(self.directives, formatting, level, indent_size)
        )


class ScalarFieldCriteria(FieldCriteria):
    """A leaf field: ``name(args)``."""

    def build(self, formatting: Formatting, level: int, indent_size: int) -> str:
        return (
            self._indentation(formatting, level, indent_size)
            + self.field_name
            + self._build_clauses(formatting, level, indent_size)
        )


class ObjectFieldCriteria(FieldCriteria):
    """A field with a nested selection: ``name(args) { ... }``.

    Suppressed when the nested builder selects nothing.
    """

    def __init__(
        self,
        field_name: str,
        builder: "QueryBuilder",
        args: Sequence[ArgumentInfo] | None = None,
        directives: Sequence[GraphQLDirective] | None = None,
    ):
        super().__init__(field_name, args, directives)
        self.builder = builder

    def build(self, formatting: Formatting, level: int, indent_size: int) -> str:
        if not self.builder.has_selections:
            return ""
        space = " " if formatting == Formatting.INDENTED else ""
        return (
            self._indentation(formatting, level, indent_size)
            + self.field_name
            + self._build_clauses(formatting, level, indent_size)
            + space
            + self.builder._build(formatting, level + 1, indent_size)
        )


class FragmentCriteria(FieldCriteria):
    """An inline fragment: ``... on TypeName { ... }``.

    Suppressed when the nested builder has no fields of its own.
    """

    def __init__(
        self,
        builder: "QueryBuilder",
        directives: Sequence[GraphQLDirective] | None = None,
    ):
        super().__init__(builder.TYPE_NAME, None, directives)
        self.builder = builder

    def build(self, formatting: Formatting, level: int, indent_size: int) -> str:
        if not self.builder.has_fields:
            return ""
        space = " " if formatting == Formatting.INDENTED else ""
        return (
            self._indentation(formatting, level, indent_size)
            + "..."
            + space
            + "on "
            + self.field_name
            + self._build_clauses(formatting, level, indent_size)
            + space
            + self.builder._build(formatting, level + 1, indent_size)
        )
