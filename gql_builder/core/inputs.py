"""Structured input objects rendered as GraphQL object literals.

Any class implementing the ``GraphQLInputObject`` protocol can be passed as an
argument value. Generated input types usually derive from the pydantic-based
``InputObject``, which reports the fields that were explicitly set.

Example usage:
    from pydantic import Field
    from gql_builder.core.inputs import InputObject

    class ReviewInput(InputObject):
        stars: int | None = None
        commentary: str | None = None
        created_at: datetime | None = Field(
            None, alias="createdAt", json_schema_extra={"format_mask": "%Y-%m-%d"}
        )

    ReviewInput(stars=5)  # renders {stars:5}
"""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class InputPropertyInfo:
    """One property of an input object literal."""
    name: str
    value: Any
    format_mask: str | None = None


@runtime_checkable
class GraphQLInputObject(Protocol):
    """Protocol for values rendered as ``{name: value, ...}`` literals."""

    def get_property_values(self) -> Iterable[InputPropertyInfo]:
        """Return the properties to render, in order."""
        ...


class InputObject(BaseModel):
    """Base class for generated GraphQL input types.

    Only fields that were explicitly set (including explicit ``None``) are
    rendered, in declaration order, under their alias when one is declared.
    Field values may be ``QueryParameter`` instances to reference variables.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    def get_property_values(self) -> Iterable[InputPropertyInfo]:
        for name, field_info in type(self).model_fields.items():
            if name not in self.model_fields_set:
                continue
            extra = field_info.json_schema_extra
            format_mask = extra.get("format_mask") if isinstance(extra, dict) else None
            yield InputPropertyInfo(
                name=field_info.alias or name,
                value=getattr(self, name),
                format_mask=format_mask,
            )
