"""Response envelope returned by a GraphQL endpoint.

Example usage:
    class HeroData(BaseModel):
        hero: Hero | None = None

    response = GraphQLResponse[HeroData].model_validate_json(raw)
    if response.has_errors:
        ...
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ErrorLocation(BaseModel):
    """Position in the request document an error refers to."""
    line: int
    column: int


class QueryError(BaseModel):
    """A single entry of the response ``errors`` list."""
    message: str
    locations: list[ErrorLocation] | None = None


class GraphQLResponse(BaseModel, Generic[DataT]):
    """``{"data": ..., "errors": [...]}`` with a typed data payload."""
    data: DataT | None = None
    errors: list[QueryError] | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
