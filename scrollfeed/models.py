"""
Record and envelope models for paginated collections.

Items are opaque to the engine: any pydantic model works as long as it can
be validated from one element of the ``results`` array.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """Immutable payload record. Unknown fields are kept as-is."""

    model_config = ConfigDict(frozen=True, extra="allow")


T = TypeVar("T", bound=Item)


class PersonName(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    first: str
    last: str


class User(Item):
    """Example record: a person with a display name and a contact address."""

    name: PersonName
    email: str

    @property
    def display_name(self) -> str:
        return f"{self.name.first} {self.name.last}"


class PageInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: int = Field(ge=1)


class CollectionResponse(BaseModel, Generic[T]):
    """
    Wire envelope of a paginated collection: ``{"results": [...], "info": {"page": n}}``.
    An empty ``results`` array signals the end of the collection.
    """

    model_config = ConfigDict(extra="allow")

    results: list[T]
    info: PageInfo
