from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Restaurant(BaseModel):
    """A single guide entry. Fields beyond the four below pass through untouched."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    cuisine: list[str] = Field(default_factory=list)
    location: list[str] = Field(default_factory=list)


class FilterField(str, Enum):
    cuisine = "cuisine"
    location = "location"


# ── Lookup kinds produced by the disambiguator ──────────────────────────


class IdentifierLookup(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int


class NameLookup(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


Lookup = Union[IdentifierLookup, NameLookup]


# ── Query outcomes ──────────────────────────────────────────────────────


class NotFound(BaseModel):
    """The query was well-formed but nothing matched."""

    model_config = ConfigDict(frozen=True)

    message: str = "No restaurants with this criteria"


class InvalidQuery(BaseModel):
    """The caller supplied nothing usable to search with."""

    model_config = ConfigDict(frozen=True)

    message: str


class Found(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurants: list[Restaurant]


class FoundOne(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurant: Restaurant


ListOutcome = Union[Found, NotFound]
GetOutcome = Union[FoundOne, NotFound]
FilterOutcome = Union[Found, NotFound, InvalidQuery]
