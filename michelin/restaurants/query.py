from __future__ import annotations

import re
from typing import Any

from .cache import cache_get, cache_set
from .data_store import RecordStore
from .errors import InvalidQueryError
from .matching import matches, parse_terms
from .models import (
    FilterField,
    FilterOutcome,
    Found,
    FoundOne,
    GetOutcome,
    IdentifierLookup,
    InvalidQuery,
    ListOutcome,
    Lookup,
    NameLookup,
    NotFound,
)

PAGE_SIZE = 100

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

NOT_FOUND_PAGE = "No restaurants with this criteria"
NOT_FOUND_ID = "Invalid restaurant ID. Please search for an existing restaurant number"
NOT_FOUND_NAME = (
    "No restaurant with this name. If there is a space in the restaurant's name, "
    "replace it with '%20', for example 'maison%20lameloise'"
)
NOT_FOUND_CUISINE = (
    "No restaurants found within this cuisine, try searching for a cuisine found "
    "in the endpoint /cuisines. Add '%20' instead of spacing, for example "
    "'African,%20Creative'"
)
NOT_FOUND_LOCATION = (
    "No restaurants found in this location. Add '%20' instead of spacing, "
    "for example 'Paris,%20France'"
)


def classify(raw: str) -> Lookup:
    """Decide whether a path parameter is a numeric id or a restaurant name.

    Surrounding whitespace is trimmed before either lookup, so ``" Chez Pim "``
    finds "Chez Pim". Purely numeric names can never be reached by name; that
    is accepted.
    """
    stripped = raw.strip()
    if _INTEGER_RE.fullmatch(stripped):
        try:
            value = int(stripped)
        except ValueError:
            # too many digits for int(); no id is below 1
            value = 0
        return IdentifierLookup(value=value)
    return NameLookup(name=stripped)


def resolve_page(page: Any, page_size: int = PAGE_SIZE) -> tuple[int, int]:
    """Return ``(offset, limit)`` for a requested page, defaulting to page 1."""
    try:
        number = int(str(page).strip())
    except (TypeError, ValueError):
        number = 1
    if number < 1:
        number = 1
    return (number - 1) * page_size, page_size


class QueryService:
    """Read-only queries over a ``RecordStore``.

    Every method reads a single snapshot, so a concurrent reload is never seen
    half-way. ``StoreUnavailable`` from the store propagates to the caller.
    """

    def __init__(self, store: RecordStore, page_size: int = PAGE_SIZE) -> None:
        self._store = store
        self._page_size = page_size

    def list_page(self, page: Any = None) -> ListOutcome:
        offset, limit = resolve_page(page, self._page_size)
        rows = self._store.snapshot().slice(offset, limit)
        if not rows:
            return NotFound(message=NOT_FOUND_PAGE)
        return Found(restaurants=list(rows))

    def get_one(self, raw: str) -> GetOutcome:
        snapshot = self._store.snapshot()
        cache_key = {"op": "get_one", "raw": raw, "_generation": snapshot.generation}
        cached = cache_get(cache_key)
        if cached is not None:
            return cached

        lookup = classify(raw)
        if isinstance(lookup, IdentifierLookup):
            restaurant = snapshot.by_id.get(lookup.value)
            outcome: GetOutcome = (
                FoundOne(restaurant=restaurant)
                if restaurant is not None
                else NotFound(message=NOT_FOUND_ID)
            )
        else:
            wanted = lookup.name.lower()
            restaurant = next(
                (r for r in snapshot.records if r.name.lower() == wanted), None
            )
            outcome = (
                FoundOne(restaurant=restaurant)
                if restaurant is not None
                else NotFound(message=NOT_FOUND_NAME)
            )

        cache_set(cache_key, outcome)
        return outcome

    def distinct_cuisines(self) -> list[str]:
        return self._store.snapshot().distinct(FilterField.cuisine.value)

    def filter_by_field(self, field: FilterField | str, raw: str | None) -> FilterOutcome:
        try:
            field = FilterField(field)
        except ValueError:
            return InvalidQuery(message=f"Cannot filter on '{field}'")

        try:
            terms = parse_terms(raw)
        except InvalidQueryError as exc:
            return InvalidQuery(message=str(exc))

        snapshot = self._store.snapshot()
        cache_key = {
            "op": "filter",
            "field": field.value,
            "terms": terms,
            "_generation": snapshot.generation,
        }
        cached = cache_get(cache_key)
        if cached is not None:
            return cached

        hits = [r for r in snapshot.records if matches(getattr(r, field.value), terms)]
        if hits:
            outcome: FilterOutcome = Found(restaurants=hits)
        elif field is FilterField.cuisine:
            outcome = NotFound(message=NOT_FOUND_CUISINE)
        else:
            outcome = NotFound(message=NOT_FOUND_LOCATION)

        cache_set(cache_key, outcome)
        return outcome
