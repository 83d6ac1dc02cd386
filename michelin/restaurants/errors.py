from __future__ import annotations


class StoreUnavailable(Exception):
    """The record store cannot serve the request (nothing loaded, unreadable dataset)."""


class DatasetError(StoreUnavailable):
    """A dataset was read but is not usable (missing columns, duplicate ids)."""


class InvalidQueryError(ValueError):
    """Raised when a filter string yields no search terms."""
