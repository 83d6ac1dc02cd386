from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..config import DEFAULT_SERVICE_CONFIG
from ..data_ingestion.ingest import load_records
from .cache import clear_cache
from .errors import DatasetError, StoreUnavailable
from .models import Restaurant

logger = logging.getLogger(__name__)

_generations = itertools.count(1)


@dataclass(frozen=True)
class Snapshot:
    """One fully built, never mutated version of the dataset."""

    records: tuple[Restaurant, ...]
    by_id: dict[int, Restaurant] = field(repr=False)
    generation: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def slice(self, offset: int, limit: int) -> tuple[Restaurant, ...]:
        return self.records[offset:offset + limit]

    def distinct(self, field_name: str) -> list[str]:
        """Unique tag values of ``field_name`` in first-seen order."""
        seen: dict[str, None] = {}
        for record in self.records:
            value = getattr(record, field_name, None)
            tags = [value] if isinstance(value, str) else (value or [])
            for tag in tags:
                seen.setdefault(tag, None)
        return list(seen)


def _build_snapshot(records: Iterable[Restaurant]) -> Snapshot:
    ordered = tuple(records)
    by_id: dict[int, Restaurant] = {}
    for record in ordered:
        if record.id in by_id:
            raise DatasetError(f"Duplicate restaurant id {record.id}")
        by_id[record.id] = record
    return Snapshot(records=ordered, by_id=by_id, generation=next(_generations))


class RecordStore:
    """Holds the current dataset behind a single swappable reference.

    Readers call ``snapshot()`` once and work on what they get back. ``reload``
    builds the replacement completely before publishing it.
    """

    def __init__(self, records: Iterable[Restaurant] | None = None) -> None:
        self._write_lock = threading.Lock()
        self._snapshot: Snapshot | None = None
        if records is not None:
            self.reload(records)

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def __len__(self) -> int:
        snapshot = self._snapshot
        return len(snapshot) if snapshot is not None else 0

    def snapshot(self) -> Snapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise StoreUnavailable("Restaurant dataset has not been loaded")
        return snapshot

    def reload(self, records: Iterable[Restaurant]) -> Snapshot:
        snapshot = _build_snapshot(records)
        with self._write_lock:
            self._snapshot = snapshot
        clear_cache()
        return snapshot

    def clear(self) -> None:
        with self._write_lock:
            self._snapshot = None
        clear_cache()


_store = RecordStore()


def get_store() -> RecordStore:
    """Return the process-wide record store (possibly still empty)."""
    return _store


def load_store(path: Path | None = None, store: RecordStore | None = None) -> RecordStore:
    """Read the dataset at ``path`` and publish it into ``store``."""
    path = path or DEFAULT_SERVICE_CONFIG.data_path
    store = store or _store
    try:
        records = load_records(path)
    except (OSError, ValueError) as exc:
        raise StoreUnavailable(f"Could not read restaurant dataset at {path}: {exc}") from exc

    snapshot = store.reload(records)
    logger.info("Loaded %d restaurants from %s", len(snapshot), path)
    return store
