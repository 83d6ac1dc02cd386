from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from ..restaurants.errors import DatasetError
from ..restaurants.models import Restaurant
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = ["id", "name", "cuisine", "location"]

_LOCATION_PARTS: List[str] = ["city", "region", "country"]


def _first_present(df: pd.DataFrame, columns: List[str]) -> str | None:
    for col in columns:
        if col in df.columns:
            return col
    return None


def _split_tags(value: Any) -> list[str]:
    """Turn ``"Creative, French"`` (or an existing list) into ``["Creative", "French"]``."""
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [tag.strip() for tag in str(value).split(",") if tag.strip()]


def _empty_tags(index: pd.Index) -> pd.Series:
    return pd.Series(index=index, dtype=object).apply(lambda _: [])


def _location_from_parts(row: pd.Series, columns: List[str]) -> list[str]:
    tags: list[str] = []
    for col in columns:
        for tag in _split_tags(row[col]):
            if tag not in tags:
                tags.append(tag)
    return tags


def read_raw(path: Path) -> pd.DataFrame:
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path)
    return pd.read_json(path, orient="records", dtype=False, convert_dates=False)


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map a raw Michelin export onto the canonical restaurant columns.

    Running it on already-normalized data leaves the data unchanged, so the
    store can load raw and processed files alike. Columns other than the
    canonical ones are kept, after them, untouched.
    """
    if df.empty:
        return pd.DataFrame(columns=CANONICAL_COLUMNS)

    col_name = _first_present(df, ["name", "Name", "restaurant_name"])
    if col_name is None:
        raise DatasetError("Restaurant dataset has no name column")
    col_id = _first_present(df, ["id", "Id", "ID"])
    col_cuisine = _first_present(df, ["cuisine", "Cuisine", "cuisines"])
    col_location = _first_present(df, ["location", "Location"])
    location_parts = [
        c for c in df.columns if str(c).lower() in _LOCATION_PARTS
    ]

    canonical = pd.DataFrame(index=df.index)

    if col_id:
        ids = pd.to_numeric(df[col_id], errors="coerce")
        if ids.isna().any():
            raise DatasetError("Restaurant dataset has rows without a numeric id")
        canonical["id"] = ids.astype(int)
    else:
        canonical["id"] = range(1, len(df) + 1)

    canonical["name"] = df[col_name].fillna("").astype(str).str.strip()

    if col_cuisine:
        canonical["cuisine"] = df[col_cuisine].apply(_split_tags)
    else:
        canonical["cuisine"] = _empty_tags(df.index)

    if col_location:
        canonical["location"] = df[col_location].apply(_split_tags)
    elif location_parts:
        canonical["location"] = df.apply(
            _location_from_parts, axis=1, columns=location_parts
        )
    else:
        canonical["location"] = _empty_tags(df.index)

    used = {col_id, col_name, col_cuisine, col_location}
    for col in df.columns:
        if col not in used and col not in canonical.columns:
            canonical[col] = df[col]

    unnamed = canonical["name"] == ""
    if unnamed.any():
        logger.warning("Dropping %d restaurants without a name", int(unnamed.sum()))
        canonical = canonical.loc[~unnamed]

    return canonical.reset_index(drop=True)


def frame_to_records(df: pd.DataFrame) -> list[Restaurant]:
    clean = df.astype(object).where(df.notna(), None)
    return [Restaurant.model_validate(row) for row in clean.to_dict(orient="records")]


def load_records(path: Path) -> list[Restaurant]:
    """Read a raw or processed dataset file into ``Restaurant`` models, in file order."""
    return frame_to_records(normalize_frame(read_raw(path)))


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the seeding pipeline.

    Steps:
    - Read the raw export.
    - Map raw fields into the canonical Restaurant schema.
    - Persist the result as JSON for the record store.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    canonical = normalize_frame(read_raw(config.raw_path))

    output_path = config.processed_path
    canonical.to_json(output_path, orient="records", indent=2, force_ascii=False)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
