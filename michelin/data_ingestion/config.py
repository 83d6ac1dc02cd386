from dataclasses import dataclass
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the dataset seeding pipeline.
    """

    raw_path: Path = _PACKAGE_DIR / "data" / "raw" / "michelin_my_maps.csv"
    processed_data_dir: Path = _PACKAGE_DIR / "data"
    processed_filename: str = "michelin-data.json"

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
