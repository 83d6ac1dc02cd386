from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_DATA_PATH = Path(__file__).resolve().parent / "data" / "michelin-data.json"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass(frozen=True)
class ServiceConfig:
    data_path: Path = Path(os.getenv("DATA_PATH", str(_DEFAULT_DATA_PATH)))
    reset_db: bool = _env_flag("RESET_DB")
    page_size: int = int(os.getenv("PAGE_SIZE", "100"))
    cache_ttl: float = float(os.getenv("CACHE_TTL", "300"))
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "1024"))
    cors_origins: list[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


DEFAULT_SERVICE_CONFIG = ServiceConfig()


def setup_logging(level: str = DEFAULT_SERVICE_CONFIG.log_level) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
