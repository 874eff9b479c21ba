from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PACKAGED_SEED = Path(__file__).resolve().parent.parent / "data" / "books.csv"


@dataclass(frozen=True)
class CatalogConfig:
    seed_path: Path = Path(os.getenv("SEED_DATA_PATH", str(_PACKAGED_SEED)))
    load_seed_data: bool = os.getenv("LOAD_SEED_DATA", "true").strip().lower() in ("1", "true", "yes")


DEFAULT_CATALOG_CONFIG = CatalogConfig()
