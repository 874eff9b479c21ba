from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(frozen=True)
class EngineConfig:
    default_limit: int = int(os.getenv("RECOMMENDATION_LIMIT", "5"))
    max_limit: int = 50
    # Chance that a related pair is also tagged as borrowed together.
    borrowed_together_probability: float = float(
        os.getenv("BORROWED_TOGETHER_PROBABILITY", "0.3")
    )
    random_seed: int | None = _optional_int(os.getenv("RANDOM_SEED"))


DEFAULT_ENGINE_CONFIG = EngineConfig()
