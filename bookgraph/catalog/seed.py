from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from ..recommendations.models import BookCreate

logger = logging.getLogger(__name__)

SEED_COLUMNS = ["title", "author", "genre", "keywords", "description"]


def _split_keywords(raw: str) -> list[str]:
    return [k.strip() for k in raw.split(";") if k.strip()]


def load_seed_books(path: Path) -> list[BookCreate]:
    """
    Read starter books from a CSV file.

    Keywords are ``;``-separated in a single column. Rows that fail
    validation are logged and skipped.
    """
    df = pd.read_csv(path, dtype=str).fillna("")

    missing = [c for c in SEED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Seed file {path} is missing columns: {', '.join(missing)}")

    df["keywords_list"] = df["keywords"].apply(_split_keywords)

    books: list[BookCreate] = []
    for idx, row in df.iterrows():
        try:
            books.append(BookCreate(
                title=row["title"],
                author=row["author"],
                genre=row["genre"],
                keywords=row["keywords_list"],
                description=row["description"] or None,
            ))
        except ValidationError:
            logger.warning("Skipping invalid seed row %s in %s", idx, path, exc_info=True)
    return books
