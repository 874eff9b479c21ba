from __future__ import annotations

import logging
import random
import threading
import uuid
from collections.abc import Iterable

from ..graph.adjacency import BookGraph
from ..recommendations.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..recommendations.engine import RecommendationEngine
from ..recommendations.models import Book, BookCreate, GraphStats, Recommendation
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .seed import load_seed_books

logger = logging.getLogger(__name__)


class LibraryStore:
    """
    Single owner of the catalog and its relationship graph.

    Every read and write goes through one re-entrant lock, so a traversal
    never sees a half-wired book.
    """

    def __init__(
        self,
        engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        rng: random.Random | None = None,
    ) -> None:
        self._books: dict[str, Book] = {}
        self._graph = BookGraph()
        self._engine = RecommendationEngine(self._graph, self._books, rng=rng, config=engine_config)
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        catalog_config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
        engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> LibraryStore:
        """Build a store and load the seed catalog if enabled."""
        store = cls(engine_config=engine_config)
        if catalog_config.load_seed_data and catalog_config.seed_path.is_file():
            store.seed(load_seed_books(catalog_config.seed_path))
        elif catalog_config.load_seed_data:
            logger.warning("Seed file %s not found, starting with an empty catalog", catalog_config.seed_path)
        return store

    @property
    def graph(self) -> BookGraph:
        return self._graph

    @property
    def engine(self) -> RecommendationEngine:
        return self._engine

    def seed(self, payloads: Iterable[BookCreate]) -> list[Book]:
        with self._lock:
            created = [self.create_book(p, log=False) for p in payloads]
            logger.info(
                "Initialized library with %d books; graph has %d nodes and %d edges",
                len(self._books), self._graph.get_node_count(), self._graph.get_edge_count(),
            )
            logger.debug("Book graph:\n%s", self._graph.describe())
            return created

    def list_books(self) -> list[Book]:
        with self._lock:
            return list(self._books.values())

    def get_book(self, book_id: str) -> Book | None:
        with self._lock:
            return self._books.get(book_id)

    def create_book(self, payload: BookCreate, log: bool = True) -> Book:
        """Store a new book and wire it into the graph in one step."""
        book = Book(id=str(uuid.uuid4()), **payload.model_dump())
        with self._lock:
            existing = list(self._books.values())
            self._books[book.id] = book
            try:
                self._engine.connect_book(book, existing)
            except Exception:
                logger.error("Failed to connect book %s, rolling back", book.id, exc_info=True)
                self._books.pop(book.id, None)
                self._engine.disconnect_book(book.id)
                raise

            if log:
                logger.info(
                    "Added book: %s (%s); graph now has %d nodes and %d edges",
                    book.title, book.id, self._graph.get_node_count(), self._graph.get_edge_count(),
                )
        return book

    def delete_book(self, book_id: str) -> bool:
        with self._lock:
            book = self._books.pop(book_id, None)
            if book is None:
                return False
            self._engine.disconnect_book(book_id)
            logger.info(
                "Deleted book: %s (%s); graph now has %d nodes and %d edges",
                book.title, book_id, self._graph.get_node_count(), self._graph.get_edge_count(),
            )
            return True

    def search_books(self, query: str) -> list[Book]:
        """Case-insensitive substring match on title, author, genre and keywords."""
        needle = query.strip().lower()
        if not needle:
            return []
        with self._lock:
            return [
                book for book in self._books.values()
                if needle in book.title.lower()
                or needle in book.author.lower()
                or needle in book.genre.lower()
                or any(needle in k.lower() for k in book.keywords)
            ]

    def get_recommendations(self, book_id: str, limit: int | None = None) -> list[Recommendation]:
        with self._lock:
            return self._engine.get_recommendations(book_id, limit)

    def graph_stats(self) -> GraphStats:
        with self._lock:
            return GraphStats(nodes=self._graph.get_node_count(), edges=self._graph.get_edge_count())
