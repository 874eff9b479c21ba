from __future__ import annotations

import logging
import time

from fastapi import Depends, FastAPI, HTTPException, Query, Response

from .analytics.aggregator import compute_analytics
from .analytics.store import EventLog
from .catalog.store import LibraryStore
from .dependencies import get_event_log, get_store
from .recommendations.config import DEFAULT_ENGINE_CONFIG
from .recommendations.models import Book, BookCreate, GraphStats, Recommendation

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(store: LibraryStore | None = None, events: EventLog | None = None) -> FastAPI:
    """Build the API around an explicitly owned catalog store."""
    application = FastAPI(title="Library Book Recommendation API", version="1.0.0")
    application.state.store = store if store is not None else LibraryStore.from_config()
    application.state.events = events if events is not None else EventLog()

    # ── Public endpoints ─────────────────────────────────────────────────

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # ── Catalog endpoints ────────────────────────────────────────────────

    @application.get("/api/books", response_model=list[Book])
    def list_books(store: LibraryStore = Depends(get_store)) -> list[Book]:
        return store.list_books()

    @application.get("/api/books/{book_id}", response_model=Book)
    def get_book(book_id: str, store: LibraryStore = Depends(get_store)) -> Book:
        book = store.get_book(book_id)
        if book is None:
            raise HTTPException(status_code=404, detail="Book not found")
        return book

    @application.post("/api/books", response_model=Book, status_code=201)
    def create_book(body: BookCreate, store: LibraryStore = Depends(get_store)) -> Book:
        return store.create_book(body)

    @application.delete("/api/books/{book_id}", status_code=204)
    def delete_book(book_id: str, store: LibraryStore = Depends(get_store)) -> Response:
        if not store.delete_book(book_id):
            raise HTTPException(status_code=404, detail="Book not found")
        return Response(status_code=204)

    # ── Recommendation & search endpoints ────────────────────────────────

    @application.get("/api/books/{book_id}/recommendations", response_model=list[Recommendation])
    def recommendations(
        book_id: str,
        limit: int = Query(
            default=DEFAULT_ENGINE_CONFIG.default_limit,
            ge=1,
            le=DEFAULT_ENGINE_CONFIG.max_limit,
        ),
        store: LibraryStore = Depends(get_store),
        events: EventLog = Depends(get_event_log),
    ) -> list[Recommendation]:
        # An unknown source book yields an empty list, not a 404.
        start_time = time.time()
        results = store.get_recommendations(book_id, limit)
        events.record_event("recommendation", {
            "source_id": book_id,
            "limit": limit,
            "results_returned": len(results),
            "response_time_ms": round((time.time() - start_time) * 1000, 1),
        })
        return results

    @application.get("/api/search", response_model=list[Book])
    def search(
        q: str = Query(default=""),
        store: LibraryStore = Depends(get_store),
        events: EventLog = Depends(get_event_log),
    ) -> list[Book]:
        if not q.strip():
            raise HTTPException(status_code=400, detail="Search query is required")
        start_time = time.time()
        results = store.search_books(q)
        events.record_event("search", {
            "query": q,
            "results_returned": len(results),
            "response_time_ms": round((time.time() - start_time) * 1000, 1),
        })
        return results

    @application.get("/api/graph/stats", response_model=GraphStats)
    def graph_stats(store: LibraryStore = Depends(get_store)) -> GraphStats:
        return store.graph_stats()

    # ── Analytics ────────────────────────────────────────────────────────

    @application.get("/analytics")
    def analytics(events: EventLog = Depends(get_event_log)) -> dict:
        return compute_analytics(events.get_events())

    return application


app = create_app()
