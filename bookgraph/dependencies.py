from __future__ import annotations

from fastapi import Request

from .analytics.store import EventLog
from .catalog.store import LibraryStore


def get_store(request: Request) -> LibraryStore:
    """Return the catalog owned by the running application."""
    return request.app.state.store


def get_event_log(request: Request) -> EventLog:
    return request.app.state.events
