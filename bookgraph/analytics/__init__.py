"""
Request analytics.

Responsibilities:
- Record recommendation and search requests as in-memory events.
- Summarise request volume, latency and the most requested books and queries.
"""
from .aggregator import compute_analytics
from .store import EventLog

__all__ = ["EventLog", "compute_analytics"]
