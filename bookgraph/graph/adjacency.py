from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class RelationshipType(str, Enum):
    same_genre = "same_genre"
    same_author = "same_author"
    similar_keywords = "similar_keywords"
    borrowed_together = "borrowed_together"


def merge_types(*groups: Iterable[RelationshipType]) -> tuple[RelationshipType, ...]:
    """Union relationship types, keeping first-seen order."""
    merged: list[RelationshipType] = []
    for group in groups:
        for rel in group:
            rel = RelationshipType(rel)
            if rel not in merged:
                merged.append(rel)
    return tuple(merged)


@dataclass(frozen=True)
class Edge:
    target_id: str
    weight: float
    relationship_types: tuple[RelationshipType, ...] = field(default_factory=tuple)


class BookGraph:
    """
    Undirected weighted graph stored as an adjacency list.

    Each undirected edge is kept as two mirrored ``Edge`` entries, one in
    each endpoint's list, with identical weight and relationship types.
    Lookups for unknown ids return empty results instead of raising.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, list[Edge]] = {}

    def add_node(self, book_id: str) -> None:
        if book_id not in self._adjacency:
            self._adjacency[book_id] = []

    def remove_node(self, book_id: str) -> None:
        """Drop the node and every edge pointing at it. O(V + E)."""
        for node_id, edges in self._adjacency.items():
            if node_id != book_id:
                edges[:] = [e for e in edges if e.target_id != book_id]
        self._adjacency.pop(book_id, None)

    def add_edge(
        self,
        source_id: str,
        target_id: str,
        weight: float,
        relationship_types: Iterable[RelationshipType] = (),
    ) -> None:
        """
        Connect two books, merging into the existing edge if there is one.

        A repeated insertion sums the weights and unions the relationship
        types on both mirrored entries.
        """
        if source_id == target_id:
            logger.warning("Ignoring self-edge on book %s", source_id)
            return

        self.add_node(source_id)
        self.add_node(target_id)

        types = merge_types(relationship_types)
        self._upsert(source_id, target_id, weight, types)
        self._upsert(target_id, source_id, weight, types)

    def _upsert(
        self,
        node_id: str,
        target_id: str,
        weight: float,
        types: tuple[RelationshipType, ...],
    ) -> None:
        edges = self._adjacency[node_id]
        for i, existing in enumerate(edges):
            if existing.target_id == target_id:
                edges[i] = Edge(
                    target_id=target_id,
                    weight=existing.weight + weight,
                    relationship_types=merge_types(existing.relationship_types, types),
                )
                return
        edges.append(Edge(target_id=target_id, weight=weight, relationship_types=types))

    def remove_edge(self, source_id: str, target_id: str) -> bool:
        """Remove both mirrored entries. Returns whether the edge existed."""
        found = False
        for node_id, other_id in ((source_id, target_id), (target_id, source_id)):
            edges = self._adjacency.get(node_id)
            if edges is None:
                continue
            kept = [e for e in edges if e.target_id != other_id]
            if len(kept) != len(edges):
                found = True
                edges[:] = kept
        return found

    def get_neighbors(self, book_id: str) -> list[Edge]:
        return list(self._adjacency.get(book_id, ()))

    def get_edge(self, source_id: str, target_id: str) -> Edge | None:
        for edge in self._adjacency.get(source_id, ()):
            if edge.target_id == target_id:
                return edge
        return None

    def has_node(self, book_id: str) -> bool:
        return book_id in self._adjacency

    def get_all_nodes(self) -> list[str]:
        return list(self._adjacency)

    def get_node_count(self) -> int:
        return len(self._adjacency)

    def get_edge_count(self) -> int:
        # Each undirected edge is stored twice.
        return sum(len(edges) for edges in self._adjacency.values()) // 2

    def describe(self) -> str:
        lines = []
        for node_id, edges in self._adjacency.items():
            targets = ", ".join(f"{e.target_id}(w:{e.weight:g})" for e in edges)
            lines.append(f"{node_id} -> [{targets}]")
        lines.append(f"Nodes: {self.get_node_count()}, Edges: {self.get_edge_count()}")
        return "\n".join(lines)
