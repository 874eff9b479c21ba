from __future__ import annotations

import random
from collections import deque
from collections.abc import Iterable, Mapping

from ..graph.adjacency import BookGraph, RelationshipType, merge_types
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .heap import MaxHeap
from .models import Book, Recommendation

SAME_GENRE_SCORE = 3
SAME_AUTHOR_SCORE = 5
KEYWORD_MATCH_SCORE = 1
BORROWED_TOGETHER_SCORE = 2
DEPTH_PENALTY_FACTOR = 0.5  # depth-2 books keep half their score
MAX_DEPTH = 2

# Weight used for a discovered book that has no direct edge to the source.
_NO_EDGE_WEIGHT = 1


def _keyword_matches(source: Book, target: Book) -> int:
    """Count target keywords present in the source's keywords, ignoring case."""
    source_keywords = {k.lower() for k in source.keywords}
    return sum(1 for k in target.keywords if k.lower() in source_keywords)


def _attribute_score(source: Book, target: Book) -> tuple[float, list[RelationshipType]]:
    score = 0.0
    reasons: list[RelationshipType] = []

    if source.genre == target.genre:
        score += SAME_GENRE_SCORE
        reasons.append(RelationshipType.same_genre)

    if source.author.lower() == target.author.lower():
        score += SAME_AUTHOR_SCORE
        reasons.append(RelationshipType.same_author)

    matches = _keyword_matches(source, target)
    if matches > 0:
        score += matches * KEYWORD_MATCH_SCORE
        reasons.append(RelationshipType.similar_keywords)

    return score, reasons


class RecommendationEngine:
    """
    Recommends books by walking the relationship graph.

    ``books`` is the catalog's id -> Book mapping; the engine only reads it.
    ``rng`` drives the simulated borrowed-together bonus and can be seeded
    for reproducible graphs.
    """

    def __init__(
        self,
        graph: BookGraph,
        books: Mapping[str, Book],
        rng: random.Random | None = None,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        self.graph = graph
        self.books = books
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.random_seed)

    def score(
        self,
        source: Book,
        target: Book,
        edge_weight: float,
        edge_types: Iterable[RelationshipType] = (),
    ) -> tuple[float, list[RelationshipType]]:
        """Return the relationship score of ``target`` for ``source`` and the reasons behind it."""
        attribute_score, reasons = _attribute_score(source, target)
        return edge_weight + attribute_score, list(merge_types(reasons, edge_types))

    def get_recommendations(self, source_id: str, limit: int | None = None) -> list[Recommendation]:
        """
        Rank books within two hops of ``source_id``.

        Steps:
        - Seed a FIFO queue with the source's direct neighbors at depth 1.
        - Score each dequeued book against the source, using the direct
          source edge when there is one, and halve the score at depth 2.
        - Enqueue unvisited neighbors until MAX_DEPTH is reached. Books are
          marked visited when enqueued so each is scored once.
        - Pop the top ``limit`` entries from the heap.

        An unknown source yields an empty list.
        """
        if limit is None:
            limit = self.config.default_limit

        source = self.books.get(source_id)
        if source is None:
            return []

        source_edges = {e.target_id: e for e in self.graph.get_neighbors(source_id)}
        visited = {source_id}
        queue: deque[tuple[str, int]] = deque()
        for target_id in source_edges:
            if target_id not in visited:
                visited.add(target_id)
                queue.append((target_id, 1))

        heap: MaxHeap[Recommendation] = MaxHeap()

        while queue:
            current_id, depth = queue.popleft()

            current = self.books.get(current_id)
            if current is None:
                continue

            direct = source_edges.get(current_id)
            if direct is not None:
                score, reasons = self.score(source, current, direct.weight, direct.relationship_types)
            else:
                score, reasons = self.score(source, current, _NO_EDGE_WEIGHT)

            if depth > 1:
                score *= DEPTH_PENALTY_FACTOR

            heap.push(
                score,
                Recommendation(book=current, score=score, relationship_types=reasons, depth=depth),
            )

            if depth < MAX_DEPTH:
                for edge in self.graph.get_neighbors(current_id):
                    if edge.target_id not in visited:
                        visited.add(edge.target_id)
                        queue.append((edge.target_id, depth + 1))

        return [item.data for item in heap.extract_top_k(limit)]

    def connect_book(self, new_book: Book, existing_books: Iterable[Book]) -> None:
        """
        Link a newly added book to every related existing book.

        Edges use the same genre/author/keyword rules as scoring, plus a random
        borrowed-together bonus for pairs that are already related. Unrelated
        pairs stay unconnected.
        """
        self.graph.add_node(new_book.id)

        for existing in existing_books:
            if existing.id == new_book.id:
                continue

            weight, types = _attribute_score(new_book, existing)

            if weight > 0 and self.rng.random() < self.config.borrowed_together_probability:
                weight += BORROWED_TOGETHER_SCORE
                types.append(RelationshipType.borrowed_together)

            if weight > 0:
                self.graph.add_edge(new_book.id, existing.id, weight, types)

    def disconnect_book(self, book_id: str) -> None:
        self.graph.remove_node(book_id)
