"""
Book relationship graph.

Responsibilities:
- Store books as nodes and their relationships as weighted, typed edges.
- Keep every undirected edge mirrored on both endpoints.
- Answer neighbor lookups for the recommendation traversal.
"""
from .adjacency import BookGraph, Edge, RelationshipType

__all__ = ["BookGraph", "Edge", "RelationshipType"]
