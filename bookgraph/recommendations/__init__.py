"""
Graph-based recommendation engine.

Responsibilities:
- Wire each new book into the relationship graph at insertion time.
- Walk the graph breadth-first, two hops out from a source book.
- Score every discovered book with a fixed, explainable heuristic.
- Rank candidates through a max-heap and return the top K.
"""
