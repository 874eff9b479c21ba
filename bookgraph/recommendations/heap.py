"""
Max-heap priority queue used to pick the top-K scored candidates.

The heap is a plain list laid out as a complete binary tree: the children of
index ``i`` live at ``2i + 1`` and ``2i + 2``. Every parent's score is >= the
scores of both of its children.

Entries with equal scores come out in no particular order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class HeapItem(Generic[T]):
    score: float
    data: T


class MaxHeap(Generic[T]):
    def __init__(self) -> None:
        self._heap: list[HeapItem[T]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def clear(self) -> None:
        self._heap = []

    def push(self, score: float, data: T) -> None:
        """Insert an entry. O(log n)."""
        self._heap.append(HeapItem(score=score, data=data))
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> HeapItem[T] | None:
        """Remove and return the highest-scored entry, or ``None`` if empty."""
        if not self._heap:
            return None
        last = self._heap.pop()
        if not self._heap:
            return last
        top = self._heap[0]
        self._heap[0] = last
        self._sift_down(0)
        return top

    def peek(self) -> HeapItem[T] | None:
        return self._heap[0] if self._heap else None

    def extract_top_k(self, k: int) -> list[HeapItem[T]]:
        """Pop up to ``k`` entries, highest score first."""
        result: list[HeapItem[T]] = []
        while len(result) < k and self._heap:
            result.append(self.pop())
        return result

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[parent].score >= heap[index].score:
                break
            heap[parent], heap[index] = heap[index], heap[parent]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        length = len(heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            largest = index
            if left < length and heap[left].score > heap[largest].score:
                largest = left
            if right < length and heap[right].score > heap[largest].score:
                largest = right
            if largest == index:
                return
            heap[index], heap[largest] = heap[largest], heap[index]
            index = largest
