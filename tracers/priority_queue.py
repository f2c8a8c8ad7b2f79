"""
priority_queue.py — Array-backed Binary Min-Heap
================================================
Hand-rolled instead of heapq because the visualizer shows the heap's
literal array, so the sift rules have to be pinned down:

  - sift-up stops as soon as the new entry is >= its parent;
  - sift-down prefers the left child when it is strictly smaller, and
    takes the right child only when it is strictly smaller than the
    element (or than the left child, if the left was already picked).

With those rules fixed, the same insertion sequence always produces the
same layout, which is what makes traces reproducible.  Equal values are
ordered by heap position only, never by id.

Duplicates are allowed on purpose: Dijkstra pushes a node again every
time its distance improves and throws the stale copies away on pop.
"""

from typing import List, Optional

from tracers.steps import QueueEntry


class MinPriorityQueue:

    def __init__(self):
        self._values: List[QueueEntry] = []

    def insert(self, node_id: str, value: float) -> None:
        self._values.append(QueueEntry(node_id, value))
        self._sift_up()

    def extract_min(self) -> Optional[QueueEntry]:
        """Remove and return the smallest entry, or None if empty."""
        if not self._values:
            return None
        smallest = self._values[0]
        last = self._values.pop()
        if self._values:
            self._values[0] = last
            self._sift_down()
        return smallest

    def is_empty(self) -> bool:
        return not self._values

    def snapshot(self) -> List[QueueEntry]:
        """Copy of the internal array, heap layout preserved."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _sift_up(self) -> None:
        values = self._values
        idx = len(values) - 1
        element = values[idx]
        while idx > 0:
            parent_idx = (idx - 1) // 2
            parent = values[parent_idx]
            if element.value >= parent.value:
                break
            values[parent_idx] = element
            values[idx] = parent
            idx = parent_idx

    def _sift_down(self) -> None:
        values = self._values
        length = len(values)
        idx = 0
        element = values[0]
        while True:
            left_idx = 2 * idx + 1
            right_idx = 2 * idx + 2
            swap = None

            if left_idx < length and values[left_idx].value < element.value:
                swap = left_idx
            if right_idx < length:
                right = values[right_idx]
                if (swap is None and right.value < element.value) or \
                   (swap is not None and right.value < values[left_idx].value):
                    swap = right_idx

            if swap is None:
                break
            values[idx] = values[swap]
            values[swap] = element
            idx = swap
