# geo_route/domain/routing/heap.py
from collections.abc import Hashable


class IndexedMinHeap:
    """
    Binary min-heap of (key, priority) with a key -> array position index,
    giving O(log n) decrease_key and O(1) membership.

    Invariants: heap[i].priority <= both children; _pos[k] == index of k in _heap.
    Ties between equal priorities are broken arbitrarily.
    """

    def __init__(self):
        self._heap: list[list] = []  # [key, priority]
        self._pos: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, key) -> bool:
        return key in self._pos

    def peek(self) -> tuple[Hashable, float] | None:
        if not self._heap:
            return None
        k, p = self._heap[0]
        return k, p

    def priority(self, key) -> float | None:
        i = self._pos.get(key)
        return None if i is None else self._heap[i][1]

    def insert(self, key: Hashable, priority: float) -> None:
        """Precondition: `key` is not already queued (use decrease_key)."""
        self._heap.append([key, priority])
        i = len(self._heap) - 1
        self._pos[key] = i
        self._sift_up(i)

    def extract_min(self) -> tuple[Hashable, float] | None:
        if not self._heap:
            return None
        last = self._heap.pop()
        if not self._heap:
            del self._pos[last[0]]
            return last[0], last[1]
        top = self._heap[0]
        del self._pos[top[0]]
        self._heap[0] = last
        self._pos[last[0]] = 0
        self._sift_down(0)
        return top[0], top[1]

    def decrease_key(self, key: Hashable, priority: float) -> None:
        """Lower `key`'s priority. Absent keys are ignored; never use this to raise one."""
        i = self._pos.get(key)
        if i is None:
            return
        self._heap[i][1] = priority
        self._sift_up(i)

    # --------------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        h = self._heap
        h[i], h[j] = h[j], h[i]
        self._pos[h[i][0]] = i
        self._pos[h[j][0]] = j

    def _sift_up(self, i: int) -> None:
        h = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if h[parent][1] <= h[i][1]:
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        h, n = self._heap, len(self._heap)
        while True:
            smallest, left, right = i, 2 * i + 1, 2 * i + 2
            if left < n and h[left][1] < h[smallest][1]:
                smallest = left
            if right < n and h[right][1] < h[smallest][1]:
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
