"""Binary min-heap priority queue."""

from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """
    Array-backed binary min-heap over (item, priority) pairs.

    The item with the numerically smallest priority is served first.
    There is no decrease-key: callers that need to lower a priority enqueue
    the item again and skip the stale entry when it surfaces. Items with
    equal priorities come out in an unspecified, insertion-dependent order.
    """

    def __init__(self):
        self._heap: List[Tuple[float, T]] = []

    def enqueue(self, item: T, priority: float) -> None:
        """Add an item with the given priority. O(log n)."""
        self._heap.append((priority, item))
        self._sift_up(len(self._heap) - 1)

    def dequeue(self) -> T:
        """
        Remove and return the item with the smallest priority. O(log n).

        Raises:
            IndexError: If the queue is empty
        """
        if not self._heap:
            raise IndexError("dequeue from an empty priority queue")
        if len(self._heap) == 1:
            return self._heap.pop()[1]

        smallest = self._heap[0][1]
        self._heap[0] = self._heap.pop()
        self._sift_down(0)
        return smallest

    def peek(self) -> T:
        """Return the item with the smallest priority without removing it."""
        if not self._heap:
            raise IndexError("peek into an empty priority queue")
        return self._heap[0][1]

    def size(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[parent][0] <= heap[index][0]:
                break
            heap[parent], heap[index] = heap[index], heap[parent]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        length = len(heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index

            if left < length and heap[left][0] < heap[smallest][0]:
                smallest = left
            if right < length and heap[right][0] < heap[smallest][0]:
                smallest = right

            if smallest == index:
                return
            heap[index], heap[smallest] = heap[smallest], heap[index]
            index = smallest
