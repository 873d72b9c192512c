"""Priority queue implementation for the best-first searches.

Items are dequeued by ascending priority; items with equal priority come out in the
order they were enqueued, which keeps both planners deterministic.
"""
import heapq
import itertools
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class PriorityQueue(Generic[T]):
    """A min-priority queue backed by a binary heap.

    Items do not need to be comparable: ties are broken by an insertion counter.
    """

    def __init__(self):
        """Initialize an empty priority queue."""
        self.elements: List[Tuple[float, int, T]] = []
        self._counter = itertools.count()

    def enqueue(self, item: T, priority: float):
        """Add an item to the queue.

        Args:
            item: The item to add to the queue.
            priority: Its priority; lower values are dequeued first.
        """
        heapq.heappush(self.elements, (priority, next(self._counter), item))

    def dequeue(self) -> Optional[T]:
        """Get the item with the minimum priority.

        Returns:
            The item with the minimum priority, or None if the queue is empty.
        """
        if not self.elements:
            return None
        return heapq.heappop(self.elements)[2]

    def peek_priority(self) -> Optional[float]:
        """Return the minimum priority without removing its item."""
        if not self.elements:
            return None
        return self.elements[0][0]

    def empty(self) -> bool:
        """Check if the queue is empty."""
        return len(self.elements) == 0

    def __iter__(self):
        """Iterate over the queued items in heap order (not sorted)."""
        return (item for _, _, item in self.elements)

    def __len__(self):
        """Get the number of elements in the queue."""
        return len(self.elements)

    @property
    def size(self):
        """Get the number of elements in the queue."""
        return len(self.elements)
