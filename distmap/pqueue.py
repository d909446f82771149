# region Imports
from typing import List, Optional
from distmap.config import INITIAL_QUEUE_CAPACITY
from distmap.errors import EmptyQueueError
from distmap.models import QueueNode
# endregion


# region Binary Heap
class PriorityQueue:
    """
    Array-backed binary min-heap of QueueNode, ordered by ``f``.

    Children of slot i live at 2i+1 / 2i+2, the parent at (i-1)//2.
    Slots grow by doubling and are never released. There is no
    decrease-key: callers push duplicates and discard stale pops.
    """

    def __init__(self, capacity: int = INITIAL_QUEUE_CAPACITY):
        self._slots: List[Optional[QueueNode]] = [None] * max(1, int(capacity))
        self._size = 0

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def push(self, node: QueueNode) -> None:
        slots = self._slots
        if self._size == len(slots):
            slots.extend([None] * len(slots))

        # sift the hole up while the parent is strictly greater
        hole = self._size
        self._size += 1
        while hole > 0:
            parent = (hole - 1) // 2
            if slots[parent].f <= node.f:
                break
            slots[hole] = slots[parent]
            hole = parent
        slots[hole] = node

    def pop(self) -> QueueNode:
        if not self._size:
            raise EmptyQueueError("pop from empty queue")

        slots = self._slots
        top = slots[0]
        self._size -= 1
        size = self._size
        last = slots[size]
        slots[size] = None

        # sift the hole down from the root toward the smaller child
        hole = 0
        while 2 * hole + 1 < size:
            child = 2 * hole + 1
            right = child + 1
            if right < size and slots[right].f <= slots[child].f:
                child = right
            if last.f <= slots[child].f:
                break
            slots[hole] = slots[child]
            hole = child
        if size:
            slots[hole] = last
        return top
# endregion
