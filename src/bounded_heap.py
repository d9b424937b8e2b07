"""Bounded binary min-heap over elements that expose an integer order key.

Elements only need an ``order()`` method; lower values come out first.
A bounded heap that is full evicts its current minimum on every push, so
once it fills up it keeps the highest-order elements it has seen.

Changing an element's ``order()`` while it is stored is undefined behaviour.
The heap does no locking; callers serialize access.
"""

import logging
import operator
import sys
from typing import TypeVar, Generic, List, Iterator, Optional, Tuple, Protocol

logger = logging.getLogger(__name__)

UNBOUNDED = sys.maxsize


class Orderable(Protocol):
    def order(self) -> int:
        ...


T = TypeVar('T', bound=Orderable)


def _normalize_capacity(capacity: Optional[int]) -> int:
    if capacity is None:
        return UNBOUNDED
    if isinstance(capacity, bool):
        raise TypeError("capacity must be an integer")
    capacity = operator.index(capacity)
    if capacity <= 0:
        return UNBOUNDED
    return capacity


class BoundedHeap(Generic[T]):
    def __init__(self, capacity: Optional[int] = 0) -> None:
        self._data: List[T] = []
        self._capacity = _normalize_capacity(capacity)

    @staticmethod
    def heapify(source: List[T], capacity: Optional[int] = 0) -> 'BoundedHeap[T]':
        """Build a heap that takes over ``source`` as its storage.

        The list is reordered in place and must not be touched by the caller
        afterwards. Capacity is not enforced here, only by later pushes.
        """
        heap: BoundedHeap[T] = BoundedHeap(capacity)
        heap._data = source
        for i in range(len(source) // 2 - 1, -1, -1):
            heap._sift_down(i)
        logger.debug("heapified %d elements (capacity=%d)", len(source), heap._capacity)
        return heap

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_bounded(self) -> bool:
        return self._capacity != UNBOUNDED

    def is_full(self) -> bool:
        return len(self._data) >= self._capacity

    def push(self, item: T) -> Tuple[Optional[T], bool]:
        """Insert ``item``.

        Returns ``(evicted, True)`` when the push took the heap over capacity
        and the minimum element was removed to make room, ``(None, False)``
        otherwise. The evicted element may be ``item`` itself.
        """
        self._data.append(item)
        self._sift_up(len(self._data) - 1)
        if len(self._data) > self._capacity:
            evicted, _ = self.pop()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("capacity %d reached, evicted order=%d",
                             self._capacity, evicted.order())
            return evicted, True
        return None, False

    def pop(self) -> Tuple[Optional[T], bool]:
        if not self._data:
            return None, False
        if len(self._data) == 1:
            return self._data.pop(), True
        result = self._data[0]
        self._data[0] = self._data.pop()
        self._sift_down(0)
        return result, True

    def peek(self) -> Tuple[Optional[T], bool]:
        if not self._data:
            return None, False
        return self._data[0], True

    def size(self) -> int:
        return len(self._data)

    def snapshot(self) -> List[T]:
        """Return a new list holding every element in storage order."""
        return list(self._data)

    def is_empty(self) -> bool:
        return len(self._data) == 0

    def clear(self) -> None:
        self._data = []

    def copy(self) -> 'BoundedHeap[T]':
        clone: BoundedHeap[T] = BoundedHeap(self._capacity)
        clone._data = self._data.copy()
        return clone

    @staticmethod
    def _parent(index: int) -> int:
        return (index - 1) // 2

    @staticmethod
    def _left(index: int) -> int:
        return 2 * index + 1

    @staticmethod
    def _right(index: int) -> int:
        return 2 * index + 2

    def _priority_child(self, index: int) -> int:
        # -1 when index is a leaf; left wins ties
        left, right = self._left(index), self._right(index)
        size = len(self._data)
        if left >= size:
            return -1
        if right >= size:
            return left
        if self._data[left].order() <= self._data[right].order():
            return left
        return right

    def _sift_up(self, index: int) -> None:
        data = self._data
        key = data[index].order()
        while index > 0:
            parent = self._parent(index)
            if key < data[parent].order():
                data[index], data[parent] = data[parent], data[index]
                index = parent
            else:
                break

    def _sift_down(self, index: int) -> None:
        data = self._data
        key = data[index].order()
        child = self._priority_child(index)
        while child != -1 and data[child].order() < key:
            data[index], data[child] = data[child], data[index]
            index = child
            child = self._priority_child(index)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return len(self._data) > 0

    def __repr__(self) -> str:
        return f"BoundedHeap({self._data}, capacity={self._capacity})"

    def __str__(self) -> str:
        if self.is_bounded():
            return f"BoundedHeap(size={len(self._data)}, capacity={self._capacity})"
        return f"BoundedHeap(size={len(self._data)})"

    def __iter__(self) -> Iterator[T]:
        heap_copy = self.copy()
        while not heap_copy.is_empty():
            item, _ = heap_copy.pop()
            yield item
