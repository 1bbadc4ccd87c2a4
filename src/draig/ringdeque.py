"""Growable double-ended queue backed by a power-of-two ring buffer."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional

MIN_CAPACITY = 8
MAX_CAPACITY = 1 << 30

_MISSING = object()


class DequeStateError(RuntimeError):
    """Raised when head, tail and an index no longer describe a valid ring."""


def _capacity_for(count: int) -> int:
    # Arrays are never kept full, so an exact power of two still needs the next one.
    if count < MIN_CAPACITY:
        return MIN_CAPACITY
    capacity = 1 << count.bit_length()
    if capacity > MAX_CAPACITY:
        raise OverflowError(f"RingDeque cannot hold {count} elements")
    return capacity


class RingDeque:
    """Double-ended queue with O(1) indexed access.

    Elements live in a list whose length is always a power of two. ``head``
    is the slot of the first element and ``tail`` the slot the next
    ``push_back`` writes to; both are masked with ``capacity - 1``. The list
    is never allowed to become full: as soon as a push makes ``head == tail``
    the capacity is doubled, so ``head == tail`` always means empty. Slots not
    holding an element are ``None``.
    """

    def __init__(self, values: Optional[Iterable[Any]] = None) -> None:
        items = list(values) if values is not None else []
        self._elements: List[Any] = [None] * _capacity_for(len(items))
        self._head = 0
        self._tail = 0
        for item in items:
            self.push_back(item)

    @classmethod
    def from_value(cls, value: Any) -> "RingDeque":
        result = cls()
        result.push_back(value)
        return result

    @property
    def capacity(self) -> int:
        return len(self._elements)

    def push_front(self, value: Any) -> None:
        mask = len(self._elements) - 1
        self._head = (self._head - 1) & mask
        self._elements[self._head] = value
        if self._head == self._tail:
            self._double_capacity()

    def push_back(self, value: Any) -> None:
        mask = len(self._elements) - 1
        self._elements[self._tail] = value
        self._tail = (self._tail + 1) & mask
        if self._tail == self._head:
            self._double_capacity()

    def pop_front(self) -> Any:
        if self._head == self._tail:
            raise IndexError("pop from an empty deque")
        head = self._head
        value = self._elements[head]
        self._elements[head] = None
        self._head = (head + 1) & (len(self._elements) - 1)
        return value

    def pop_back(self) -> Any:
        if self._head == self._tail:
            raise IndexError("pop from an empty deque")
        tail = (self._tail - 1) & (len(self._elements) - 1)
        value = self._elements[tail]
        self._elements[tail] = None
        self._tail = tail
        return value

    def peek_front(self) -> Any:
        if self._head == self._tail:
            raise IndexError("peek at an empty deque")
        return self._elements[self._head]

    def peek_back(self) -> Any:
        if self._head == self._tail:
            raise IndexError("peek at an empty deque")
        return self._elements[(self._tail - 1) & (len(self._elements) - 1)]

    def get(self, index: int, default: Any = _MISSING) -> Any:
        """Return the element at a logical index, or ``default`` when out of range."""
        if not self.has_index(index):
            if default is _MISSING:
                raise IndexError("deque index out of range")
            return default
        return self._elements[self._slot(index)]

    def set(self, index: int, value: Any) -> None:
        if not self.has_index(index):
            raise IndexError("deque assignment index out of range")
        self._elements[self._slot(index)] = value

    def edit(self, index: int, update: Callable[[Any], Any]) -> None:
        """Replace the element at ``index`` with ``update(old_value)``."""
        if not self.has_index(index):
            raise IndexError("deque assignment index out of range")
        slot = self._slot(index)
        self._elements[slot] = update(self._elements[slot])

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self)

    def delete_at(self, index: int) -> None:
        if not self.has_index(index):
            raise IndexError("deque deletion index out of range")
        self._delete_slot(self._slot(index))

    def is_empty(self) -> bool:
        return self._head == self._tail

    def clear(self) -> None:
        head, tail = self._head, self._tail
        if head == tail:
            return
        mask = len(self._elements) - 1
        slot = head
        while slot != tail:
            self._elements[slot] = None
            slot = (slot + 1) & mask
        self._head = self._tail = 0

    def to_list(self) -> List[Any]:
        """Return a new list holding the elements front to back."""
        head, tail = self._head, self._tail
        if head <= tail:
            return self._elements[head:tail]
        return self._elements[head:] + self._elements[:tail]

    def truncate_to(self, length: int) -> None:
        if length <= 0:
            self.clear()
            return
        while len(self) > length:
            self.pop_back()

    def trim_leading(self, predicate: Callable[[Any], bool]) -> None:
        while self._head != self._tail and predicate(self.peek_front()):
            self.pop_front()

    def reverse(self) -> None:
        count = len(self) // 2
        if count < 1:
            return
        mask = len(self._elements) - 1
        elements = self._elements
        front = self._head
        back = (self._tail - 1) & mask
        for _ in range(count):
            elements[front], elements[back] = elements[back], elements[front]
            front = (front + 1) & mask
            back = (back - 1) & mask

    def slice(self, start: int = 0, end: Optional[int] = None) -> "RingDeque":
        """Copy ``[start, end)`` into a new deque, normalising indexes like ``list``."""
        length = len(self)
        if end is None:
            end = length
        if start < 0:
            start += length
        if end < 0:
            end += length
        start = max(start, 0)
        end = min(end, length)
        if start >= end:
            return RingDeque()
        return RingDeque(self._elements[self._slot(i)] for i in range(start, end))

    def _slot(self, index: int) -> int:
        return (self._head + index) & (len(self._elements) - 1)

    def _delete_slot(self, slot: int) -> None:
        elements = self._elements
        mask = len(elements) - 1
        head, tail = self._head, self._tail
        front = (slot - head) & mask
        back = (tail - slot) & mask

        if front >= ((tail - head) & mask):
            raise DequeStateError(
                f"slot {slot} is outside the ring (head={head}, tail={tail})"
            )

        # Move whichever side holds fewer elements.
        if front < back:
            if head <= slot:
                elements[head + 1 : slot + 1] = elements[head:slot]
            else:
                elements[1 : slot + 1] = elements[0:slot]
                elements[0] = elements[mask]
                elements[head + 1 : mask + 1] = elements[head:mask]
            elements[head] = None
            self._head = (head + 1) & mask
            return

        if slot < tail:
            # The copied range ends with the empty tail slot.
            elements[slot:tail] = elements[slot + 1 : tail + 1]
            self._tail = tail - 1
        else:
            elements[slot:mask] = elements[slot + 1 : mask + 1]
            elements[mask] = elements[0]
            elements[0:tail] = elements[1 : tail + 1]
            self._tail = (tail - 1) & mask

    def _double_capacity(self) -> None:
        if self._head != self._tail:
            raise DequeStateError("capacity doubled while the ring was not full")
        old_capacity = len(self._elements)
        new_capacity = old_capacity << 1
        if new_capacity > MAX_CAPACITY:
            raise OverflowError("RingDeque capacity exceeded")
        head = self._head
        self._elements = self._elements[head:] + self._elements[:head] + [None] * old_capacity
        self._head = 0
        self._tail = old_capacity

    def __len__(self) -> int:
        return (self._tail - self._head) & (len(self._elements) - 1)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        self.delete_at(index)

    def __repr__(self) -> str:
        return f"RingDeque({self.to_list()!r})"

    def __str__(self) -> str:
        return " ".join(str(item) for item in self.to_list())


__all__ = ["RingDeque", "DequeStateError", "MIN_CAPACITY", "MAX_CAPACITY"]
