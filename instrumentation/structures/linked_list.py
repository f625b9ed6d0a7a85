"""Insertion-ordered doubly linked list with constant-time positional removal.

The list is presented as a forward-only sequence, but every node keeps a
back-link so that tail removal and removal at a known ``Location`` stay O(1).
A ``Location`` is a checked handle: once its node leaves the list (through any
removal path, including ``clear``) further use raises ``StaleLocationError``
instead of touching unrelated nodes.

Structural mutation while an iterator is open is rejected on the iterator's
next step with ``ConcurrentMutationError``. Callers that need to drain the
list while walking it should repeatedly read ``first`` and ``remove_first()``.
"""

from __future__ import annotations

import copy as _copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from instrumentation.errors import ConcurrentMutationError, StaleLocationError


@dataclass(slots=True, eq=False)
class _Node[T]:
    value: T
    prev: _Node[T] | None = field(default=None, repr=False)
    next: _Node[T] | None = field(default=None, repr=False)
    owner: OrderedList[T] | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True, eq=False)
class Location[T]:
    """Opaque handle to one element of one ``OrderedList``."""

    _node: _Node[T] = field(repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        state = "live" if self._node.owner is not None else "stale"
        return f"Location({state})"


class OrderedList[T]:
    """Ordered collection with O(1) append, head/tail removal and located removal.

    Run-time per operation:

    - ``append``, ``remove_first``, ``remove_last``, ``remove_at``, ``at``,
      ``first``, ``last``, ``len``: O(1)
    - ``extend``: O(k) for k items
    - ``remove``, ``locate``, ``contains``, ``snapshot``, ``clear``, copy: O(n)
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._head: _Node[T] | None = None
        self._tail: _Node[T] | None = None
        self._size = 0
        self._mutation_epoch = 0
        if items is not None:
            self.extend(items)

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> OrderedList[T]:
        return cls(items)

    @property
    def size(self) -> int:
        return self._size

    @property
    def first(self) -> T | None:
        return self._head.value if self._head is not None else None

    @property
    def last(self) -> T | None:
        return self._tail.value if self._tail is not None else None

    def __len__(self) -> int:
        return self._size

    def append(self, value: T) -> Location[T]:
        """Append ``value`` after the current tail and return its location."""
        node = _Node(value, prev=self._tail, owner=self)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1
        self._mutation_epoch += 1
        return Location(node)

    def extend(self, items: Iterable[T]) -> None:
        """Append every item in order; equivalent to repeated ``append``."""
        if items is self:
            items = self.snapshot()
        for item in items:
            self.append(item)

    def remove_first(self) -> T | None:
        """Remove the head element. No-op on an empty list."""
        node = self._head
        if node is None:
            return None
        self._unlink(node)
        return node.value

    def remove_last(self) -> T | None:
        """Remove the tail element. No-op on an empty list."""
        node = self._tail
        if node is None:
            return None
        self._unlink(node)
        return node.value

    def remove_at(self, location: Location[T]) -> T:
        """Remove the element at ``location``; the location becomes stale."""
        node = self._checked_node(location)
        self._unlink(node)
        return node.value

    def remove(self, value: T) -> bool:
        """Remove the first element equal to ``value``. Returns whether one was found."""
        node = self._find(value)
        if node is None:
            return False
        self._unlink(node)
        return True

    def locate(self, value: T) -> Location[T] | None:
        node = self._find(value)
        return Location(node) if node is not None else None

    def at(self, location: Location[T]) -> T:
        return self._checked_node(location).value

    def contains(self, value: T) -> bool:
        return self._find(value) is not None

    def __contains__(self, value: object) -> bool:
        return self._find(value) is not None  # type: ignore[arg-type]

    def clear(self) -> None:
        """Remove every element and invalidate every outstanding location."""
        node = self._head
        while node is not None:
            following = node.next
            node.prev = None
            node.next = None
            node.owner = None
            node = following
        self._head = None
        self._tail = None
        self._size = 0
        self._mutation_epoch += 1

    def __iter__(self) -> Iterator[T]:
        return self._walk(self._mutation_epoch)

    def _walk(self, epoch: int) -> Iterator[T]:
        node = self._head
        while True:
            if self._mutation_epoch != epoch:
                raise ConcurrentMutationError("list was mutated during iteration")
            if node is None:
                return
            yield node.value
            node = node.next

    def iterate(self) -> Iterator[T]:
        return iter(self)

    def snapshot(self, *, limit: int | None = None) -> list[T]:
        """Materialize values head-to-tail; ``limit`` keeps only the newest N."""
        if limit is None or limit >= self._size:
            out: list[T] = []
            node = self._head
            while node is not None:
                out.append(node.value)
                node = node.next
            return out
        tail: list[T] = []
        node = self._tail
        while node is not None and len(tail) < max(0, int(limit)):
            tail.append(node.value)
            node = node.prev
        tail.reverse()
        return tail

    def copy(self) -> OrderedList[T]:
        """Return a new list with fresh nodes holding the same values."""
        return type(self)(self.snapshot())

    def __copy__(self) -> OrderedList[T]:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> OrderedList[T]:
        clone: OrderedList[T] = type(self)()
        memo[id(self)] = clone
        for value in self.snapshot():
            clone.append(_copy.deepcopy(value, memo))
        return clone

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.snapshot(),))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedListView):
            other = other._source
        if not isinstance(other, OrderedList):
            return NotImplemented
        if self._size != other._size:
            return False
        left = self._head
        right = other._head
        while left is not None and right is not None:
            if left.value != right.value:
                return False
            left = left.next
            right = right.next
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.snapshot()!r})"

    def _find(self, value: T) -> _Node[T] | None:
        node = self._head
        while node is not None:
            if node.value == value:
                return node
            node = node.next
        return None

    def _checked_node(self, location: Location[T]) -> _Node[T]:
        if not isinstance(location, Location):
            raise TypeError(f"expected Location, got {type(location).__name__}")
        node = location._node
        if node.owner is not self:
            raise StaleLocationError("location does not refer to a live element of this list")
        return node

    def _unlink(self, node: _Node[T]) -> None:
        if node.prev is None:
            self._head = node.next
        else:
            node.prev.next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            node.next.prev = node.prev
        node.prev = None
        node.next = None
        node.owner = None
        self._size -= 1
        self._mutation_epoch += 1


class OrderedListView[T]:
    """Read-only facade over an ``OrderedList`` for rendering collaborators."""

    __slots__ = ("_source",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, source: OrderedList[T]) -> None:
        self._source = source

    @property
    def size(self) -> int:
        return self._source.size

    @property
    def first(self) -> T | None:
        return self._source.first

    @property
    def last(self) -> T | None:
        return self._source.last

    def __len__(self) -> int:
        return len(self._source)

    def __iter__(self) -> Iterator[T]:
        return iter(self._source)

    def iterate(self) -> Iterator[T]:
        return iter(self._source)

    def snapshot(self, *, limit: int | None = None) -> list[T]:
        return self._source.snapshot(limit=limit)

    def contains(self, value: T) -> bool:
        return self._source.contains(value)

    def __contains__(self, value: object) -> bool:
        return value in self._source

    def locate(self, value: T) -> Location[T] | None:
        return self._source.locate(value)

    def at(self, location: Location[T]) -> T:
        return self._source.at(location)

    def copy(self) -> OrderedList[T]:
        return self._source.copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedListView):
            other = other._source
        return self._source.__eq__(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source.snapshot()!r})"
