#! /usr/bin/env python3

"""This module provides a key-value binary heap with switchable ordering.

Unlike the standard library *heapq*, the heap here owns its storage,
keeps keys apart from values, and can be flipped between a min-heap and a
max-heap after construction.
Entries sharing a key are allowed, and all of them can be looked up.

>>> heap = Heap('min', [(5, 'e'), (3, 'c'), (8, 'h'), (1, 'a')])
>>> heap
Heap(ordering='min', count=4)
>>> heap.peek()
KeyValuePair(key=1, value='a')
>>> heap.extract()
KeyValuePair(key=1, value='a')
>>> heap.update_ordering('max')
>>> [heap.extract().key for _ in range(len(heap))]
[8, 5, 3]

"""

from __future__ import annotations

import enum
import logging
import typing as T

from collections import abc


logger = logging.getLogger(__name__)


# typedef
KT = T.TypeVar('KT')
VT = T.TypeVar('VT')
OrderingLike = T.Union['Ordering', str]


class HeapError(Exception):
    ...


class EmptyHeapError(HeapError, IndexError):
    """An operation needed at least one entry, but the heap is empty."""


class ConcurrentModificationError(HeapError, RuntimeError):
    """The heap was modified while an iterator over it was alive."""


class Ordering(enum.Enum):
    """Which end of the key order sits at the root.

    Names are accepted case-insensitively in place of the members.

    >>> Ordering('MAX')
    <Ordering.MAX: 'max'>
    """
    MIN = 'min'
    MAX = 'max'

    @classmethod
    def _missing_(cls, value: T.Any) -> T.Optional[Ordering]:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class KeyValuePair(T.NamedTuple):
    key: T.Any
    value: T.Any


class _Entry(object):
    __slots__ = ('key', 'value')

    def __init__(self, key: T.Any, value: T.Any) -> None:
        self.key = key
        self.value = value

    def to_pair(self) -> KeyValuePair:
        return KeyValuePair(self.key, self.value)


class Heap(abc.Collection, T.Generic[KT, VT]):
    """Array-backed binary heap of key-value entries.

    The tree is stored breadth-first in a list; children of slot ``i`` live
    at ``2*i + 1`` and ``2*i + 2``.
    Only slots below ``count`` are occupied.
    The list is allocated on the first insertion and only ever grows;
    ``clear`` empties the heap but keeps its capacity.

    Every structural change bumps an internal generation number.
    Iterators remember the generation they started with and refuse to
    continue once it moved, raising ``ConcurrentModificationError``.

    The heap is not thread-safe.

    :ordering:
        ``Ordering.MIN`` (default) keeps the smallest key at the root,
        ``Ordering.MAX`` the largest. ``'min'`` and ``'max'`` work too.
    :source:
        Optional iterable of ``(key, value)`` pairs,
        each of which is inserted through ``add``.

    -------------
    Configuration
    -------------

    :min_length:
        Length of the storage list allocated on first insertion.
    :growth_factor:
        When storage is full, it is grown to ``int(length * growth_factor)``
        slots (at least one more than before).
    """
    min_length: int = 4
    growth_factor: float = 1.5

    _entries: T.List[T.Optional[_Entry]]
    _count: int
    _generation: int
    _ordering: Ordering

    def __init__(
        self,
        ordering: OrderingLike = Ordering.MIN,
        source: T.Optional[T.Iterable[T.Tuple[KT, VT]]] = None,
    ) -> None:
        self._ordering = Ordering(ordering)
        self._entries = []
        self._count = 0
        self._generation = 0
        if source is not None:
            self.extend(source)

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}'
            f'(ordering={self._ordering.value!r}, count={self._count})'
        )

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> HeapIterator:
        return HeapIterator(self)

    def __contains__(self, item: T.Any) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        key, value = item
        return self.contains(key, value)

    @property
    def count(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return len(self._entries)

    @property
    def ordering(self) -> Ordering:
        return self._ordering

    @property
    def generation(self) -> int:
        """Number bumped by every structural change."""
        return self._generation

    # Insertion

    def add(self, key: KT, value: VT) -> None:
        """Insert an entry and sift it up to its place.

        Raises ``TypeError`` if *key* is ``None``.
        """
        if key is None:
            raise TypeError('key must not be None')
        index = self._count
        self._reserve()
        self._sift_up(index, _Entry(key, value))
        self._generation += 1
        self._count += 1

    def append(self, pair: T.Tuple[KT, VT]) -> None:
        """Insert a ``(key, value)`` pair."""
        key, value = pair
        self.add(key, value)

    def extend(self, pairs: T.Iterable[T.Tuple[KT, VT]]) -> None:
        """Insert every ``(key, value)`` pair of *pairs*, one at a time."""
        for key, value in pairs:
            self.add(key, value)

    # Extraction

    def peek(self) -> T.Optional[KeyValuePair]:
        """Return the root entry without removing it, or ``None`` if empty."""
        if self._count == 0:
            return None
        return self._entries[0].to_pair()

    def extract(self) -> KeyValuePair:
        """Remove and return the root entry.

        Raises ``EmptyHeapError`` if the heap is empty.
        """
        if self._count == 0:
            raise EmptyHeapError('heap is empty')
        root = self._entries[0]
        last = self._count - 1
        self._entries[0] = self._entries[last]
        self._entries[last] = None
        self._count = last
        self._sift_down(0)
        self._generation += 1
        return root.to_pair()

    def clear(self) -> None:
        """Remove all entries. Capacity is kept."""
        for index in range(self._count):
            self._entries[index] = None
        self._count = 0
        self._generation += 1

    # Search

    def find_by_key(self, key: KT) -> T.List[KeyValuePair]:
        """Return all entries whose key equals *key*, in no particular order.

        Subtrees whose root is already past *key* in heap order are skipped,
        but every subtree that may still hold an equal key is visited,
        so the worst case is linear.
        Raises ``TypeError`` if *key* is ``None``.
        """
        if key is None:
            raise TypeError('key must not be None')
        found = []
        stack = [0]
        while stack:
            index = stack.pop()
            if index >= self._count:
                continue
            entry = self._entries[index]
            # Descendants can only be further from the root end.
            if self._precedes(key, entry.key):
                continue
            if entry.key == key:
                found.append(entry.to_pair())
            stack.append(2*index + 2)
            stack.append(2*index + 1)
        return found

    def contains(self, key: KT, value: VT) -> bool:
        """Return whether the exact ``(key, value)`` pair is stored."""
        return any(pair.value == value for pair in self.find_by_key(key))

    # Re-ordering

    def update_ordering(
        self, ordering: OrderingLike, force: bool = False
    ) -> None:
        """Switch to *ordering* and rebuild the heap under it.

        Nothing happens if *ordering* is the current one,
        unless *force* is ``True``; a forced rebuild re-establishes heap
        order for entries that were loaded without it.
        """
        ordering = Ordering(ordering)
        if ordering is self._ordering and not force:
            return
        if self._count == 0:
            self._ordering = ordering
            self._generation += 1
            return

        entries = self._entries[:self._count]
        logger.debug(
            'rebuilding %d entries: %s -> %s',
            len(entries), self._ordering.value, ordering.value,
        )
        self.clear()
        self._ordering = ordering
        for entry in entries:
            self.add(entry.key, entry.value)

    # Export

    def copy_to(self, array: T.MutableSequence, index: int = 0) -> None:
        """Copy the live entries, in storage order, into *array* at *index*.

        Only ``count`` pairs are written; the rest of *array* is untouched.
        """
        if index < 0:
            raise IndexError('index must not be negative')
        if len(array) - index < self._count:
            raise ValueError('destination array is too short')
        for offset in range(self._count):
            array[index + offset] = self._entries[offset].to_pair()

    # Serialization

    def __getstate__(self) -> T.Dict[str, str]:
        return {'ordering': self._ordering.value}

    def __setstate__(self, state: T.Mapping[str, str]) -> None:
        # Entries may already have been fed in under the default ordering.
        self.update_ordering(state['ordering'], force=True)

    def __reduce__(self) -> tuple:
        """Persist only the ordering; entries travel as container items."""
        pairs = [tuple(pair) for pair in self]
        return (type(self), (), self.__getstate__(), iter(pairs))

    # Internals

    def _precedes(self, a: T.Any, b: T.Any) -> bool:
        """Return whether key *a* belongs strictly closer to the root."""
        if self._ordering is Ordering.MIN:
            return a < b
        return b < a

    def _reserve(self) -> None:
        length = len(self._entries)
        if length == 0:
            self._entries = [None] * self.min_length
        elif self._count >= length:
            grown = max(int(length * self.growth_factor), length + 1)
            logger.debug('growing storage: %d -> %d', length, grown)
            self._entries.extend([None] * (grown - length))

    def _swap(self, i: int, j: int) -> None:
        entries = self._entries
        entries[i], entries[j] = entries[j], entries[i]

    def _sift_up(self, index: int, entry: _Entry) -> None:
        """Place *entry*, meant for slot *index*, on its path to the root.

        All comparisons are done before any slot is written,
        so a key that fails to compare leaves the heap untouched.
        """
        entries = self._entries
        target = index
        while target > 0:
            parent = (target + 1) // 2 - 1
            if not self._precedes(entry.key, entries[parent].key):
                break
            target = parent
        while index > target:
            parent = (index + 1) // 2 - 1
            entries[index] = entries[parent]
            index = parent
        entries[target] = entry

    def _sift_down(self, index: int) -> None:
        entries = self._entries
        count = self._count
        while True:
            left = 2*index + 1
            if left >= count:
                return
            right = left + 1
            # Prefer left unless right is strictly closer to the root.
            child = left
            if right < count and self._precedes(
                entries[right].key, entries[left].key
            ):
                child = right
            if not self._precedes(entries[child].key, entries[index].key):
                return
            self._swap(index, child)
            index = child


class HeapIterator(abc.Iterator):
    """Iterator over a heap's entries in storage (breadth-first) order.

    It remembers the heap's generation when created.
    Advancing after the heap changed raises ``ConcurrentModificationError``.

    >>> heap = Heap('min', [(2, 'b'), (1, 'a')])
    >>> entries = iter(heap)
    >>> next(entries)
    KeyValuePair(key=1, value='a')
    >>> heap.add(0, 'z')
    >>> next(entries)  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
        ...
    kvheap.heap.ConcurrentModificationError: heap changed during iteration
    """
    _heap: Heap
    _generation: int
    _index: int

    def __init__(self, heap: Heap) -> None:
        self._heap = heap
        self._generation = heap.generation
        self._index = -1

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._heap!r}, index={self._index})'

    def __next__(self) -> KeyValuePair:
        self._check()
        heap = self._heap
        if self._index < heap.count - 1:
            self._index += 1
            return heap._entries[self._index].to_pair()
        raise StopIteration

    def reset(self) -> None:
        """Rewind to the first entry, if the heap is still unchanged."""
        self._check()
        self._index = -1

    def _check(self) -> None:
        if self._generation != self._heap.generation:
            raise ConcurrentModificationError('heap changed during iteration')


if __name__ == '__main__':
    import doctest
    doctest.testmod()
