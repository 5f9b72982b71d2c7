#! /usr/bin/env python3

"""This module lets heaps take part in pipelines through *pipe*.

.. code:: python
    >>> heap = [(5, 'e'), (3, 'c'), (8, 'h')] | into_heap('max')
    >>> [pair.key for pair in heap | drain]
    [8, 5, 3]
    >>> len(heap)
    0

"""

import typing as T

from pipe import Pipe

from .heap import Heap, KeyValuePair, Ordering, OrderingLike


@Pipe
def into_heap(
    iterable: T.Iterable[T.Tuple[T.Any, T.Any]],
    ordering: OrderingLike = Ordering.MIN,
) -> Heap:
    """Collect ``(key, value)`` pairs into a new heap.

    :ordering:
        ``'min'`` or ``'max'``, or an ``Ordering`` member.
        Default is ``Ordering.MIN``.
    """
    return Heap(ordering, iterable)


@Pipe
def drain(heap: Heap) -> T.Iterable[KeyValuePair]:
    """Extract entries in priority order until *heap* is empty.

    Extraction happens lazily, one entry per item consumed,
    so stopping early leaves the rest in the heap.
    """
    while heap:
        yield heap.extract()


@Pipe
def keys(heap: Heap) -> T.Iterable[T.Any]:
    """Yield keys in storage order. Modifying *heap* meanwhile raises."""
    for pair in heap:
        yield pair.key


@Pipe
def values(heap: Heap) -> T.Iterable[T.Any]:
    """Yield values in storage order. Modifying *heap* meanwhile raises."""
    for pair in heap:
        yield pair.value


@Pipe
def with_key(heap: Heap, key: T.Any) -> T.Iterable[KeyValuePair]:
    """Yield every entry whose key equals *key*.

    .. code:: python
        >>> heap = [(1, 'a'), (2, 'b'), (1, 'c')] | into_heap
        >>> sorted(heap | with_key(1))
        [KeyValuePair(key=1, value='a'), KeyValuePair(key=1, value='c')]

    """
    yield from heap.find_by_key(key)


if __name__ == '__main__':
    import doctest
    doctest.testmod()
