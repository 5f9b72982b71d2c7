#! /usr/bin/env python3

"""This package provides a key-value binary heap.

The heap can act as a min-heap or a max-heap and be switched between the
two at any time, can find every entry stored under a key,
and refuses to keep iterating once it has been modified underneath.

Pipeline adapters for *pipe* and a *tabulate* view of the storage are
provided as well.
"""

from . import display
from . import heap
from . import pipes
from .display import format_heap, show
from .heap import (
    ConcurrentModificationError,
    EmptyHeapError,
    Heap,
    HeapError,
    HeapIterator,
    KeyValuePair,
    Ordering,
)
from .pipes import drain, into_heap, keys, values, with_key


__all__ = [
    # heap
    'Heap',
    'HeapIterator',
    'KeyValuePair',
    'Ordering',
    'HeapError',
    'EmptyHeapError',
    'ConcurrentModificationError',

    # pipes
    'into_heap',
    'drain',
    'keys',
    'values',
    'with_key',

    # display
    'format_heap',
    'show',
]
