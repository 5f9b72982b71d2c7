#! /usr/bin/env python3

"""This module renders a heap's storage as a table, for inspection.

>>> heap = Heap('min', [(3, 'spam'), (1, 'eggs'), (2, 'ham')])
>>> print(format_heap(heap))
+-------+--------+-----+-------+
| index | parent | key | value |
+-------+--------+-----+-------+
| 0     | -      | 1   | eggs  |
| 1     | 0      | 3   | spam  |
| 2     | 0      | 2   | ham   |
+-------+--------+-----+-------+

"""

import shutil
import typing as T

from tabulate import tabulate

from .heap import Heap


HEADERS = ['index', 'parent', 'key', 'value']


def limit_string(
    full: str, width: T.Union[int, str] = 'auto', tail: bool = True
) -> str:
    """Limit length of string to *width*.

    :full:
        The full content of the string.
    :width:
        The returned string will have this much width at maximum.
        Default is ``'auto'``; Starting from 20 at 80 terminal width,
        it changes by 1 every 2 unit change of terminal width,
        while guaranteeing at least 10 spaces for the string.
    :tail:
        Default ``True``. If ``True``, middle part of the *full* string will
        be ``'...'`` and the rest are the tail of *full*.
        If ``False``, the tail part will be discarded.

    >>> limit_string('abcdefghijklmnop', width=10)
    'abcd...nop'
    >>> limit_string('abcdefghijklmnop', width=10, tail=False)
    'abcdefg...'
    """
    if isinstance(width, int):
        _width = width
    else:
        term_width = shutil.get_terminal_size().columns
        _width = max(10, 20 + (term_width - 80)//2)
    if len(full) <= _width:
        return full
    if _width <= 3:
        return full[:_width]
    if tail:
        rest = _width - 3
        return full[:round(rest / 2)] + '...' + full[len(full) - rest//2:]
    else:
        return full[:_width - 3] + '...'


def format_heap(heap: Heap, width: T.Union[int, str] = 'auto') -> str:
    """Return the heap's entries in storage order as a pretty table.

    Each row shows the slot index, the parent slot (``-`` for the root),
    the key and the value.
    Keys and values are shortened with ``limit_string`` to *width*.
    The heap must not be modified while this runs.
    """
    data = []
    for index, pair in enumerate(heap):
        parent = '-' if index == 0 else str((index + 1)//2 - 1)
        data.append([
            str(index),
            parent,
            limit_string(str(pair.key), width),
            limit_string(str(pair.value), width),
        ])
    return tabulate(
        data,
        headers=HEADERS,
        numalign=None,
        disable_numparse=True,
        tablefmt='pretty',
        stralign='left',
    )


def show(heap: Heap, width: T.Union[int, str] = 'auto') -> None:
    """Print ``format_heap`` of *heap*."""
    print(format_heap(heap, width))


if __name__ == '__main__':
    import doctest
    doctest.testmod()
