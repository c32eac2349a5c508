import itertools
import math
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from axisarray.indexing import (ensure_tuple, is_integer, normalize_integer_selection,
                                normalize_positions)


@dataclass(frozen=True)
class AxisArrayKey:
    """A full tuple of labels naming one element of a
    :class:`axisarray.DenseAxisArray`.

    Indexing a key by a dimension returns that dimension's label, and a key
    can be passed as the whole selection of ``get``/``set``/``__getitem__``.
    """

    labels: Tuple[Any, ...]

    def __getitem__(self, dimension):
        return self.labels[dimension]

    def __len__(self):
        return len(self.labels)

    def __iter__(self):
        return iter(self.labels)

    def __repr__(self):
        return f"{type(self).__name__}{self.labels!r}"


class AxisArrayKeys:
    """Lazy cross product of the axes of an array, in storage (C) order: the
    last dimension varies fastest.

    Only the axes and lookups are referenced, never the array itself. Both are
    immutable, so a view stays valid after its array is released.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.array([[1, 2], [3, 4]], ['a', 'b'], range(2, 4))
    >>> keys = a.keys()
    >>> len(keys)
    4
    >>> list(keys)
    [AxisArrayKey('a', 2), AxisArrayKey('a', 3), AxisArrayKey('b', 2), AxisArrayKey('b', 3)]
    >>> keys[2]
    AxisArrayKey('b', 2)
    >>> keys[1, 1]
    AxisArrayKey('b', 3)

    """

    def __init__(self, axes, lookups):
        self._axes = tuple(axes)
        self._lookups = tuple(lookups)
        self._shape = tuple(len(ax) for ax in self._axes)

    @property
    def axes(self):
        return self._axes

    @property
    def shape(self):
        return self._shape

    @property
    def ndim(self):
        return len(self._shape)

    def __len__(self):
        return math.prod(self._shape)

    def __iter__(self):
        for labels in itertools.product(*self._axes):
            yield AxisArrayKey(labels)

    def _key_at(self, positions):
        return AxisArrayKey(tuple(ax[i] for ax, i in zip(self._axes, positions)))

    def __getitem__(self, item):
        if isinstance(item, tuple):
            return self._key_at(normalize_positions(item, self._shape))
        if not is_integer(item):
            raise TypeError(f"key views are indexed by integer positions, got {item!r}")
        flat = normalize_integer_selection(item, len(self))
        if not self._shape:
            return AxisArrayKey(())
        return self._key_at(np.unravel_index(flat, self._shape))

    def __contains__(self, key):
        labels = tuple(key) if isinstance(key, AxisArrayKey) else ensure_tuple(key)
        if len(labels) != self.ndim:
            return False
        for lookup, label in zip(self._lookups, labels):
            try:
                if label not in lookup:
                    return False
            except TypeError:
                return False
        return True

    def __repr__(self):
        return f"<{type(self).__name__} shape={self._shape}>"
