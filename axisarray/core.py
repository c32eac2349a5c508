import logging
import warnings

import numpy as np
from numpy.lib.mixins import NDArrayOperatorsMixin

from axisarray.config import display_options
from axisarray.errors import AxisMismatchError, BoundsError, KeyNotFoundError
from axisarray.indexing import (Label, ensure_tuple, has_keep, normalize_positions,
                                normalize_selection, resolve_selection)
from axisarray.keys import AxisArrayKey, AxisArrayKeys
from axisarray.util import (InfoReporter, abbreviate, build_lookup, check_axes_shape,
                            human_readable_size, normalize_axes, normalize_fill_value)

__all__ = ["DenseAxisArray"]

logger = logging.getLogger(__name__)


def _as_selection(selection):
    # a key stands for the full label tuple, even for tuple-valued labels
    if isinstance(selection, AxisArrayKey):
        return selection.labels
    return selection


def _same_axes(axes, other):
    # a range and a tuple holding the same labels are the same axis
    return (len(axes) == len(other) and
            all(a == b or tuple(a) == tuple(b) for a, b in zip(axes, other)))


class DenseAxisArray(NDArrayOperatorsMixin):
    """A dense N-dimensional array indexed by labels along every dimension.

    Parameters
    ----------
    data : array_like
        Backing store, coerced with :func:`numpy.asarray`. The array uses this
        store directly; see :func:`axisarray.array` for a copying constructor.
    *axes : sequence
        One sequence of unique, hashable labels per dimension of `data`. A
        ``range`` is kept as-is, any other iterable is copied into a tuple.

    Raises
    ------
    ShapeMismatchError
        If the number or lengths of the axes do not match ``data.shape``.
    DuplicateLabelError
        If an axis repeats a label.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.DenseAxisArray([[1, 2], [3, 4]], ['a', 'b'], range(2, 4))
    >>> a['b', 3]
    np.int64(4)

    Slicing with ``:`` keeps whole axes and drops the others::

        >>> a[:, 2]
        1-dimensional DenseAxisArray{int64,1,...} with index sets:
            Dimension 0, ['a', 'b']
        And data, a 2-element ndarray of int64:
        [1 3]

    """

    def __init__(self, data, *axes):
        data = np.asarray(data)
        axes = normalize_axes(axes)
        check_axes_shape(axes, data.shape)
        lookups = tuple(build_lookup(ax, dimension) for dimension, ax in enumerate(axes))
        self._data = data
        self._axes = axes
        self._lookups = lookups
        self._positional = PositionalIndex(self)

    @classmethod
    def _new(cls, data, axes, lookups):
        """Wrap `data` with already built axes and lookups."""
        check_axes_shape(axes, data.shape)
        obj = cls.__new__(cls)
        obj._data = data
        obj._axes = tuple(axes)
        obj._lookups = tuple(lookups)
        obj._positional = PositionalIndex(obj)
        return obj

    @property
    def data(self):
        """The backing NumPy array."""
        return self._data

    @property
    def axes(self):
        """A tuple holding the labels of each dimension."""
        return self._axes

    @property
    def lookups(self):
        """A tuple holding one label to position mapping per dimension."""
        return self._lookups

    @property
    def shape(self):
        """A tuple of integers describing the length of each dimension of
        the array."""
        return self._data.shape

    @property
    def dtype(self):
        """The NumPy data type."""
        return self._data.dtype

    @property
    def ndim(self):
        """Number of dimensions."""
        return self._data.ndim

    @property
    def size(self):
        """The total number of elements in the array."""
        return self._data.size

    @property
    def nbytes(self):
        """The total number of bytes of the backing store."""
        return self._data.nbytes

    @property
    def positional(self):
        """Get and set elements by integer position instead of label, e.g.
        ``a.positional[0, 1]``."""
        return self._positional

    def is_empty(self):
        """True if any dimension has length zero."""
        return self._data.size == 0

    def __len__(self):
        if not self.ndim:
            raise TypeError("len() of unsized object")
        return self.shape[0]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy() if copy else self._data
        return self._data.astype(dtype)

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        from axisarray.broadcast import apply_ufunc

        return apply_ufunc(ufunc, method, *inputs, **kwargs)

    def __getitem__(self, selection):
        """Retrieve an element or a slice of the array by label.

        Parameters
        ----------
        selection : label, tuple, AxisArrayKey
            One label (or ``:``) per dimension. ``:`` keeps the whole
            dimension; labels pick a single position and drop the dimension.

        Returns
        -------
        out : scalar or DenseAxisArray
            A single element if no dimension is kept, otherwise a new array
            over the kept axes holding a copy of the selected region.

        Examples
        --------
        >>> import axisarray
        >>> a = axisarray.array([[1, 2], [3, 4]], ['a', 'b'], range(2, 4))
        >>> a['a', 2]
        np.int64(1)
        >>> a['b', :].axes
        (range(2, 4),)

        """

        selection = normalize_selection(_as_selection(selection))
        resolution = resolve_selection(selection, self.shape, self._lookups)
        if not has_keep(selection):
            return self._data[resolution.positions]
        return self._get_slice(resolution)

    def _get_slice(self, resolution):
        logger.debug("Slicing %d-dimensional array keeping dimensions %s", self.ndim,
                     resolution.kept)
        data = self._data[resolution.positions].copy()
        axes = tuple(self._axes[d] for d in resolution.kept)
        lookups = tuple(self._lookups[d] for d in resolution.kept)
        return type(self)._new(data, axes, lookups)

    def __setitem__(self, selection, value):
        """Modify the element (or a kept region) at the given labels.

        Kept dimensions (``:``) assign `value` to the whole region, using
        NumPy broadcasting rules. A :class:`DenseAxisArray` value must carry
        exactly the kept axes, in order, otherwise :class:`AxisMismatchError`
        is raised.
        """

        selection = normalize_selection(_as_selection(selection))
        resolution = resolve_selection(selection, self.shape, self._lookups)
        if isinstance(value, DenseAxisArray):
            kept_axes = tuple(self._axes[d] for d in resolution.kept)
            if not _same_axes(value.axes, kept_axes):
                raise AxisMismatchError(value.axes, kept_axes)
            value = value.data
        self._data[resolution.positions] = value

    def get(self, *labels):
        """Retrieve the element named by one label per dimension.

        Unlike ``__getitem__`` every argument is a label, so tuple-valued
        labels and slices need no wrapping. A single :class:`AxisArrayKey` may
        be given instead of the labels.
        """
        if len(labels) == 1 and isinstance(labels[0], AxisArrayKey):
            labels = labels[0].labels
        positions = self._resolve_labels(labels)
        return self._data[positions]

    def set(self, value, *labels):
        """Write `value` to the element named by one label per dimension."""
        if len(labels) == 1 and isinstance(labels[0], AxisArrayKey):
            labels = labels[0].labels
        positions = self._resolve_labels(labels)
        self._data[positions] = value

    def _resolve_labels(self, labels):
        selection = tuple(Label(label) for label in labels)
        return resolve_selection(selection, self.shape, self._lookups).positions

    def is_assigned(self, *labels):
        """Whether `labels` name an element holding a value.

        Labels resolve as in :meth:`get`, including omitted trailing
        dimensions of length 1. Never raises for unknown labels or a wrong
        number of labels, returns False instead. With object dtype, slots holding ``None`` (the fill of
        :func:`axisarray.empty`) are unassigned; with any other dtype every
        slot is assigned.
        """
        if len(labels) == 1 and isinstance(labels[0], AxisArrayKey):
            labels = labels[0].labels
        try:
            positions = self._resolve_labels(labels)
        except (KeyNotFoundError, BoundsError):
            return False
        if self.dtype.hasobject:
            return self._data[positions] is not None
        return True

    def __contains__(self, key):
        return _as_selection(key) in self.keys()

    def keys(self):
        """Return a lazy view over the keys of all elements, in storage
        order."""
        return AxisArrayKeys(self._axes, self._lookups)

    def values(self):
        """Iterate over the elements in storage order."""
        return iter(self._data.flat)

    def items(self):
        """Iterate over ``(key, value)`` pairs in storage order."""
        return zip(self.keys(), self._data.flat)

    def eachindex(self):
        """Iterate over the positional index tuples of all elements."""
        return np.ndindex(*self.shape)

    def __iter__(self):
        return self.values()

    def fill(self, value):
        """Set every element to `value`, in place."""
        self._data.fill(value)

    def copy(self):
        """Return a copy with its own backing store."""
        return type(self)._new(self._data.copy(), self._axes, self._lookups)

    def similar(self, dtype=None, fill_value=None):
        """Return a new array with the same axes and a freshly filled backing
        store, optionally of another data type.

        The fill follows :func:`axisarray.empty`: zero for non-object dtypes,
        ``None`` (unassigned) for object dtype, unless `fill_value` is given.
        """
        dtype = self.dtype if dtype is None else np.dtype(dtype)
        fill_value = normalize_fill_value(fill_value, dtype)
        data = np.full(self.shape, fill_value, dtype=dtype)
        return type(self)._new(data, self._axes, self._lookups)

    def astype(self, dtype):
        """Return a copy of the array cast to `dtype`, with the same axes."""
        return type(self)._new(self._data.astype(dtype), self._axes, self._lookups)

    def equals(self, other):
        """True if `other` has the same axes and equal elements."""
        if not isinstance(other, DenseAxisArray):
            return False
        return (self._axes == other._axes and
                self.shape == other.shape and
                bool(np.array_equal(self._data, other._data)))

    def repeat(self, repeats, axis=None):
        """Repeat the elements of the backing store.

        Deprecated: the result is a plain ``numpy.ndarray`` because repeated
        labels cannot form a valid axis.
        """
        warnings.warn(
            "DenseAxisArray.repeat() drops the axis labels and returns a plain "
            "numpy array; use numpy.repeat(a.data, ...) instead",
            FutureWarning,
            stacklevel=2,
        )
        return np.repeat(self._data, repeats, axis=axis)

    def __repr__(self):
        from axisarray.display import render

        return render(self)

    @property
    def info(self):
        """Report some diagnostic information about the array.

        Examples
        --------
        >>> import axisarray
        >>> a = axisarray.zeros(['a', 'b'], range(3), dtype='i4')
        >>> a.info
        Type         : axisarray.core.DenseAxisArray
        Data type    : int32
        Shape        : (2, 3)
        Dimension 0  : ['a', 'b']
        Dimension 1  : range(0, 3)
        No. elements : 6
        No. bytes    : 24

        """
        return InfoReporter(self)

    def info_items(self):

        def typestr(o):
            return f"{type(o).__module__}.{type(o).__name__}"

        def bytestr(n):
            if n > 2**10:
                return f"{n} ({human_readable_size(n)})"
            else:
                return str(n)

        opts = display_options()
        items = [
            ("Type", typestr(self)),
            ("Data type", str(self.dtype)),
            ("Shape", str(self.shape)),
        ]
        for dimension, ax in enumerate(self._axes):
            items += [(f"Dimension {dimension}",
                       abbreviate(ax, opts["axis_threshold"], opts["edgeitems"]))]
        items += [
            ("No. elements", str(self.size)),
            ("No. bytes", bytestr(self.nbytes)),
        ]
        return items

    def __getstate__(self):
        return {"data": self._data, "axes": self._axes}

    def __setstate__(self, state):
        self.__init__(state["data"], *state["axes"])


class PositionalIndex:

    def __init__(self, array):
        self.array = array

    def __getitem__(self, selection):
        positions = normalize_positions(ensure_tuple(selection), self.array.shape)
        return self.array.data[positions]

    def __setitem__(self, selection, value):
        positions = normalize_positions(ensure_tuple(selection), self.array.shape)
        self.array.data[positions] = value
