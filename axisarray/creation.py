import numpy as np

from axisarray.core import DenseAxisArray
from axisarray.util import normalize_axes, normalize_dtype, normalize_fill_value


def full(fill_value, *axes, dtype=None):
    """Create an array over `axes` with every element set to `fill_value`.

    Parameters
    ----------
    fill_value : object
        Value of every element. ``None`` means the default fill of `dtype`
        (zero, or the unassigned marker ``None`` for object dtype).
    *axes : sequence
        One sequence of unique labels per dimension.
    dtype : string or dtype, optional
        NumPy dtype. Inferred from `fill_value` if not given.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.full(1.5, ['a', 'b'], range(1, 3))
    >>> a['b', 2]
    np.float64(1.5)

    """
    axes = normalize_axes(axes)
    if dtype is None:
        dtype = np.asarray(fill_value).dtype if fill_value is not None else None
    dtype = normalize_dtype(dtype)
    fill_value = normalize_fill_value(fill_value, dtype)
    data = np.full(tuple(len(ax) for ax in axes), fill_value, dtype=dtype)
    return DenseAxisArray(data, *axes)


def empty(*axes, dtype=None):
    """Create an array over `axes` without providing its contents.

    Notes
    -----
    The backing store is never left uninitialized. Elements of non-object
    dtypes start at zero, which counts as assigned. Elements of object dtype
    start as ``None``, which :meth:`DenseAxisArray.is_assigned` reports as
    unassigned.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.empty(['a', 'b'], range(1, 3), dtype=float)
    >>> a['a', 2] = 5.0
    >>> a['a', 2]
    np.float64(5.0)
    >>> a['b', 1]
    np.float64(0.0)

    """
    return full(None, *axes, dtype=normalize_dtype(dtype))


def zeros(*axes, dtype=None):
    """Create an array over `axes` filled with zeros."""
    return full(0, *axes, dtype=normalize_dtype(dtype))


def ones(*axes, dtype=None):
    """Create an array over `axes` filled with ones."""
    return full(1, *axes, dtype=normalize_dtype(dtype))


def array(data, *axes, dtype=None, copy=True):
    """Create an array from `data` and one axis per dimension.

    Unlike the :class:`DenseAxisArray` constructor the data is copied by
    default, so the new array owns its backing store.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.array([[1, 2], [3, 4]], ['a', 'b'], range(2, 4))
    >>> a['b', 3], a['a', 2]
    (np.int64(4), np.int64(1))

    """
    if copy:
        data = np.array(data, dtype=dtype)
    else:
        data = np.asarray(data, dtype=dtype)
    return DenseAxisArray(data, *axes)


def empty_like(a, dtype=None):
    """Create an array with the same axes as `a`, filled like :func:`empty`."""
    return a.similar(dtype=dtype)


def zeros_like(a, dtype=None):
    return a.similar(dtype=dtype, fill_value=0)


def ones_like(a, dtype=None):
    return a.similar(dtype=dtype, fill_value=1)


def full_like(a, fill_value, dtype=None):
    return a.similar(dtype=dtype, fill_value=fill_value)
