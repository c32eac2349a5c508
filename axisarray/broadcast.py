"""Elementwise maps over labeled arrays.

Results are computed eagerly on the backing stores and re-wrapped with the
axes of the labeled operand. Only one labeled operand is supported per map,
and pending (deferred) maps cannot be fused into another map.
"""
import logging

import numpy as np

from axisarray.core import DenseAxisArray
from axisarray.errors import ShapeMismatchError, UnsupportedOperationError
from axisarray.indexing import normalize_integer_selection

logger = logging.getLogger(__name__)


class Broadcasted:
    """A pending elementwise map, evaluated by :meth:`materialize`.

    A pending map cannot be indexed or used as an operand of another map;
    materialize it first.
    """

    def __init__(self, func, operands, otypes=None):
        self.func = func
        self.operands = tuple(operands)
        self.otypes = otypes

    def materialize(self):
        return map_elementwise(self.func, *self.operands, otypes=self.otypes)

    def __getitem__(self, selection):
        raise UnsupportedOperationError("slicing a deferred broadcast")

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        raise UnsupportedOperationError("nested broadcast")

    def __repr__(self):
        name = getattr(self.func, "__name__", repr(self.func))
        return f"<{type(self).__name__} {name} over {len(self.operands)} operand(s)>"


def broadcasted(func, *operands, otypes=None):
    """Return a pending elementwise map of `func` over `operands`."""
    check_not_nested(operands)
    return Broadcasted(func, operands, otypes=otypes)


def materialize(obj):
    """Evaluate `obj` if it is a pending map, otherwise return it unchanged."""
    if isinstance(obj, Broadcasted):
        return obj.materialize()
    return obj


def check_not_nested(operands):
    for op in operands:
        if isinstance(op, Broadcasted):
            raise UnsupportedOperationError("nested broadcast")


def find_labeled_array(operands):
    labeled = [op for op in operands if isinstance(op, DenseAxisArray)]
    if len(labeled) > 1:
        raise UnsupportedOperationError("multiple labeled operands")
    return labeled[0] if labeled else None


def unpack_labeled_arrays(operands):
    return tuple(op.data if isinstance(op, DenseAxisArray) else op for op in operands)


def rewrap(array, data):
    """Wrap `data` with the axes of `array`; shapes must agree."""
    data = np.asarray(data)
    if data.shape != array.shape:
        raise ShapeMismatchError(array.shape, data.shape)
    return type(array)._new(data, array.axes, array.lookups)


def map_elementwise(func, *operands, otypes=None):
    """Apply `func` to every element and return an array of the same shape.

    Parameters
    ----------
    func : callable
        Called once per element with one argument per operand.
    *operands
        At most one :class:`DenseAxisArray`, plus scalars or plain arrays that
        broadcast against it.
    otypes : str or list of dtypes, optional
        Output data type, as for :class:`numpy.vectorize`; results are cast to
        it. By default the data type is promoted over all results, results
        that are themselves sequences are stored in an object array, and an
        empty labeled operand keeps its own data type.

    Returns
    -------
    out : DenseAxisArray or ndarray
        A labeled array carrying the axes of the labeled operand, or a plain
        array if no operand is labeled.

    Raises
    ------
    UnsupportedOperationError
        With more than one labeled operand, or a pending map as operand.
    ShapeMismatchError
        If the plain operands would enlarge the labeled operand's shape.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.array([[1, 2], [3, 4]], ['a', 'b'], [1, 2])
    >>> axisarray.map_elementwise(lambda x: x + 1, a)['a', 1]
    np.int64(2)

    """

    check_not_nested(operands)
    array = find_labeled_array(operands)
    dtype = normalize_otypes(otypes)
    if array is not None and dtype is None and array.is_empty():
        # no results to promote over
        dtype = array.dtype

    # one call per element, every result kept as an object
    ufunc = np.frompyfunc(func, len(operands), 1)
    if array is None:
        return collect_results(ufunc(*operands), dtype)

    data = collect_results(ufunc(*unpack_labeled_arrays(operands)), dtype)
    logger.debug("Mapped %s over array with shape %s",
                 getattr(func, "__name__", func), array.shape)
    return rewrap(array, data)


def normalize_otypes(otypes):
    if otypes is None:
        return None
    if isinstance(otypes, str):
        if len(otypes) != 1:
            raise ValueError(f"expected a single output type, got {otypes!r}")
        return np.dtype(otypes)
    otypes = list(otypes)
    if len(otypes) != 1:
        raise ValueError(f"expected a single output type, got {otypes!r}")
    return np.dtype(otypes[0])


def collect_results(result, dtype=None):
    """Build a store from the object array of results of a mapped function."""

    if not isinstance(result, np.ndarray):
        # 0-dimensional operands give back the bare result
        boxed = np.empty((), dtype=object)
        boxed[()] = result
        result = boxed

    if dtype is not None and dtype.hasobject:
        return result
    if dtype is not None:
        return result.astype(dtype)

    try:
        data = np.array(result.tolist())
    except ValueError:
        # ragged sequences
        return result
    if data.shape != result.shape:
        # results are sequences themselves, keep them as elements
        return result
    return data


def _reduced_dims(axis, ndim):
    if axis is None:
        return tuple(range(ndim))
    if isinstance(axis, tuple):
        dims = tuple(normalize_integer_selection(d, ndim) for d in axis)
    else:
        dims = (normalize_integer_selection(axis, ndim),)
    if len(set(dims)) != len(dims):
        raise ValueError(f"duplicate value in 'axis': {axis!r}")
    return dims


def apply_ufunc(ufunc, method, *inputs, **kwargs):
    """Implementation of ``DenseAxisArray.__array_ufunc__``.

    ``__call__`` maps over the single labeled input and keeps its axes.
    ``reduce`` drops the reduced axes, returning a scalar when none remain.
    Other methods, ``out=`` and ``keepdims=True`` are left to NumPy, which
    raises ``TypeError``.
    """

    out = kwargs.pop("out", None)
    if out is not None and any(o is not None for o in ensure_out_tuple(out)):
        return NotImplemented
    if method not in ("__call__", "reduce") or kwargs.get("keepdims"):
        return NotImplemented

    check_not_nested(inputs)
    array = find_labeled_array(inputs)
    operands = unpack_labeled_arrays(inputs)

    if method == "__call__":
        result = ufunc(*operands, **kwargs)
        logger.debug("Applied ufunc %s to array with shape %s", ufunc.__name__,
                     array.shape)
        if ufunc.nout > 1:
            return tuple(rewrap(array, r) for r in result)
        return rewrap(array, result)

    axis = kwargs.pop("axis", 0)
    dims = _reduced_dims(axis, array.ndim)
    result = ufunc.reduce(*operands, axis=dims, **kwargs)
    kept = tuple(d for d in range(array.ndim) if d not in dims)
    logger.debug("Reduced array with shape %s over dimensions %s with ufunc %s",
                 array.shape, dims, ufunc.__name__)
    if not kept:
        return result
    axes = tuple(array.axes[d] for d in kept)
    lookups = tuple(array.lookups[d] for d in kept)
    return type(array)._new(np.asarray(result), axes, lookups)


def ensure_out_tuple(out):
    if not isinstance(out, tuple):
        out = (out,)
    return out
