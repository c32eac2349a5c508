import collections
import numbers
from dataclasses import dataclass
from typing import Any, Tuple, Union

from axisarray.errors import (BoundsError, KeyNotFoundError, RankMismatchError,
                              err_boundscheck, err_label_range, err_too_many_selectors)


@dataclass(frozen=True)
class Label:
    """Select the single element at `value` along one dimension."""

    value: Any


@dataclass(frozen=True)
class KeepAxis:
    """Keep the whole of one dimension (the ``:`` marker)."""


KEEP = KeepAxis()

Selector = Union[Label, KeepAxis]


def is_integer(x):
    return isinstance(x, numbers.Integral)


def ensure_tuple(v):
    if not isinstance(v, tuple):
        v = (v,)
    return v


def normalize_integer_selection(dim_sel, dim_len):

    if not is_integer(dim_sel):
        raise TypeError(f"positional indices must be integers, got {dim_sel!r}")

    # normalize type to int
    dim_sel = int(dim_sel)

    # handle wraparound
    if dim_sel < 0:
        dim_sel = dim_len + dim_sel

    # handle out of bounds
    if dim_sel >= dim_len or dim_sel < 0:
        err_boundscheck(dim_len)

    return dim_sel


def normalize_positions(selection, shape):
    selection = ensure_tuple(selection)
    if len(selection) != len(shape):
        raise BoundsError(len(shape), len(selection))
    return tuple(normalize_integer_selection(dim_sel, dim_len)
                 for dim_sel, dim_len in zip(selection, shape))


def normalize_selector(dim_sel) -> Selector:
    match dim_sel:
        case Label() | KeepAxis():
            return dim_sel
        case slice(start=None, stop=None, step=None):
            return KEEP
        case slice():
            err_label_range(dim_sel)
        case _:
            return Label(dim_sel)


def normalize_selection(selection) -> Tuple[Selector, ...]:
    """Turn the argument of ``__getitem__`` into one selector per given
    dimension. A bare tuple always means one entry per dimension; wrap a tuple
    label in :class:`Label` to select it on a single dimension."""
    return tuple(normalize_selector(dim_sel) for dim_sel in ensure_tuple(selection))


def has_keep(selection) -> bool:
    return any(isinstance(dim_sel, KeepAxis) for dim_sel in selection)


def resolve_label(lookup, label, dimension):
    try:
        return lookup[label]
    except (KeyError, TypeError):
        # unhashable labels cannot be in the axis either
        raise KeyNotFoundError(dimension, label) from None


Resolution = collections.namedtuple('Resolution', ('positions', 'kept'))
"""Positional form of a label selection.

Parameters
----------
positions
    One int or ``slice(None)`` per dimension of the array, usable directly on
    the backing store.
kept
    Dimensions selected with :class:`KeepAxis`, in order.

"""


def resolve_selection(selection, shape, lookups) -> Resolution:
    """Translate normalized selectors into store positions.

    Parameters
    ----------
    selection : tuple of Selector
        See :func:`normalize_selection`.
    shape : tuple of int
        Shape of the backing store.
    lookups : tuple of Mapping
        One label to position mapping per dimension.

    Raises
    ------
    BoundsError
        If there are more selectors than dimensions, or fewer while slicing.
    RankMismatchError
        If labels are omitted for trailing dimensions that are not singletons.
    KeyNotFoundError
        If a label is absent from its axis.

    """

    ndim = len(shape)
    nsel = len(selection)
    if nsel > ndim:
        err_too_many_selectors(selection, ndim)

    kept = tuple(d for d, dim_sel in enumerate(selection) if isinstance(dim_sel, KeepAxis))
    if nsel < ndim:
        if kept:
            # slicing requires every dimension to be spelled out
            raise BoundsError(ndim, nsel)
        if any(dim_len != 1 for dim_len in shape[nsel:]):
            raise RankMismatchError(ndim, nsel)

    positions = []
    for dimension, dim_sel in enumerate(selection):
        match dim_sel:
            case KeepAxis():
                positions.append(slice(None))
            case Label(value):
                positions.append(resolve_label(lookups[dimension], value, dimension))
            case _:
                raise TypeError(f"expected a selector, got {dim_sel!r}")

    # omitted singleton dimensions
    positions.extend(0 for _ in range(nsel, ndim))

    return Resolution(tuple(positions), kept)
