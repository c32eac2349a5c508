import logging
from collections.abc import Mapping
from textwrap import TextWrapper
from typing import Any, Dict, Tuple, Union

import numpy as np

from axisarray.config import default_dtype
from axisarray.errors import DuplicateLabelError, ShapeMismatchError

logger = logging.getLogger(__name__)


def normalize_axis(axis) -> Union[range, Tuple[Any, ...]]:
    """Convenience function to normalize one axis argument into an immutable
    sequence of labels."""

    if axis is None:
        raise TypeError('axis is None')

    # ranges are already immutable and have an arithmetic lookup
    if isinstance(axis, range):
        return axis

    # a string would silently become an axis of characters
    if isinstance(axis, (str, bytes)):
        raise TypeError('expected a sequence of labels for axis, got {!r}; '
                        'wrap a single label in a list'.format(axis))

    if isinstance(axis, np.ndarray):
        if axis.ndim != 1:
            raise ValueError('expected a 1-dimensional array for axis, got {} '
                             'dimensions'.format(axis.ndim))
        # plain Python scalars, so labels compare and hash like user input
        return tuple(axis.tolist())

    return tuple(axis)


def normalize_axes(axes) -> Tuple[Union[range, Tuple[Any, ...]], ...]:
    return tuple(normalize_axis(ax) for ax in axes)


class RangeLookup(Mapping):
    """Label to position mapping for a ``range`` axis, computed arithmetically
    instead of materializing a dict."""

    def __init__(self, axis: range):
        self._axis = axis

    @property
    def axis(self) -> range:
        return self._axis

    def __getitem__(self, label) -> int:
        try:
            return self._axis.index(label)
        except ValueError:
            raise KeyError(label) from None

    def __iter__(self):
        return iter(self._axis)

    def __len__(self):
        return len(self._axis)

    def __repr__(self):
        return f'{type(self).__name__}({self._axis!r})'


def build_lookup(axis, dimension: int = 0) -> Mapping:
    """Build the label to position mapping of one axis.

    Parameters
    ----------
    axis : range or tuple
        Normalized axis, see :func:`normalize_axis`.
    dimension : int
        Dimension the axis belongs to, reported in errors.

    Raises
    ------
    DuplicateLabelError
        If the axis contains a repeated label.
    TypeError
        If a label is not hashable.

    """

    if isinstance(axis, range):
        lookup = RangeLookup(axis)
        kind = 'range'
    else:
        lookup = {}
        for i, label in enumerate(axis):
            try:
                seen = label in lookup
            except TypeError as e:
                raise TypeError('labels must be hashable; dimension {} contains {!r}'
                                .format(dimension, label)) from e
            if seen:
                raise DuplicateLabelError(dimension, label)
            lookup[label] = i
        kind = 'dict'

    logger.debug("Built %s lookup for dimension %d with %d labels", kind, dimension,
                 len(lookup))
    return lookup


def check_axes_shape(axes, shape: Tuple[int, ...]):
    lengths = tuple(len(ax) for ax in axes)
    if lengths != tuple(shape):
        raise ShapeMismatchError(lengths, tuple(shape))


def normalize_dtype(dtype) -> np.dtype:
    if dtype is None:
        return default_dtype()
    return np.dtype(dtype)


def normalize_fill_value(fill_value, dtype: np.dtype):

    if dtype.hasobject:
        # None marks a slot as unassigned, anything else is stored as given
        return fill_value

    if fill_value is None:
        # zero-initialize, this is compatible with any non-object dtype
        return np.zeros((), dtype=dtype)[()]

    if dtype.kind == 'U' and not isinstance(fill_value, str):
        raise ValueError('fill_value {!r} is not valid for dtype {}; must be a '
                         'unicode string'.format(fill_value, dtype))

    try:
        fill_value = np.array(fill_value, dtype=dtype)[()]
    except (TypeError, ValueError) as e:
        # re-raise with our own error message to be helpful
        raise ValueError('fill_value {!r} is not valid for dtype {}; nested '
                         'exception: {}'.format(fill_value, dtype, e)) from e

    return fill_value


def human_readable_size(size) -> str:
    if size < 2**10:
        return '%s' % size
    elif size < 2**20:
        return '%.1fK' % (size / float(2**10))
    elif size < 2**30:
        return '%.1fM' % (size / float(2**20))
    else:
        return '%.1fG' % (size / float(2**30))


def abbreviate(seq, threshold: int, edgeitems: int) -> str:
    """Render a label sequence, eliding the middle if it is longer than
    `threshold`."""

    if isinstance(seq, range):
        # ranges already have a compact repr
        return repr(seq)
    if len(seq) <= threshold or 2 * edgeitems >= len(seq):
        return repr(list(seq))
    if not edgeitems:
        return '[...]'
    head = ', '.join(repr(x) for x in seq[:edgeitems])
    tail = ', '.join(repr(x) for x in seq[len(seq) - edgeitems:])
    return f'[{head}, ..., {tail}]'


def info_text_report(items: Dict[Any, Any]) -> str:
    keys = [k for k, v in items]
    max_key_len = max(len(k) for k in keys)
    report = ''
    for k, v in items:
        wrapper = TextWrapper(width=80,
                              initial_indent=k.ljust(max_key_len) + ' : ',
                              subsequent_indent=' '*max_key_len + ' : ')
        text = wrapper.fill(str(v))
        report += text + '\n'
    return report


def info_html_report(items) -> str:
    report = '<table class="axisarray-info">'
    report += '<tbody>'
    for k, v in items:
        report += '<tr>' \
                  '<th style="text-align: left">%s</th>' \
                  '<td style="text-align: left">%s</td>' \
                  '</tr>' \
                  % (k, v)
    report += '</tbody>'
    report += '</table>'
    return report


class InfoReporter:

    def __init__(self, obj):
        self.obj = obj

    def __repr__(self):
        items = self.obj.info_items()
        return info_text_report(items)

    def _repr_html_(self):
        items = self.obj.info_items()
        return info_html_report(items)
