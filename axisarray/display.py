import numpy as np

from axisarray.config import display_options
from axisarray.util import abbreviate


def _data_summary(data):
    if data.ndim == 0:
        shape = "0-dimensional"
    elif data.ndim == 1:
        shape = f"{data.shape[0]}-element"
    else:
        shape = "×".join(str(n) for n in data.shape)
    return f"a {shape} ndarray of {data.dtype}"


def summary(array, opts=None):
    """Header lines describing the dimensionality, data type and axes of
    `array`."""
    opts = display_options() if opts is None else opts
    lines = [f"{array.ndim}-dimensional {type(array).__name__}"
             f"{{{array.dtype},{array.ndim},...}} with index sets:"]
    for dimension, ax in enumerate(array.axes):
        lines.append(f"    Dimension {dimension}, "
                     f"{abbreviate(ax, opts['axis_threshold'], opts['edgeitems'])}")
    lines.append(f"And data, {_data_summary(array.data)}")
    return "\n".join(lines)


def format_matrix(data, opts):
    return np.array2string(data, max_line_width=opts["linewidth"],
                           threshold=opts["threshold"], edgeitems=opts["edgeitems"])


def _slice_header(array, idxs):
    labels = ", ".join(repr(array.axes[d + 2][i]) for d, i in enumerate(idxs))
    return f"[:, :, {labels}] ="


def format_nd(array, opts):
    """Format an array of rank > 2 as a sequence of labeled 2-D slices."""
    idxs = list(np.ndindex(*array.shape[2:]))
    edge = opts["edgeitems"]
    if len(idxs) > opts["slice_threshold"] and 2 * edge < len(idxs):
        # None marks the elided middle
        idxs = idxs[:edge] + [None] + idxs[len(idxs) - edge:]
    blocks = []
    for idx in idxs:
        if idx is None:
            blocks.append("...")
            continue
        matrix = array.data[(slice(None), slice(None)) + idx]
        blocks.append(_slice_header(array, idx) + "\n" + format_matrix(matrix, opts))
    return "\n\n".join(blocks)


def render(array):
    """Render `array` as its axes followed by its data.

    An array without elements renders the header only.

    Examples
    --------
    >>> import axisarray
    >>> a = axisarray.array([[1, 2], [3, 4]], ['a', 'b'], range(2, 4))
    >>> print(axisarray.render(a))
    2-dimensional DenseAxisArray{int64,2,...} with index sets:
        Dimension 0, ['a', 'b']
        Dimension 1, range(2, 4)
    And data, a 2×2 ndarray of int64:
    [[1 2]
     [3 4]]

    """
    opts = display_options()
    text = summary(array, opts)
    if array.is_empty():
        return text
    if array.ndim <= 2:
        body = format_matrix(array.data, opts)
    else:
        body = format_nd(array, opts)
    return text + ":\n" + body
