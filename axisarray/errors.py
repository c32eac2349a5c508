class _BaseAxisArrayError(ValueError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class _BaseAxisArrayIndexError(IndexError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class ShapeMismatchError(_BaseAxisArrayError):
    _msg = "axis lengths {0} do not match data shape {1}"


class AxisMismatchError(ShapeMismatchError):
    _msg = "axes of the assigned array {0!r} do not match the selected axes {1!r}"


class DuplicateLabelError(_BaseAxisArrayError):
    _msg = "repeated label {1!r} in dimension {0}; axes must have unique labels"

    def __init__(self, dimension, label):
        super().__init__(dimension, label)
        self.dimension = dimension
        self.label = label


class KeyNotFoundError(KeyError):

    def __init__(self, dimension, label):
        super().__init__(f"label {label!r} not found in dimension {dimension}")
        self.dimension = dimension
        self.label = label

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class BoundsError(_BaseAxisArrayIndexError):
    _msg = "wrong number of selectors for array; expected {0}, got {1}"

    def __init__(self, ndim, nselectors):
        super().__init__(ndim, nselectors)
        self.ndim = ndim
        self.nselectors = nselectors


class RankMismatchError(BoundsError):
    _msg = ("too few labels for array; expected {0}, got {1}, and the omitted "
            "trailing dimensions do not all have length 1")


class BoundsCheckError(_BaseAxisArrayIndexError):
    _msg = "index out of bounds for dimension with length {0}"


class UnsupportedOperationError(TypeError):

    def __init__(self, reason):
        super().__init__(f"unsupported operation: {reason}")
        self.reason = reason


def err_too_many_selectors(selection, ndim):
    raise BoundsError(ndim, len(selection))


def err_boundscheck(dim_len):
    raise BoundsCheckError(dim_len)


def err_label_range(dim_sel):
    raise IndexError(
        f"label ranges are not supported, got {dim_sel!r}; use ':' to keep a "
        "whole axis or wrap the slice in Label(...) if it is a label"
    )
