# flake8: noqa
from axisarray.broadcast import Broadcasted, broadcasted, map_elementwise, materialize
from axisarray.config import config
from axisarray.core import DenseAxisArray
from axisarray.creation import (array, empty, empty_like, full, full_like, ones,
                                ones_like, zeros, zeros_like)
from axisarray.display import render
from axisarray.errors import (AxisMismatchError, BoundsCheckError, BoundsError, DuplicateLabelError,
                              KeyNotFoundError, RankMismatchError, ShapeMismatchError,
                              UnsupportedOperationError)
from axisarray.indexing import KEEP, KeepAxis, Label
from axisarray.keys import AxisArrayKey, AxisArrayKeys
from axisarray.version import version as __version__
