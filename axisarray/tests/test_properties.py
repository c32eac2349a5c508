import math

import numpy as np
import pytest
from numpy.testing import assert_array_equal

pytest.importorskip("hypothesis")

import hypothesis.extra.numpy as npst
import hypothesis.strategies as st
from hypothesis import assume, given

import axisarray
from axisarray import DuplicateLabelError, UnsupportedOperationError

labels = st.one_of(
    st.integers(-100, 100),
    st.text(min_size=1, max_size=3),
    st.tuples(st.integers(0, 3), st.integers(0, 3)),
)


def axis_of(length):
    return st.one_of(
        st.lists(labels, min_size=length, max_size=length, unique=True),
        st.integers(-5, 5).map(lambda start: range(start, start + length)),
    )


@st.composite
def labeled_arrays(draw, min_dims=1, max_dims=3, max_side=4):
    shape = draw(npst.array_shapes(min_dims=min_dims, max_dims=max_dims, min_side=1,
                                   max_side=max_side))
    data = draw(npst.arrays(dtype=np.int64, shape=shape,
                            elements=st.integers(-1000, 1000)))
    axes = [draw(axis_of(n)) for n in shape]
    return axisarray.array(data, *axes)


@st.composite
def arrays_with_key(draw):
    a = draw(labeled_arrays())
    key = draw(st.sampled_from(list(a.keys())))
    return a, key


@given(labeled_arrays())
def test_shape_matches_axes(a):
    assert tuple(len(ax) for ax in a.axes) == a.shape
    for ax, lookup in zip(a.axes, a.lookups):
        assert len(ax) == len(lookup)
        for i, label in enumerate(ax):
            assert i == lookup[label]


@given(st.lists(labels, min_size=1, max_size=5))
def test_duplicate_labels(axis):
    data = np.zeros(len(axis))
    if len(set(axis)) == len(axis):
        assert len(axis) == len(axisarray.DenseAxisArray(data, axis))
    else:
        with pytest.raises(DuplicateLabelError):
            axisarray.DenseAxisArray(data, axis)


@given(arrays_with_key(), st.integers(-1000, 1000))
def test_set_get(args, value):
    a, key = args
    a.set(value, *key)
    assert value == a.get(*key)
    assert value == a[key]


@given(arrays_with_key())
def test_is_assigned(args):
    a, key = args
    assert a.is_assigned(*key)
    assert not a.is_assigned(*key, 'extra')
    assert not a.is_assigned(object())


@given(labeled_arrays(), st.integers(101, 200))
def test_is_assigned_outside(a, label):
    key = [ax[0] for ax in a.axes]
    key[0] = label
    assume(label not in a.lookups[0])
    assert not a.is_assigned(*key)


@given(arrays_with_key())
def test_label_slicing_equals_get(args):
    a, key = args
    assert a.get(*key) == a[key]
    assert a.get(*key) == a[tuple(axisarray.Label(label) for label in key)]


@given(arrays_with_key(), st.data())
def test_one_kept_slicing(args, data):
    a, key = args
    kept = data.draw(st.integers(0, a.ndim - 1))
    selection = tuple(axisarray.KEEP if d == kept else axisarray.Label(label)
                      for d, label in enumerate(key))
    b = a[selection]
    assert (a.axes[kept],) == b.axes
    for label in a.axes[kept]:
        labels = list(key)
        labels[kept] = label
        assert a.get(*labels) == b.get(label)


@given(labeled_arrays())
def test_keys_resolve(a):
    keys = a.keys()
    assert math.prod(len(ax) for ax in a.axes) == len(keys)
    for key, value in zip(keys, a.values()):
        assert value == a.get(*key)
        assert key in a


@given(labeled_arrays())
def test_map_elementwise_shift(a):
    b = axisarray.map_elementwise(lambda x: x + 1, a)
    assert a.axes == b.axes
    assert_array_equal(a.data + 1, b.data)


@given(labeled_arrays(), labeled_arrays())
def test_two_labeled_operands(a, b):
    with pytest.raises(UnsupportedOperationError):
        axisarray.map_elementwise(lambda x, y: x + y, a, b)
