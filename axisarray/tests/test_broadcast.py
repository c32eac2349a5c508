import numpy as np
import pytest
from numpy.testing import assert_array_equal

import axisarray
from axisarray import (Broadcasted, DenseAxisArray, ShapeMismatchError,
                       UnsupportedOperationError, broadcasted, map_elementwise,
                       materialize)


@pytest.fixture
def a():
    return axisarray.array([[1, 2], [3, 4]], ['a', 'b'], [1, 2])


def test_map_elementwise(a):
    b = map_elementwise(lambda x: x + 1, a)
    assert isinstance(b, DenseAxisArray)
    assert a.axes == b.axes
    assert 2 == b['a', 1]
    assert 5 == b['b', 2]
    # source untouched
    assert 1 == a['a', 1]
    # lookups are shared, not rebuilt
    assert a.lookups[0] is b.lookups[0]


def test_map_elementwise_operands(a):
    b = map_elementwise(lambda x, y: x * y, a, 10)
    assert_array_equal([[10, 20], [30, 40]], b.data)

    # plain operands broadcast against the labeled one
    b = map_elementwise(lambda x, y: x - y, a, np.array([1, 2]))
    assert_array_equal([[0, 0], [2, 2]], b.data)
    assert a.axes == b.axes


def test_map_elementwise_otypes(a):
    b = map_elementwise(lambda x: x / 2, a, otypes=[float])
    assert np.dtype(float) == b.dtype
    assert 0.5 == b['a', 1]

    b = map_elementwise(lambda x: f"<{x}>", a, otypes=[object])
    assert '<4>' == b['b', 2]


def test_map_elementwise_promotes_results(a):
    # the first result is an int, later ones are floats
    b = map_elementwise(lambda x: 1 if x == 1 else x + 0.5, a)
    assert np.dtype(float) == b.dtype
    assert 1.0 == b['a', 1]
    assert 4.5 == b['b', 2]
    for key, value in a.items():
        assert (1 if value == 1 else value + 0.5) == b[key]

    b = map_elementwise(lambda x: None if x == 4 else x, a)
    assert np.dtype(object) == b.dtype
    assert b['b', 2] is None
    assert 3 == b['b', 1]


def test_map_elementwise_calls_once_per_element():
    calls = []

    def record(x):
        calls.append(x)
        return x * 2

    a = axisarray.array([1, 2, 3], ['x', 'y', 'z'])
    b = map_elementwise(record, a)
    assert [1, 2, 3] == calls
    assert_array_equal([2, 4, 6], b.data)

    calls.clear()
    broadcasted(record, a).materialize()
    assert [1, 2, 3] == calls


def test_map_elementwise_sequence_results(a):
    b = map_elementwise(lambda x: (x, x), a)
    assert np.dtype(object) == b.dtype
    assert (4, 4) == b['b', 2]


def test_map_elementwise_otypes_cast(a):
    b = map_elementwise(lambda x: x + 0.5, a, otypes='i')
    assert np.dtype('i') == b.dtype
    assert 4 == b['b', 2]
    with pytest.raises(ValueError):
        map_elementwise(lambda x: x, a, otypes=[int, float])


def test_map_elementwise_zero_dimensional():
    a = axisarray.array(3)
    b = map_elementwise(lambda x: x * 1.5, a)
    assert () == b.shape
    assert 4.5 == b[()]


def test_map_elementwise_multiple_labeled(a):
    with pytest.raises(UnsupportedOperationError) as excinfo:
        map_elementwise(lambda x, y: x + y, a, a)
    assert 'multiple labeled operands' == excinfo.value.reason


def test_map_elementwise_enlarging(a):
    with pytest.raises(ShapeMismatchError):
        map_elementwise(lambda x, y: x + y, a, np.zeros((3, 2, 2)))


def test_map_elementwise_no_labeled():
    b = map_elementwise(lambda x: x * 2, np.array([1, 2, 3]))
    assert not isinstance(b, DenseAxisArray)
    assert_array_equal([2, 4, 6], b)


def test_map_elementwise_empty():
    a = axisarray.zeros(['a', 'b'], [], dtype='i4')
    b = map_elementwise(lambda x: x + 1, a)
    assert (2, 0) == b.shape
    assert np.dtype('i4') == b.dtype
    assert a.axes == b.axes


def test_broadcasted(a):
    pending = broadcasted(lambda x: x * 3, a)
    assert isinstance(pending, Broadcasted)
    b = pending.materialize()
    assert 12 == b['b', 2]
    assert materialize(pending).equals(b)
    # anything else passes through
    assert materialize(a) is a


def test_broadcasted_slicing(a):
    pending = broadcasted(lambda x: x * 3, a)
    with pytest.raises(UnsupportedOperationError) as excinfo:
        pending['a', 1]
    assert 'slicing a deferred broadcast' == excinfo.value.reason


def test_nested_broadcast(a):
    pending = broadcasted(lambda x: x * 3, a)
    with pytest.raises(UnsupportedOperationError) as excinfo:
        map_elementwise(lambda x: x, pending)
    assert 'nested broadcast' == excinfo.value.reason
    with pytest.raises(UnsupportedOperationError):
        broadcasted(lambda x: x, pending)
    with pytest.raises(UnsupportedOperationError):
        np.add(pending, 1)
    with pytest.raises(UnsupportedOperationError):
        a + pending


def test_operators(a):
    b = a + 1
    assert isinstance(b, DenseAxisArray)
    assert a.axes == b.axes
    assert_array_equal([[2, 3], [4, 5]], b.data)

    assert_array_equal([[-1, -2], [-3, -4]], (-a).data)
    assert_array_equal([[2.0, 4.0], [6.0, 8.0]], (a * 2.0).data)
    assert_array_equal([[0, 1], [1, 2]], (a // 2).data)
    assert 7 == (10 - a)['b', 1]


def test_comparison(a):
    b = a == 3
    assert isinstance(b, DenseAxisArray)
    assert np.dtype(bool) == b.dtype
    assert b['b', 1]
    assert not b['a', 1]


def test_ufunc_call(a):
    b = np.sqrt(a)
    assert a.axes == b.axes
    assert 2.0 == b['b', 2]

    q, r = np.divmod(a, 3)
    assert a.axes == q.axes == r.axes
    assert 1 == q['b', 1]
    assert 0 == r['b', 1]


def test_ufunc_multiple_labeled(a):
    with pytest.raises(UnsupportedOperationError):
        a + a


def test_ufunc_enlarging(a):
    with pytest.raises(ShapeMismatchError):
        a + np.zeros((3, 2, 2))


def test_reduce(a):
    b = np.add.reduce(a)
    assert isinstance(b, DenseAxisArray)
    assert (a.axes[1],) == b.axes
    assert 4 == b[1]
    assert 6 == b[2]

    b = np.add.reduce(a, axis=1)
    assert (a.axes[0],) == b.axes
    assert 3 == b['a']
    assert 7 == b['b']

    b = np.add.reduce(a, axis=-1)
    assert (a.axes[0],) == b.axes


def test_reduce_all(a):
    assert 10 == np.add.reduce(a, axis=None)
    assert 10 == np.add.reduce(a, axis=(0, 1))
    assert 10 == np.sum(a)
    assert 4 == np.max(a)


def test_reduce_errors(a):
    with pytest.raises(IndexError):
        np.add.reduce(a, axis=2)
    with pytest.raises(ValueError):
        np.add.reduce(a, axis=(0, 0))


def test_unsupported_methods(a):
    with pytest.raises(TypeError):
        np.add.accumulate(a)
    with pytest.raises(TypeError):
        np.add.outer(a, a)
    with pytest.raises(TypeError):
        np.add(a, 1, out=np.empty((2, 2), dtype=int))
    with pytest.raises(TypeError):
        np.add.reduce(a, keepdims=True)


def test_repr(a):
    pending = broadcasted(np.negative, a)
    assert '<Broadcasted negative over 1 operand(s)>' == repr(pending)
