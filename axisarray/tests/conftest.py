import numpy as np
import pytest

import axisarray


@pytest.fixture
def a2d():
    # rows 'a', 'b'; columns labeled 2 and 3
    return axisarray.array([[1, 2], [3, 4]], ['a', 'b'], range(2, 4))


@pytest.fixture
def a3d():
    data = np.arange(24).reshape(2, 3, 4)
    return axisarray.array(data, ['x', 'y'], [10, 20, 30], ('p', 'q', 'r', 's'))
