import numpy as np
import pytest
from utils.linops import invert_matrix


class CountingInvert:
    """Test double wrapping the real inversion routine and counting calls."""
    def __init__(self):
        self.calls = 0
        self.kwargs = []

    def __call__(self, A, **kwargs):
        self.calls += 1
        self.kwargs.append(kwargs)
        return invert_matrix(A, **kwargs)


@pytest.fixture
def counting_invert():
    return CountingInvert()

@pytest.fixture
def diag2():
    return np.array([[2.0, 0.0], [0.0, 2.0]])

@pytest.fixture
def general3():
    return np.array([[4.0, 7.0, 2.0],
                     [3.0, 6.0, 1.0],
                     [2.0, 5.0, 3.0]])

@pytest.fixture
def singular2():
    return np.array([[1.0, 2.0], [2.0, 4.0]])

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog

@pytest.fixture
def near_singular3():
    # rows in arithmetic progression: singular, but no LU pivot is exactly zero in float
    return np.array([[0.1, 0.2, 0.3],
                     [0.4, 0.5, 0.6],
                     [0.7, 0.8, 0.9]])
