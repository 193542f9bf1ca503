# core/equality.py
from __future__ import annotations
from typing import Optional

import numpy as np


def matrices_identical(a: Optional[np.ndarray], b: Optional[np.ndarray]) -> bool:
    """
    Exact comparison of two matrices: same dimensions and every entry equal.

    No floating point tolerance is applied and dtype is ignored, so an integer
    matrix and the float matrix with the same values compare identical.
    ``None`` (no matrix) is never identical to anything, itself included.
    """
    if a is None or b is None:
        return False
    return bool(np.array_equal(a, b))
