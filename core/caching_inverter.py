# core/caching_inverter.py
from __future__ import annotations
from typing import Callable, Optional

import numpy as np

from core.cacheable_matrix import CacheableMatrix
from core.equality import matrices_identical
from utils.linops import invert_matrix
from utils.logging_config import get_logger

logger = get_logger(__name__)

CACHE_HIT_MSG = "returning cached inverse"
CACHE_MISS_MSG = "returning newly computed inverse"


class CachingInverter:
    """
    Returns the inverse of a CacheableMatrix, reusing the cached one when valid.

    The inverter holds no cache state of its own; everything lives in the
    CacheableMatrix it is handed. The cache is valid only when a snapshot
    exists, equals ``current`` exactly, and an inverse is stored. Validity is
    decided by value, so a matrix that is edited and then restored in place
    hits the cache again.
    """
    __slots__ = ("_invert",)

    def __init__(self, invert: Optional[Callable[..., np.ndarray]] = None):
        self._invert = invert or invert_matrix

    def is_cache_valid(self, obj: CacheableMatrix) -> bool:
        return (obj.get_cached_inverse() is not None
                and matrices_identical(obj.get_snapshot(), obj.get_current()))

    def compute_inverse(self, obj: CacheableMatrix, **solver_kwargs) -> np.ndarray:
        """
        Return the inverse of ``obj.get_current()``.

        Extra keyword arguments go to the inversion routine on a cache miss
        and play no part in the validity check. Errors raised by the
        inversion routine (e.g. SingularMatrixError) propagate and leave
        ``obj`` untouched.
        """
        cached = obj.get_cached_inverse()
        snapshot = obj.get_snapshot()
        data = obj.get_current()

        if cached is not None and matrices_identical(snapshot, data):
            logger.info(CACHE_HIT_MSG)
            return cached

        inverse = self._invert(data, **solver_kwargs)
        obj.set_snapshot(data)
        obj.set_cached_inverse(inverse)
        logger.info(CACHE_MISS_MSG)
        return obj.get_cached_inverse()


_default_inverter = CachingInverter()


def cache_solve(obj: CacheableMatrix, **solver_kwargs) -> np.ndarray:
    """Module-level shortcut using the default inversion routine."""
    return _default_inverter.compute_inverse(obj, **solver_kwargs)
