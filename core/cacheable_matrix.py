# core/cacheable_matrix.py
"""
Single-entry cache holder for a square matrix and its inverse.

A CacheableMatrix owns three values:

* ``current``:        the matrix the owner is working with.
* ``snapshot``:       the matrix as it was when the inverse was last computed.
* ``cached_inverse``: the inverse of ``snapshot``.

The holder never inverts anything itself; core.caching_inverter decides
whether the cached inverse is still valid by comparing ``current`` against
``snapshot``.
"""
from __future__ import annotations
from typing import Optional

import numpy as np


class CacheableMatrix:
    __slots__ = ("_current", "_snapshot", "_cached_inverse")

    def __init__(self, matrix):
        self._current: np.ndarray = np.asarray(matrix)
        self._snapshot: Optional[np.ndarray] = None
        self._cached_inverse: Optional[np.ndarray] = None

    # ------------------------------------------------------------------
    # current
    # ------------------------------------------------------------------
    def get_current(self) -> np.ndarray:
        return self._current

    def set_current(self, matrix) -> None:
        """
        Replace the working matrix and drop the cached inverse.

        The outgoing matrix becomes the snapshot. No shape check is made here;
        a malformed matrix fails when the inverse is next requested.
        """
        self.set_snapshot(self._current)
        self._current = np.asarray(matrix)
        self._cached_inverse = None

    # ------------------------------------------------------------------
    # snapshot / cached inverse
    # ------------------------------------------------------------------
    def get_snapshot(self) -> Optional[np.ndarray]:
        return self._snapshot

    def set_snapshot(self, matrix) -> None:
        # copied so that in-place edits of ``current`` still show up as a change
        self._snapshot = None if matrix is None else np.array(matrix, copy=True)

    def get_cached_inverse(self) -> Optional[np.ndarray]:
        return self._cached_inverse

    def set_cached_inverse(self, inverse) -> None:
        self._cached_inverse = None if inverse is None else np.asarray(inverse)

    @property
    def has_inverse(self) -> bool:
        """True when an inverse is stored. Says nothing about whether it is still valid."""
        return self._cached_inverse is not None

    def __repr__(self):
        return (f"<CacheableMatrix shape={np.shape(self._current)}, "
                f"snapshot={'yes' if self._snapshot is not None else 'no'}, "
                f"cached_inverse={'yes' if self._cached_inverse is not None else 'no'}>")
