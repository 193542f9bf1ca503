# utils/linops.py
from __future__ import annotations
import warnings

import numpy as np
import scipy.linalg as la
from scipy.linalg.lapack import get_lapack_funcs
import sympy

from core.exceptions import NonSquareMatrixError, NotPositiveDefiniteError, SingularMatrixError

METHODS = ("lu", "cholesky", "exact")


def _as_square(A) -> np.ndarray:
    A = np.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise NonSquareMatrixError(f"Expected a square 2-D matrix, got shape {A.shape}")
    return A


def _invert_lu(A: np.ndarray) -> np.ndarray:
    with warnings.catch_warnings():
        # scipy only warns on a zero pivot; the checks below raise instead
        warnings.simplefilter("ignore", la.LinAlgWarning)
        lu, piv = la.lu_factor(A)                          # dense LU
    zero_pivots = np.flatnonzero(np.diag(lu) == 0)
    if zero_pivots.size:
        raise SingularMatrixError(f"Matrix is singular (zero pivot at row {zero_pivots[0]})")
    # reciprocal condition number in the 1-norm, rejected below machine epsilon
    gecon, = get_lapack_funcs(("gecon",), (lu,))
    rcond, _ = gecon(lu, np.linalg.norm(A, 1), norm="1")
    if not rcond >= np.finfo(lu.dtype).eps:
        raise SingularMatrixError(f"Matrix is computationally singular (reciprocal condition number {rcond:.3g})")
    return la.lu_solve((lu, piv), np.identity(A.shape[0]))


def _invert_cholesky(A: np.ndarray) -> np.ndarray:
    # cho_factor reads one triangle only
    if not np.array_equal(A, A.T):
        raise NotPositiveDefiniteError("Cholesky inversion requires a symmetric matrix")
    try:
        c, lower = la.cho_factor(A, lower=True)            # dense Cholesky
    except la.LinAlgError as exc:
        raise NotPositiveDefiniteError(f"Cholesky factorisation failed: {exc}") from exc
    return la.cho_solve((c, lower), np.identity(A.shape[0]))


def _invert_exact(A: np.ndarray) -> np.ndarray:
    M = sympy.Matrix(A.tolist())
    try:
        inv = M.inv()
    except ValueError as exc:                              # NonInvertibleMatrixError
        raise SingularMatrixError(f"Matrix is singular: {exc}") from exc
    return np.array([[float(x) for x in row] for row in inv.tolist()], dtype=float)


def invert_matrix(A, method: str = "lu") -> np.ndarray:
    """
    Invert a square matrix.

    Parameters:
        A: Square matrix (anything ``np.asarray`` accepts).
        method: 'lu' (default), 'cholesky' for symmetric positive-definite
            input, or 'exact' for symbolic inversion (exact for integer input).

    Returns:
        A new float ndarray holding the inverse.

    Raises:
        NonSquareMatrixError: A is not a square 2-D array.
        SingularMatrixError: A has no inverse.
        NotPositiveDefiniteError: method='cholesky' on a non positive-definite A.
        ValueError: unknown method, or non-finite entries.
    """
    A = _as_square(A)
    if method == "lu":
        return _invert_lu(A)
    elif method == "cholesky":
        return _invert_cholesky(A)
    elif method == "exact":
        return _invert_exact(A)
    else:
        raise ValueError(f"Unknown method: {method}")


def is_identity(P, atol: float = 1e-8) -> bool:
    """True when P is square and within ``atol`` of the identity matrix."""
    P = np.asarray(P)
    if P.ndim != 2 or P.shape[0] != P.shape[1]:
        return False
    return bool(np.allclose(P, np.identity(P.shape[0]), atol=atol))
