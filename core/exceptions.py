# core/exceptions.py

class CacheMatrixError(Exception):
    """Base exception for cachematrix errors."""
    pass

class SingularMatrixError(CacheMatrixError):
    """Raised when a matrix has no inverse."""
    pass

class NonSquareMatrixError(CacheMatrixError):
    """Raised when an inversion is requested on a non-square or non-2-D array."""
    pass

class NotPositiveDefiniteError(CacheMatrixError):
    """Raised when a Cholesky inversion is requested on a matrix that is not positive-definite."""
    pass

class SessionError(CacheMatrixError):
    """Raised when a session file cannot be read or fails schema validation."""
    pass
