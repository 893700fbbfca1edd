from __future__ import annotations

import numpy as np


class CacheMatrixError(Exception):
    """Base class for errors raised by cachematrix."""


class DimensionError(CacheMatrixError, ValueError):
    """The matrix is not a square 2D matrix."""


class SingularMatrixError(CacheMatrixError, np.linalg.LinAlgError):
    """The matrix has no inverse (exactly or computationally singular)."""
