from __future__ import annotations

import math
import sys
import warnings
from typing import Any

import numpy as np

from .coercion import coerce_square_matrix
from .errors import SingularMatrixError
from .runtime import runtime
from .warnings import CacheMatrixConditioningWarning


def reciprocal_condition(a: np.ndarray, a_inv: np.ndarray) -> float:
    """1-norm reciprocal condition number estimate from a matrix and its inverse."""
    denom = float(np.linalg.norm(a, 1)) * float(np.linalg.norm(a_inv, 1))
    if denom == 0.0 or not math.isfinite(denom):
        return 0.0
    return 1.0 / denom


def _external_stacklevel() -> int:
    """Stack level of the first frame outside this package, relative to the caller."""
    level = 1
    frame = sys._getframe(1)
    while frame is not None:
        module = frame.f_globals.get("__name__", "")
        if module != "cachematrix" and not module.startswith("cachematrix."):
            break
        frame = frame.f_back
        level += 1
    return level


def invert(matrix: Any, *, tol: float | None = None, dtype: Any | None = None) -> np.ndarray:
    """Invert a square matrix with NumPy.

    Raises `DimensionError` for non-square input and `SingularMatrixError`
    when the matrix is singular or its reciprocal condition number falls
    below `tol` (defaults to the configured tolerance, machine epsilon
    unless overridden).
    """

    a = coerce_square_matrix(matrix, dtype=dtype)
    settings = runtime.settings()
    limit = settings.tol if tol is None else float(tol)

    try:
        with np.errstate(all="ignore"):
            a_inv = np.linalg.inv(a)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(f"Matrix is exactly singular: {exc}") from exc

    rcond = reciprocal_condition(a, a_inv)
    if rcond < limit or not np.all(np.isfinite(a_inv)):
        raise SingularMatrixError(
            f"system is computationally singular: reciprocal condition number = {rcond:g}"
        )

    if rcond < settings.warn_rcond:
        warnings.warn(
            f"Matrix is ill-conditioned (reciprocal condition number = {rcond:g}); "
            "the inverse may be inaccurate.",
            CacheMatrixConditioningWarning,
            stacklevel=_external_stacklevel(),
        )
    return a_inv
