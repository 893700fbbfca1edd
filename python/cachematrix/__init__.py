"""Matrix holder that caches its inverse until the matrix is replaced."""
from __future__ import annotations

import logging

from ._internal.errors import (
    CacheMatrixError,
    DimensionError,
    SingularMatrixError,
)
from ._internal.holder import CACHED, EMPTY, CachedMatrix, make_cache_matrix
from ._internal.linalg import invert
from ._internal.runtime import Settings, runtime as _runtime
from ._internal.solve import cache_solve
from ._internal.warnings import (
    CacheMatrixWarning,
    CacheMatrixConditioningWarning,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def configure(*, tol: float | None = None, warn_rcond: float | None = None) -> Settings:
    """Override process-wide defaults used by `invert`; returns the new settings."""
    return _runtime.configure(tol=tol, warn_rcond=warn_rcond)


def get_settings() -> Settings:
    return _runtime.settings()


def reset_settings() -> None:
    """Drop `configure` overrides; the environment is re-read on next use."""
    _runtime.reset()


__all__ = [
    "CACHED",
    "EMPTY",
    "CacheMatrixConditioningWarning",
    "CacheMatrixError",
    "CacheMatrixWarning",
    "CachedMatrix",
    "DimensionError",
    "Settings",
    "SingularMatrixError",
    "cache_solve",
    "configure",
    "get_settings",
    "invert",
    "make_cache_matrix",
    "reset_settings",
]
