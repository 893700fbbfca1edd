from __future__ import annotations

from typing import Any

import numpy as np

from .coercion import is_sequence_like, shape_of

EMPTY = "EMPTY"
CACHED = "CACHED"


def _private_matrix(matrix: Any) -> Any:
    # Later in-place edits of the caller's value must not reach the holder.
    if isinstance(matrix, np.ndarray):
        matrix = np.array(matrix, copy=True)
        matrix.flags.writeable = False
        return matrix
    if is_sequence_like(matrix):
        return tuple(tuple(row) if is_sequence_like(row) else row for row in matrix)
    return matrix


def _read_only(inverse: Any) -> Any:
    if isinstance(inverse, np.ndarray):
        inverse.flags.writeable = False
    return inverse


class CachedMatrix:
    """A matrix plus its lazily computed, cached inverse.

    The holder never computes anything itself; `cache_solve` fills the cache.
    Replacing the matrix always drops the cached inverse, even when the new
    value equals the old one: invalidation follows assignment, not value
    equality.

    Matrices are copied on assignment (arrays into read-only arrays, nested
    sequences into tuples) and an array inverse is stored read-only, so
    neither can drift from the other through in-place edits.

    Not thread-safe. Callers sharing a holder across threads must serialize
    access to it.
    """

    __slots__ = ("_matrix", "_inverse", "_version")

    def __init__(self, matrix: Any = None) -> None:
        self._matrix = _private_matrix(matrix)
        self._inverse: Any | None = None
        self._version = 0

    def set_matrix(self, matrix: Any) -> None:
        self._matrix = _private_matrix(matrix)
        self._inverse = None
        self._version += 1

    def get_matrix(self) -> Any:
        return self._matrix

    def set_cached_inverse(self, inverse: Any | None) -> None:
        # Trusted: the caller guarantees `inverse` belongs to the current matrix.
        self._inverse = _read_only(inverse)

    def get_cached_inverse(self) -> Any | None:
        return self._inverse

    def clear_cache(self) -> None:
        self._inverse = None

    @property
    def has_cached_inverse(self) -> bool:
        return self._inverse is not None

    @property
    def state(self) -> str:
        return CACHED if self._inverse is not None else EMPTY

    @property
    def version(self) -> int:
        """Number of times the matrix has been replaced since construction."""
        return self._version

    @property
    def shape(self) -> tuple[int, int] | None:
        if self._matrix is None:
            return None
        return shape_of(self._matrix)

    def __repr__(self) -> str:
        return f"CachedMatrix(shape={self.shape}, state={self.state})"


def make_cache_matrix(matrix: Any = None) -> CachedMatrix:
    return CachedMatrix(matrix)
