from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np

from .errors import DimensionError


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def shape_of(candidate: Any) -> tuple[int, int] | None:
    """Best-effort (rows, cols) of a matrix-like value, without copying it."""
    try:
        return int(candidate.rows()), int(candidate.cols())
    except (AttributeError, TypeError, ValueError):
        pass
    shape = getattr(candidate, "shape", None)
    if isinstance(shape, tuple):
        return (int(shape[0]), int(shape[1])) if len(shape) == 2 else None
    if is_sequence_like(candidate) and candidate and all(is_sequence_like(r) for r in candidate):
        cols = {len(r) for r in candidate}
        if len(cols) == 1:
            return len(candidate), cols.pop()
    return None


def _rows_from_accessors(candidate: Any) -> list[list[Any]] | None:
    rows_attr: Any = getattr(candidate, "rows", None)
    cols_attr: Any = getattr(candidate, "cols", None)
    get_attr: Any = getattr(candidate, "get", None)
    if not (callable(rows_attr) and callable(cols_attr) and callable(get_attr)):
        return None
    n_rows, n_cols = int(rows_attr()), int(cols_attr())
    return [[get_attr(i, j) for j in range(n_cols)] for i in range(n_rows)]


def coerce_square_matrix(candidate: Any, *, dtype: Any | None = None) -> np.ndarray:
    """Return `candidate` as a square 2D ndarray.

    Accepts NumPy arrays, nested sequences and objects exposing
    ``rows()``/``cols()``/``get(i, j)``. Complex input keeps a complex dtype,
    everything else defaults to float64.
    """

    if candidate is None:
        raise DimensionError("Matrix is not set.")

    rows = _rows_from_accessors(candidate)
    source = rows if rows is not None else candidate

    try:
        probe = np.asarray(source)
        if dtype is None and probe.dtype.kind not in "biufc":
            raise TypeError(f"dtype {probe.dtype} is not numeric")
        if dtype is None:
            dtype = np.complex128 if np.iscomplexobj(probe) else np.float64
        array = probe.astype(dtype, copy=False)
    except (TypeError, ValueError) as exc:
        # Ragged nested sequences surface here as well.
        if is_sequence_like(source) and shape_of(source) is None:
            raise DimensionError("Matrix data must be rectangular.") from exc
        raise TypeError(f"Matrix entries must be numeric: {exc}") from exc

    if array.ndim != 2:
        raise DimensionError(f"Matrix input must be 2D, got {array.ndim}D with shape {array.shape}.")
    if array.shape[0] != array.shape[1]:
        raise DimensionError(f"Matrix input must be square (rows == columns), got shape {array.shape}.")
    if array.shape[0] == 0:
        raise DimensionError("Matrix must not be empty.")
    return array
