from __future__ import annotations

import logging
from typing import Any, Callable

from .holder import CachedMatrix
from .linalg import invert

logger = logging.getLogger(__name__)


def cache_solve(
    holder: CachedMatrix,
    *,
    inverter: Callable[..., Any] | None = None,
    **options: Any,
) -> Any:
    """Compute or retrieve the cached inverse of `holder`'s matrix.

    On a miss the matrix is inverted with `inverter` (NumPy-backed `invert`
    by default), `options` are passed through to it, and the result is
    stored on the holder. On a hit `options` are ignored.

    Errors from the inverter propagate unchanged and leave the cache empty.
    """

    inv = holder.get_cached_inverse()
    if inv is not None:
        logger.debug("getting cached data")
        return inv

    data = holder.get_matrix()
    inv = (inverter or invert)(data, **options)
    holder.set_cached_inverse(inv)
    logger.debug("calculating inverse")
    return inv
