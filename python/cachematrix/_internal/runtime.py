from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

import numpy as np

TOL_ENV_VAR = "CACHEMATRIX_TOL"
WARN_RCOND_ENV_VAR = "CACHEMATRIX_WARN_RCOND"

_DEFAULT_TOL = float(np.finfo(np.float64).eps)
_DEFAULT_WARN_RCOND = 1e-12


@dataclass(frozen=True)
class Settings:
    # Reciprocal condition numbers below `tol` are treated as singular.
    tol: float = _DEFAULT_TOL
    # Below this (but not below `tol`) a conditioning warning is emitted; 0 disables.
    warn_rcond: float = _DEFAULT_WARN_RCOND


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0 or value != value:
        raise ValueError(f"{name} must be a non-negative number, got {raw!r}")
    return value


def settings_from_env(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        tol=_read_float(env, TOL_ENV_VAR, _DEFAULT_TOL),
        warn_rcond=_read_float(env, WARN_RCOND_ENV_VAR, _DEFAULT_WARN_RCOND),
    )


class Runtime:
    """Process-wide defaults for the inversion primitive.

    The environment is read lazily on first access and cached; explicit
    `configure` overrides win over the environment until `reset`.
    """

    def __init__(self) -> None:
        self._settings_cache: Settings | None = None

    def settings(self) -> Settings:
        if self._settings_cache is None:
            self._settings_cache = settings_from_env()
        return self._settings_cache

    def configure(self, *, tol: float | None = None, warn_rcond: float | None = None) -> Settings:
        changes: dict[str, float] = {}
        for name, value in (("tol", tol), ("warn_rcond", warn_rcond)):
            if value is None:
                continue
            value = float(value)
            if value < 0 or value != value:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
            changes[name] = value
        self._settings_cache = replace(self.settings(), **changes)
        return self._settings_cache

    def reset(self) -> None:
        self._settings_cache = None


runtime = Runtime()
