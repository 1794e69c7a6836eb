"""Global configuration for fractree.

This module provides a package-wide configuration surface for the random
source used by tree generation and jitter, plus the environment-driven
settings of the viewer (frame interval, canvas size). It exposes a dynamic
`rng` proxy that always reflects the current generator, and logging helpers.
"""

from __future__ import annotations

import contextlib
import logging
import os
from typing import Any, ContextManager, Iterator, Optional, Tuple

import numpy as np


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
_LOGGER = logging.getLogger("fractree.config")
_PACKAGE_LOGGER = logging.getLogger("fractree")


def _parse_log_level(val: str | int | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string or int into a `logging` level constant.

    Args:
        val: The desired level (e.g., "DEBUG", 10). May be None.
        default: Fallback level if `val` cannot be parsed.

    Returns:
        An integer logging level (e.g., logging.DEBUG).
    """
    if val is None:
        return default
    if isinstance(val, int):
        return val
    lvl = getattr(logging, str(val).upper(), None)
    if isinstance(lvl, int):
        return lvl
    return default


def set_log_level(level: str | int = "WARNING") -> None:
    """Set the package logger level programmatically.

    Args:
        level: A standard logging level name or integer.
    """
    _PACKAGE_LOGGER.setLevel(_parse_log_level(level))


# Default level can be overridden by env.
set_log_level(os.getenv("FRACTREE_LOGLEVEL", "WARNING"))


# -----------------------------------------------------------------------------
# Env helpers
# -----------------------------------------------------------------------------
def bool_env(varname: str, default: bool) -> bool:
    """Read an environment variable and interpret it as a boolean.

    True values: 'y', 'yes', 't', 'true', 'on', '1'.
    False values: 'n', 'no', 'f', 'false', 'off', '0'.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        A boolean value parsed from the environment.
    """
    val = os.getenv(varname, str(default))
    val = val.lower()
    if val in ("y", "yes", "t", "true", "on", "1"):
        return True
    if val in ("n", "no", "f", "false", "off", "0"):
        return False
    raise ValueError(f"invalid truth value {val!r} for environment {varname!r}")


def int_env(varname: str, default: int) -> int:
    """Read an environment variable and interpret it as an integer.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        The integer value parsed from the environment.
    """
    return int(os.getenv(varname, str(default)))


def float_env(varname: str, default: Optional[float]) -> Optional[float]:
    """Read an environment variable and interpret it as a float.

    An unset or empty variable yields `default`.
    """
    raw = os.getenv(varname, "").strip()
    if not raw:
        return default
    return float(raw)


def frame_interval_ms() -> int:
    """Return the render-loop timer interval in milliseconds (FRACTREE_FRAME_MS)."""
    ms = int_env("FRACTREE_FRAME_MS", 16)
    if ms < 1:
        _LOGGER.warning("FRACTREE_FRAME_MS=%d is not positive; using 1 ms.", ms)
        ms = 1
    return ms


def canvas_override() -> Tuple[Optional[float], Optional[float]]:
    """Return the (width, height) canvas overrides from the environment.

    Either entry is None when its variable (FRACTREE_CANVAS_WIDTH,
    FRACTREE_CANVAS_HEIGHT) is unset.
    """
    width = float_env("FRACTREE_CANVAS_WIDTH", None)
    height = float_env("FRACTREE_CANVAS_HEIGHT", None)
    _LOGGER.debug("Canvas override from env: width=%s height=%s", width, height)
    return width, height


def make_rng(seed: int = 1234) -> np.random.Generator:
    """Create a NumPy PCG64 generator with a deterministic seed."""
    return np.random.Generator(np.random.PCG64(seed))


# -----------------------------------------------------------------------------
# Config singleton + dynamic proxy
# -----------------------------------------------------------------------------
class Config:
    """Global configuration for fractree.

    Holds the default random generator used when callers do not inject their
    own, with deterministic seeding and a dynamic proxy so code importing
    `rng` always sees the current generator.
    """

    def __init__(self) -> None:
        """Initialize config using environment defaults."""
        self._seed_default = int_env("FRACTREE_SEED", 1234)
        self._seed = self._seed_default
        self._rng: np.random.Generator = make_rng(self._seed)
        _LOGGER.info("Config initialized: seed=%d", self._seed)

    def configure(self, *, seed: Optional[int] = None) -> Config:
        """Replace the active generator.

        Args:
            seed: Optional seed (defaults to the environment default).

        Returns:
            The `Config` instance (for chaining).
        """
        seed_value = self._seed_default if seed is None else int(seed)
        _LOGGER.info("Reconfiguring: seed=%d", seed_value)
        self._seed = seed_value
        self._rng = make_rng(seed_value)
        return self

    @contextlib.contextmanager
    def use(self, *, seed: Optional[int] = None) -> Iterator[np.random.Generator]:
        """Temporarily switch to a freshly seeded generator.

        Args:
            seed: Optional seed for the temporary generator.

        Yields:
            The temporary generator. Restores the previous one on exit.
        """
        prev_rng, prev_seed = self._rng, self._seed
        try:
            self.configure(seed=seed)
            yield self._rng
        finally:
            self._rng, self._seed = prev_rng, prev_seed
            _LOGGER.info("Restored previous generator (seed=%d)", self._seed)

    def seed(self, s: int = 1234) -> None:
        """Reseed the active generator deterministically.

        Args:
            s: The seed value.
        """
        _LOGGER.info("Reseeding RNG to %d", s)
        self._seed = int(s)
        self._rng = make_rng(self._seed)

    @property
    def current_seed(self) -> int:
        """Return the seed of the active generator."""
        return self._seed

    @property
    def rng(self) -> np.random.Generator:
        """Return the active generator."""
        return self._rng


class _RNGProxy:
    """Proxy for `rng` that forwards attribute access to the current generator."""

    def __init__(self, _cfg: Config) -> None:
        self._cfg = _cfg

    def __getattr__(self, name: str) -> Any:  # noqa: D401
        return getattr(self._cfg.rng, name)


# Singleton & forwards
config = Config()
rng = _RNGProxy(config)


def configure(*, seed: Optional[int] = None) -> Config:
    """Replace the active generator (module-level)."""
    return config.configure(seed=seed)


def use(*, seed: Optional[int] = None) -> ContextManager[np.random.Generator]:
    """Temporarily switch generator within a context manager (module-level)."""
    return config.use(seed=seed)


def seed(s: int = 1234) -> None:
    """Reseed the active generator deterministically (module-level)."""
    config.seed(s)


def current_rng() -> np.random.Generator:
    """Return the active generator itself (not the proxy)."""
    return config.rng
