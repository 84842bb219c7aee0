"""Common validation helpers for lengths, rates, and finite parameters."""

from __future__ import annotations

import math
import sys
from typing import Any

import numpy as np

from .errors import InvalidLength, InvalidParameter
from .logger import get_logger

LOGGER = get_logger(__name__)


def is_power_of_two(value: int) -> bool:
    """Return ``True`` for 1, 2, 4, 8, ..."""

    return value > 0 and (value & (value - 1)) == 0


def require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"{name} must be a real number, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite, got {value}")
    return value


def require_positive_rate(sampling_rate: float) -> float:
    """Validate a sampling rate and return it as ``float``.

    Args:
        sampling_rate: Samples per second. Must be finite and strictly positive.
    """

    rate = require_finite("sampling_rate", sampling_rate)
    if rate <= 0:
        raise InvalidParameter(f"sampling_rate must be positive, got {rate}")
    return rate


def require_num_points(num_points: Any) -> int:
    if isinstance(num_points, bool) or not isinstance(num_points, (int, np.integer)):
        raise InvalidLength(f"num_points must be an integer, got {num_points!r}")
    if num_points <= 0:
        raise InvalidLength(f"num_points must be positive, got {num_points}")
    return int(num_points)


def as_signal(data: Any, name: str = "signal") -> np.ndarray:
    """Coerce ``data`` to a one-dimensional complex128 array."""

    try:
        array = np.asarray(data, dtype=np.complex128)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"{name} must contain numeric samples") from exc
    if array.ndim != 1:
        raise InvalidLength(f"{name} must be one-dimensional, got shape {array.shape}")
    if not np.all(np.isfinite(array)):
        raise InvalidParameter(f"{name} contains non-finite samples")
    return array


def install_excepthook() -> None:
    """Install a verbose exception hook for debug sessions."""

    def _hook(exc_type, exc_value, exc_traceback):  # pragma: no cover - interactive behavior
        LOGGER.exception("Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback))
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    sys.excepthook = _hook


__all__ = [
    "is_power_of_two",
    "require_finite",
    "require_positive_rate",
    "require_num_points",
    "as_signal",
    "install_excepthook",
]
