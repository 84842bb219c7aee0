"""Damped sinusoid generation and composition."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

import numpy as np

from fftlab.core.errors import InvalidLength, InvalidParameter, MismatchedLength
from fftlab.core.logger import get_logger
from fftlab.core.types import WaveParams
from fftlab.core.utils import as_signal, require_finite, require_num_points, require_positive_rate

LOGGER = get_logger(__name__)


def generate_wave(num_points: int, params: WaveParams) -> np.ndarray:
    """Generate one damped, phase-shifted sinusoid as complex samples.

    ``params.frequency`` is the number of cycles across ``num_points`` samples.
    The decay envelope is ``exp(-decay * n)`` keyed to the raw sample index, so
    its effective time constant changes with ``num_points``. Imaginary parts are
    always zero.
    """

    num_points = require_num_points(num_points)
    frequency = require_finite("frequency", params.frequency)
    amplitude = require_finite("amplitude", params.amplitude)
    decay = require_finite("decay", params.decay)
    phase = require_finite("phase_degrees", params.phase_degrees)
    if decay < 0:
        raise InvalidParameter(f"decay must be non-negative, got {decay}")

    n = np.arange(num_points, dtype=np.float64)
    angle = (n / num_points) * frequency * 2 * math.pi + phase * math.pi / 180
    values = np.sin(angle) * amplitude * np.exp(-decay * n)
    LOGGER.debug(
        "Generated wave",
        extra={"num_points": num_points, "frequency": frequency, "amplitude": amplitude, "decay": decay},
    )
    return values.astype(np.complex128)


def generate_waves(num_points: int, params: Iterable[WaveParams]) -> List[np.ndarray]:
    return [generate_wave(num_points, p) for p in params]


def compose_waves(signals: Sequence[np.ndarray]) -> np.ndarray:
    """Sum equal-length signals sample by sample, real and imaginary parts alike."""

    if len(signals) == 0:
        raise InvalidParameter("compose_waves needs at least one signal")

    arrays = [as_signal(s, name=f"signals[{idx}]") for idx, s in enumerate(signals)]
    expected = arrays[0].size
    if expected == 0:
        raise InvalidLength("signals must contain at least one sample")
    for idx, array in enumerate(arrays[1:], start=1):
        if array.size != expected:
            raise MismatchedLength(
                f"signals[{idx}] has {array.size} samples, expected {expected}"
            )

    composite = arrays[0].copy()
    for array in arrays[1:]:
        composite += array
    return composite


def time_axis(num_points: int, sampling_rate: float) -> np.ndarray:
    """Sample timestamps in seconds, ``n / sampling_rate``."""

    num_points = require_num_points(num_points)
    rate = require_positive_rate(sampling_rate)
    return np.arange(num_points, dtype=np.float64) / rate


__all__ = ["generate_wave", "generate_waves", "compose_waves", "time_axis"]
