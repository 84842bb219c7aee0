"""Single-sided amplitude and phase spectra derived from FFT coefficients."""

from __future__ import annotations

from typing import List

import numpy as np
from scipy import signal

from fftlab.core.errors import InvalidLength, MismatchedLength
from fftlab.core.logger import get_logger
from fftlab.core.types import Spectrum, SpectrumPoint
from fftlab.core.utils import (
    as_signal,
    is_power_of_two,
    require_finite,
    require_num_points,
    require_positive_rate,
)

LOGGER = get_logger(__name__)

DEFAULT_PHASE_OFFSET_DEG = 90.0


def frequency_step(num_points: int, sampling_rate: float) -> float:
    """Spacing between adjacent bins in Hz."""

    return require_positive_rate(sampling_rate) / require_num_points(num_points)


def frequency_axis(num_points: int, sampling_rate: float) -> np.ndarray:
    """Frequencies of bins ``0 .. num_points/2 - 1``."""

    num_points = require_num_points(num_points)
    rate = require_positive_rate(sampling_rate)
    return np.arange(num_points // 2, dtype=np.float64) * rate / num_points


def _lower_half(coeffs: np.ndarray, num_points: int) -> np.ndarray:
    data = as_signal(coeffs, name="coeffs")
    num_points = require_num_points(num_points)
    if data.size != num_points:
        raise MismatchedLength(f"num_points={num_points} but got {data.size} coefficients")
    if not is_power_of_two(num_points):
        raise InvalidLength(f"Spectrum length must be a power of two, got {num_points}")
    return data[: num_points // 2]


def derive_amplitude_spectrum(coeffs: np.ndarray, num_points: int, sampling_rate: float) -> Spectrum:
    """``2 * |X[k]| / N`` for ``k < N/2``."""

    half = _lower_half(coeffs, num_points)
    freqs = frequency_axis(num_points, sampling_rate)
    amplitude = 2 * np.sqrt(half.real**2 + half.imag**2) / num_points
    LOGGER.debug("Amplitude spectrum derived", extra={"bins": int(amplitude.size)})
    return Spectrum(freqs=freqs, values=amplitude, kind="amplitude")


def derive_phase_spectrum(
    coeffs: np.ndarray,
    num_points: int,
    sampling_rate: float,
    offset_deg: float = DEFAULT_PHASE_OFFSET_DEG,
) -> Spectrum:
    """Phase of each lower-half bin in degrees, shifted by ``offset_deg``.

    The default +90 degree shift reports a pure sine with zero phase as 0.
    Results are wrapped into ``(-180, 180]``.
    """

    offset = require_finite("offset_deg", offset_deg)
    half = _lower_half(coeffs, num_points)
    freqs = frequency_axis(num_points, sampling_rate)
    phase = np.degrees(np.arctan2(half.imag, half.real)) + offset
    phase = np.where(phase > 180, phase - 360, phase)
    phase = np.where(phase <= -180, phase + 360, phase)
    return Spectrum(freqs=freqs, values=phase, kind="phase")


def spectral_peaks(spectrum: Spectrum, count: int = 5, min_height: float = 0.0) -> List[SpectrumPoint]:
    """Strongest local maxima of ``spectrum``, highest first."""

    if count <= 0:
        return []
    indices, _ = signal.find_peaks(spectrum.values, height=min_height)
    order = np.argsort(-spectrum.values[indices], kind="stable")[:count]
    return [SpectrumPoint(float(spectrum.freqs[i]), float(spectrum.values[i])) for i in indices[order]]


__all__ = [
    "DEFAULT_PHASE_OFFSET_DEG",
    "spectral_peaks",
    "frequency_step",
    "frequency_axis",
    "derive_amplitude_spectrum",
    "derive_phase_spectrum",
]
