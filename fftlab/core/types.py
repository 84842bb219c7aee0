"""Typed containers shared throughout the Fourier engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .errors import InvalidLength


@dataclass(frozen=True, slots=True)
class WaveParams:
    """Parameters of one damped, phase-shifted sinusoid.

    ``frequency`` counts the cycles spanned by the whole sample window and
    ``decay`` is applied per sample index, not per second.
    """

    frequency: float
    amplitude: float
    decay: float = 0.0
    phase_degrees: float = 0.0


@dataclass(slots=True)
class SpectrumPoint:
    """Single bin of a derived spectrum."""

    frequency_hz: float
    value: float


@dataclass(slots=True)
class Spectrum:
    """Single-sided amplitude or phase spectrum paired with its frequency axis."""

    freqs: np.ndarray
    values: np.ndarray
    kind: str

    def __len__(self) -> int:
        return int(self.freqs.size)

    def points(self) -> List[SpectrumPoint]:
        return [SpectrumPoint(float(f), float(v)) for f, v in zip(self.freqs, self.values)]

    def within(self, low: float, high: float) -> "Spectrum":
        """Return the bins whose frequency lies in ``[low, high]``."""

        mask = (self.freqs >= low) & (self.freqs <= high)
        return Spectrum(freqs=self.freqs[mask], values=self.values[mask], kind=self.kind)

    def nearest(self, frequency_hz: float) -> SpectrumPoint:
        """Bin closest to ``frequency_hz``."""

        if self.freqs.size == 0:
            raise InvalidLength("Cannot look up a bin in an empty spectrum")
        idx = int(np.argmin(np.abs(self.freqs - frequency_hz)))
        return SpectrumPoint(float(self.freqs[idx]), float(self.values[idx]))

    def peak(self) -> SpectrumPoint:
        if self.freqs.size == 0:
            raise InvalidLength("Cannot take the peak of an empty spectrum")
        idx = int(np.argmax(self.values))
        return SpectrumPoint(float(self.freqs[idx]), float(self.values[idx]))


__all__ = ["WaveParams", "SpectrumPoint", "Spectrum"]
