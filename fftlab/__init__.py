"""Damped sinusoid synthesis and Fourier analysis engine."""

from .core.errors import FourierError, InvalidLength, InvalidParameter, MismatchedLength
from .core.types import Spectrum, SpectrumPoint, WaveParams
from .dsp.fft import fft
from .dsp.projection import centroid_of, project_at_frequency
from .dsp.spectrum import derive_amplitude_spectrum, derive_phase_spectrum
from .dsp.wavegen import compose_waves, generate_wave

__all__ = [
    "FourierError",
    "InvalidLength",
    "InvalidParameter",
    "MismatchedLength",
    "Spectrum",
    "SpectrumPoint",
    "WaveParams",
    "fft",
    "centroid_of",
    "project_at_frequency",
    "derive_amplitude_spectrum",
    "derive_phase_spectrum",
    "compose_waves",
    "generate_wave",
]
