"""Full recompute pipeline: waves, composite, spectra, and frequency projection."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from fftlab.core.config import AppConfig
from fftlab.core.errors import FourierError
from fftlab.core.logger import get_logger
from fftlab.core.types import Spectrum, WaveParams
from fftlab.dsp.fft import fft
from fftlab.dsp.projection import DEFAULT_CENTROID_SCALE, centroid_of, project_at_frequency
from fftlab.dsp.spectrum import DEFAULT_PHASE_OFFSET_DEG, derive_amplitude_spectrum, derive_phase_spectrum
from fftlab.dsp.wavegen import compose_waves, generate_waves, time_axis

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class AnalysisRequest:
    """Every parameter the caller supplies for one recompute."""

    num_points: int
    sampling_rate: float
    waves: Sequence[WaveParams]
    selected_frequency: float
    phase_offset_deg: float = DEFAULT_PHASE_OFFSET_DEG
    centroid_scale: float = DEFAULT_CENTROID_SCALE


@dataclass(slots=True)
class AnalysisResult:
    """Numeric outputs ready for rendering."""

    request: AnalysisRequest
    time: np.ndarray
    waves: List[np.ndarray]
    composite: np.ndarray
    coefficients: np.ndarray
    amplitude: Spectrum
    phase: Spectrum
    trajectory: np.ndarray
    centroid: complex


def request_from_config(config: AppConfig, selected_frequency: Optional[float] = None) -> AnalysisRequest:
    return AnalysisRequest(
        num_points=config.engine.num_points,
        sampling_rate=config.engine.sampling_rate,
        waves=config.wave_params(),
        selected_frequency=(
            config.display.selected_frequency if selected_frequency is None else selected_frequency
        ),
        phase_offset_deg=config.engine.phase_offset_deg,
        centroid_scale=config.engine.centroid_scale,
    )


def run_analysis(request: AnalysisRequest) -> AnalysisResult:
    """Run every engine stage for ``request``.

    Raises:
        FourierError: from whichever stage rejects its input first.
    """

    waves = generate_waves(request.num_points, request.waves)
    composite = compose_waves(waves)
    coefficients = fft(composite)
    amplitude = derive_amplitude_spectrum(coefficients, request.num_points, request.sampling_rate)
    phase = derive_phase_spectrum(
        coefficients, request.num_points, request.sampling_rate, offset_deg=request.phase_offset_deg
    )
    trajectory = project_at_frequency(
        composite, request.selected_frequency, request.num_points, request.sampling_rate
    )
    centroid = centroid_of(trajectory, scale=request.centroid_scale)
    LOGGER.debug(
        "Analysis complete",
        extra={"waves": len(waves), "selected_frequency": request.selected_frequency, "centroid": str(centroid)},
    )
    return AnalysisResult(
        request=request,
        time=time_axis(request.num_points, request.sampling_rate),
        waves=waves,
        composite=composite,
        coefficients=coefficients,
        amplitude=amplitude,
        phase=phase,
        trajectory=trajectory,
        centroid=centroid,
    )


@dataclass
class AnalysisSession:
    """Keeps the last valid result so a rejected recompute can fall back to it."""

    last_result: Optional[AnalysisResult] = None
    last_error: Optional[FourierError] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def recompute(self, request: AnalysisRequest) -> Optional[AnalysisResult]:
        try:
            result = run_analysis(request)
        except FourierError as exc:
            LOGGER.warning("Recompute rejected, keeping previous result: %s", exc)
            with self._lock:
                self.last_error = exc
                return self.last_result
        with self._lock:
            self.last_result = result
            self.last_error = None
        return result


__all__ = ["AnalysisRequest", "AnalysisResult", "AnalysisSession", "request_from_config", "run_analysis"]
