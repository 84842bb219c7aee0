from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from fftlab.core.config import AppConfig
from fftlab.core.errors import InvalidLength, InvalidParameter
from fftlab.core.types import WaveParams
from fftlab.services.analysis import AnalysisRequest, AnalysisSession, request_from_config, run_analysis


def test_default_scene_runs():
    result = run_analysis(request_from_config(AppConfig()))
    assert len(result.waves) == 3
    assert len(result.composite) == 512
    assert len(result.coefficients) == 512
    assert len(result.amplitude) == 256
    assert len(result.phase) == 256
    assert len(result.trajectory) == 512
    assert result.time[1] == pytest.approx(0.001)
    assert np.isfinite(result.centroid.real) and np.isfinite(result.centroid.imag)


def test_selected_frequency_override():
    request = request_from_config(AppConfig(), selected_frequency=0.0)
    result = run_analysis(request)
    assert np.array_equal(result.trajectory, result.composite)


def test_two_identical_waves_double_amplitude():
    request = AnalysisRequest(
        num_points=512,
        sampling_rate=1000.0,
        waves=[WaveParams(5, 1.0), WaveParams(5, 1.0)],
        selected_frequency=5 * 1000.0 / 512,
    )
    result = run_analysis(request)
    assert result.amplitude.values[5] == pytest.approx(2.0, abs=1e-6)
    assert abs(result.centroid) == pytest.approx(2.0, abs=1e-9)


def test_run_analysis_is_deterministic():
    request = request_from_config(AppConfig())
    first = run_analysis(request)
    second = run_analysis(request)
    assert np.array_equal(first.coefficients, second.coefficients)
    assert first.centroid == second.centroid


def test_session_falls_back_to_previous_result():
    session = AnalysisSession()
    good = session.recompute(request_from_config(AppConfig()))
    assert good is not None and session.last_error is None

    bad = AnalysisRequest(num_points=100, sampling_rate=1000.0, waves=[WaveParams(1, 1)], selected_frequency=1.0)
    assert session.recompute(bad) is good
    assert isinstance(session.last_error, InvalidLength)

    again = session.recompute(request_from_config(AppConfig()))
    assert again is not good
    assert session.last_error is None


def test_session_without_previous_result_returns_none():
    session = AnalysisSession()
    request = AnalysisRequest(num_points=8, sampling_rate=1000.0, waves=[], selected_frequency=1.0)
    assert session.recompute(request) is None
    assert isinstance(session.last_error, InvalidParameter)


def test_concurrent_runs_match_serial_run():
    request = request_from_config(AppConfig())
    expected = run_analysis(request)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(run_analysis, [request] * 8))
    for result in results:
        assert np.array_equal(result.coefficients, expected.coefficients)
        assert np.array_equal(result.trajectory, expected.trajectory)
        assert result.centroid == expected.centroid
