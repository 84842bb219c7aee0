import numpy as np
import pytest

from fftlab.core.errors import InvalidLength, InvalidParameter, MismatchedLength
from fftlab.core.types import Spectrum, WaveParams
from fftlab.dsp.fft import fft
from fftlab.dsp.spectrum import (
    derive_amplitude_spectrum,
    derive_phase_spectrum,
    frequency_axis,
    frequency_step,
    spectral_peaks,
)
from fftlab.dsp.wavegen import compose_waves, generate_wave


def test_single_tone_amplitude_spectrum():
    num_points, rate = 512, 1000.0
    coeffs = fft(generate_wave(num_points, WaveParams(frequency=10, amplitude=1.0)))
    spectrum = derive_amplitude_spectrum(coeffs, num_points, rate)
    assert len(spectrum) == 256
    assert spectrum.kind == "amplitude"
    assert spectrum.values[10] == pytest.approx(1.0, abs=1e-6)
    others = np.delete(spectrum.values, 10)
    assert np.all(np.abs(others) < 1e-6)
    assert spectrum.freqs[10] == pytest.approx(10 * rate / num_points)


def test_frequency_axis_and_step():
    freqs = frequency_axis(8, 1000.0)
    assert np.allclose(freqs, [0, 125, 250, 375])
    assert frequency_step(512, 1000.0) == pytest.approx(1.953125)


@pytest.mark.parametrize("phase", [0.0, 30.0, -120.0, 77.0, 179.0])
def test_phase_spectrum_reports_sine_phase(phase):
    num_points = 256
    coeffs = fft(generate_wave(num_points, WaveParams(frequency=6, amplitude=1.0, phase_degrees=phase)))
    spectrum = derive_phase_spectrum(coeffs, num_points, 1000.0)
    assert spectrum.kind == "phase"
    assert spectrum.values[6] == pytest.approx(phase, abs=1e-6)


def test_phase_spectrum_without_offset():
    coeffs = fft(generate_wave(64, WaveParams(frequency=4, amplitude=1.0)))
    spectrum = derive_phase_spectrum(coeffs, 64, 1000.0, offset_deg=0.0)
    assert spectrum.values[4] == pytest.approx(-90.0, abs=1e-6)


def test_phase_spectrum_wraps_into_half_open_range():
    coeffs = np.array([-1 + 0j, 1j, -1j, 1 + 0j, 0, 0, 0, 0])
    for offset in (90.0, -90.0, 180.0, -180.0, 0.0):
        values = derive_phase_spectrum(coeffs, 8, 8.0, offset_deg=offset).values
        assert np.all(values > -180) and np.all(values <= 180)
    values = derive_phase_spectrum(coeffs, 8, 8.0).values
    assert np.allclose(values, [-90.0, 180.0, 0.0, 90.0])


def test_spectrum_validates_inputs():
    coeffs = np.zeros(16, dtype=np.complex128)
    with pytest.raises(MismatchedLength):
        derive_amplitude_spectrum(coeffs, 32, 1000.0)
    with pytest.raises(InvalidParameter):
        derive_amplitude_spectrum(coeffs, 16, 0.0)
    with pytest.raises(InvalidLength):
        derive_phase_spectrum(np.zeros(12), 12, 1000.0)
    with pytest.raises(InvalidParameter):
        derive_phase_spectrum(coeffs, 16, 1000.0, offset_deg=float("nan"))


def test_within_and_nearest():
    spectrum = Spectrum(freqs=np.array([0.0, 10.0, 20.0, 30.0]), values=np.array([1.0, 2.0, 3.0, 4.0]), kind="amplitude")
    window = spectrum.within(10.0, 20.0)
    assert np.array_equal(window.freqs, [10.0, 20.0])
    assert np.array_equal(window.values, [2.0, 3.0])
    assert spectrum.nearest(24.0).value == 3.0
    assert spectrum.peak().frequency_hz == 30.0
    assert len(spectrum.points()) == 4


def test_spectral_peaks_orders_by_height():
    num_points, rate = 512, 1000.0
    x = compose_waves(
        [
            generate_wave(num_points, WaveParams(17, 1.0)),
            generate_wave(num_points, WaveParams(31, 3.0)),
            generate_wave(num_points, WaveParams(23, 2.0)),
        ]
    )
    spectrum = derive_amplitude_spectrum(fft(x), num_points, rate)
    peaks = spectral_peaks(spectrum, count=3, min_height=0.1)
    assert [round(p.frequency_hz / frequency_step(num_points, rate)) for p in peaks] == [31, 23, 17]
    assert peaks[0].value == pytest.approx(3.0, abs=1e-6)
    assert spectral_peaks(spectrum, count=0) == []


def test_empty_spectrum_lookups_raise_invalid_length():
    empty = Spectrum(freqs=np.array([]), values=np.array([]), kind="amplitude")
    with pytest.raises(InvalidLength):
        empty.peak()
    with pytest.raises(InvalidLength):
        empty.nearest(10.0)
