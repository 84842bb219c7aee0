"""Radix-2 decimation-in-time FFT.

The transform follows the classic recursive even/odd split::

    X[k]       = E[k] + W_N^k * O[k]
    X[k + N/2] = E[k] - W_N^k * O[k]      W_N^k = cos(-2pi k/N) + i sin(-2pi k/N)

but evaluates it bottom-up over a single buffer. Loading the input in
bit-reversed order places every even/odd sub-transform in a contiguous block,
so each stage is a strided butterfly across ``N / size`` blocks of ``size``
samples instead of a fresh pair of arrays per recursion level.
"""

from __future__ import annotations

import math

import numpy as np

from fftlab.core.errors import InvalidLength
from fftlab.core.logger import get_logger
from fftlab.core.utils import as_signal, is_power_of_two

LOGGER = get_logger(__name__)


def _bit_reversal(n: int) -> np.ndarray:
    bits = n.bit_length() - 1
    idx = np.arange(n, dtype=np.intp)
    rev = np.zeros(n, dtype=np.intp)
    for b in range(bits):
        rev |= ((idx >> b) & 1) << (bits - 1 - b)
    return rev


def _twiddles(size: int) -> np.ndarray:
    k = np.arange(size // 2, dtype=np.float64)
    angle = -2 * math.pi * k / size
    twiddle = np.empty(size // 2, dtype=np.complex128)
    twiddle.real = np.cos(angle)
    twiddle.imag = np.sin(angle)
    return twiddle


def fft(signal: np.ndarray) -> np.ndarray:
    """Return the ``N`` complex DFT coefficients of ``signal``.

    Raises:
        InvalidLength: if ``len(signal)`` is zero or not a power of two.
    """

    data = as_signal(signal)
    n = data.size
    if not is_power_of_two(n):
        raise InvalidLength(f"FFT length must be a positive power of two, got {n}")

    out = data[_bit_reversal(n)]
    size = 2
    while size <= n:
        half = size // 2
        blocks = out.reshape(-1, size)
        even = blocks[:, :half].copy()
        t = _twiddles(size) * blocks[:, half:]
        blocks[:, :half] = even + t
        blocks[:, half:] = even - t
        size *= 2

    LOGGER.debug("Computed FFT", extra={"num_points": n})
    return out


__all__ = ["fft"]
