"""Typed failures raised by the Fourier engine."""

from __future__ import annotations


class FourierError(ValueError):
    """Base class for every engine input error."""


class InvalidLength(FourierError):
    """Raised when a signal length is non-positive or not a power of two where required."""


class MismatchedLength(FourierError):
    """Raised when signals that must share a length do not."""


class InvalidParameter(FourierError):
    """Raised for non-finite or out-of-domain numeric parameters."""


__all__ = ["FourierError", "InvalidLength", "MismatchedLength", "InvalidParameter"]
