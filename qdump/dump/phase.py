"""Removal of the global phase from a stream of amplitudes."""

from __future__ import annotations

import math
from typing import Optional, Tuple


class PhaseNormalizer:
    """
    Rotate amplitudes by the phase of the first amplitude it is given.

    The first call to `rotate` fixes the reference phase θ of that
    amplitude; it and every later amplitude are multiplied by e^{-iθ}.
    The reference amplitude therefore comes out real and non-negative,
    and phases relative to it are preserved. Callers feed only
    non-negligible amplitudes, in enumeration order.
    """

    def __init__(self) -> None:
        self._reference: Optional[Tuple[float, float]] = None

    @property
    def reference(self) -> Optional[Tuple[float, float]]:
        """``(cos θ, sin θ)`` of the reference phase, or None before the first call."""
        return self._reference

    def rotate(self, real: float, imag: float) -> Tuple[float, float]:
        """Return ``(real, imag)`` rotated by minus the reference phase."""
        if self._reference is None:
            angle = math.atan2(imag, real)
            self._reference = (math.cos(angle), math.sin(angle))

        cos_ref, sin_ref = self._reference
        return (
            real * cos_ref + imag * sin_ref,
            imag * cos_ref - real * sin_ref,
        )


__all__ = ["PhaseNormalizer"]
