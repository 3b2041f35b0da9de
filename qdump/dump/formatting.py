"""Text formatting of complex amplitudes.

Dirac dumps show each amplitude as a signed magnitude: the sign is kept
apart from the text so that the caller can fold it into the `` + `` /
`` – `` separator between terms. Raw dumps show every amplitude in both
cartesian and polar form.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Tuple

MINUS = "–"

_BAR_WIDTH = 22
_ARROWS = ("---", "↗", "↑", "↖", "---", "↙", "↓", "↘")


def format_magnitude(value: float, precision: int) -> str:
    """
    Format |value| with at most `precision` fractional digits.

    The value is first cut to 15 significant digits, then rounded half
    away from zero, so decimal midpoints such as 2.675 round up even when
    the nearest double lies just below them. Trailing zeros and a
    trailing decimal point are dropped: 1.0 gives "1" and 0.70710678
    with precision 3 gives "0.707".

    >>> format_magnitude(-0.5, 0)
    '1'
    >>> format_magnitude(0.25, 3)
    '0.25'
    """
    magnitude = abs(value)
    if not math.isfinite(magnitude):
        return str(magnitude)

    digits = Decimal(format(magnitude, ".15g"))
    with localcontext() as ctx:
        ctx.prec = max(precision + digits.adjusted() + 2, 28)
        rounded = digits.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)

    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def is_negligible(real: float, imag: float, zero_tolerance: float) -> bool:
    """Return True if both components are below the tolerance in magnitude."""
    return abs(real) < zero_tolerance and abs(imag) < zero_tolerance


def format_amplitude(
    real: float,
    imag: float,
    precision: int,
    zero_tolerance: float,
) -> Tuple[bool, str]:
    """
    Render an amplitude as ``(is_positive, text)``.

    - Negligible imaginary part: the real magnitude, sign of the real part.
    - Negligible real part: the imaginary magnitude suffixed with ``i``,
      sign of the imaginary part.
    - Otherwise ``(R ± Ii)`` built from both magnitudes. The inner
      separator is ``+`` when both parts have the same sign and ``–``
      otherwise; the returned sign is that of the real part.

    Callers are expected to skip amplitudes for which is_negligible is
    True; they render as a zero magnitude here.
    """
    real_magnitude = abs(real)
    imag_magnitude = abs(imag)

    if imag_magnitude < zero_tolerance:
        return real > 0.0, format_magnitude(real_magnitude, precision)

    if real_magnitude < zero_tolerance:
        return imag > 0.0, format_magnitude(imag_magnitude, precision) + "i"

    real_positive = real > 0.0
    imag_positive = imag > 0.0
    separator = "+" if real_positive == imag_positive else MINUS

    real_text = format_magnitude(real_magnitude, precision)
    imag_text = format_magnitude(imag_magnitude, precision)
    return real_positive, f"({real_text} {separator} {imag_text}i)"


def format_raw_row(index: int, real: float, imag: float, index_width: int) -> str:
    """
    Render one basis state of a raw dump.

    The row holds the basis index, the cartesian amplitude, a probability
    bar with the probability itself, and an arrow with the phase::

        ∣3❭:	 0.707107 +  0.000000 i	 == 	***********          	[ 0.500000 ]	---	[  0.00000 rad ]
    """
    probability = real * real + imag * imag
    phase = math.atan2(imag, real)
    return (
        f"∣{index:>{index_width}}❭:\t"
        f"{real:9.6f} + {imag:9.6f} i\t == \t"
        f"{_probability_bar(probability)}\t[ {probability:.6f} ]\t"
        f"{_phase_arrow(phase)}\t[ {phase:8.5f} rad ]"
    )


def _probability_bar(probability: float) -> str:
    hits = int(round(_BAR_WIDTH * min(max(probability, 0.0), 1.0)))
    return ("*" * hits).ljust(_BAR_WIDTH)


def _phase_arrow(phase: float) -> str:
    sector = int(round(phase / (math.pi / 4))) % len(_ARROWS)
    return _ARROWS[sector]


__all__ = [
    "MINUS",
    "format_magnitude",
    "format_amplitude",
    "format_raw_row",
    "is_negligible",
]
