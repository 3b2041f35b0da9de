"""Formatting configuration for Dirac-notation dumps."""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_PRECISION = 3
DEFAULT_ZERO_TOLERANCE = 1e-7


@dataclass(frozen=True)
class FormatConfig:
    """
    How amplitudes are rendered during one dump.

    Attributes
    ----------
    precision:
        Maximum number of fractional digits shown for each amplitude
        component. Trailing zeros are dropped rather than padded.
    zero_tolerance:
        Components whose magnitude is below this value are treated as
        zero. A basis state whose components are both below it is left
        out of the output.
    use_relative_phases:
        Rotate every amplitude by the phase of the first non-negligible
        one, so that the global phase is removed from the output.
    """

    precision: int = DEFAULT_PRECISION
    zero_tolerance: float = DEFAULT_ZERO_TOLERANCE
    use_relative_phases: bool = False

    def __post_init__(self) -> None:
        """Validate precision and tolerance."""
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError(
                f"precision must be an int, got {type(self.precision).__name__}"
            )
        if self.precision < 0:
            raise ValueError(f"precision must be non-negative, got {self.precision}")
        tol = float(self.zero_tolerance)
        if math.isnan(tol) or tol < 0:
            raise ValueError(
                f"zero_tolerance must be non-negative, got {self.zero_tolerance}"
            )
        object.__setattr__(self, "zero_tolerance", tol)
        object.__setattr__(self, "use_relative_phases", bool(self.use_relative_phases))
