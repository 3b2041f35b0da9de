"""Dump sessions: the consumers of one amplitude enumeration pass.

A session is handed to an engine as its callback. It counts down the
2**n basis states it expects, renders each one, and writes the rendered
text to its output exactly once, when the last state has been seen. If
the engine instead reports entanglement the session is discarded and
writes nothing.

The session state is explicit::

    Accumulating(remaining, terms, normalizer) --last state--> Flushed(text)
                                               --entangled---> Discarded()

Any callback received outside Accumulating means the engine broke the
enumeration contract and raises DumpProtocolError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from ..logging import get_logger
from .config import FormatConfig
from .formatting import MINUS, format_amplitude, format_raw_row, is_negligible
from .ket import basis_ket
from .phase import PhaseNormalizer

logger = get_logger(__name__)


class DumpProtocolError(RuntimeError):
    """An engine invoked a dump session in a way the enumeration contract forbids."""


@dataclass(frozen=True)
class BasisAmplitude:
    """The amplitude of one computational basis state."""

    index: int
    real: float
    imaginary: float


@dataclass
class Accumulating:
    """Session is still receiving amplitudes."""

    remaining: int
    terms: List[str] = field(default_factory=list)
    normalizer: Optional[PhaseNormalizer] = None


@dataclass(frozen=True)
class Flushed:
    """Session wrote its rendered text."""

    text: str


@dataclass(frozen=True)
class Discarded:
    """Session was abandoned after an entanglement signal."""


SessionState = Union[Accumulating, Flushed, Discarded]


class DumpSession(ABC):
    """
    Base class for sessions; subclasses decide how a state is rendered.

    Instances are callable with the engine callback signature
    ``(index, real, imaginary) -> bool`` and return False once every
    expected state has been received.

    Args:
        n_qubits: Number of qubits being dumped; 2**n_qubits callbacks
            are expected.
        write: Receives each output line when the session flushes.
    """

    def __init__(self, n_qubits: int, write: Callable[[str], None]) -> None:
        if n_qubits < 0:
            raise ValueError(f"n_qubits must be non-negative, got {n_qubits}")
        self._n_qubits = n_qubits
        self._write = write
        self._state: SessionState = self._initial_state()

    @property
    def n_qubits(self) -> int:
        return self._n_qubits

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def text(self) -> Optional[str]:
        """The flushed text, or None if the session has not flushed."""
        if isinstance(self._state, Flushed):
            return self._state.text
        return None

    def __call__(self, index: int, real: float, imaginary: float) -> bool:
        return self.on_amplitude(BasisAmplitude(index, real, imaginary))

    def on_amplitude(self, amplitude: BasisAmplitude) -> bool:
        """
        Consume one basis state.

        Returns:
            True while more states are expected, False after the last one.

        Raises:
            DumpProtocolError: If the session already flushed or was
                discarded, or the index is outside the register.
        """
        state = self._state
        if not isinstance(state, Accumulating):
            raise DumpProtocolError(
                f"Amplitude for basis state {amplitude.index} received after "
                f"the session became {type(state).__name__.lower()}."
            )
        if amplitude.index < 0 or amplitude.index >= 2**self._n_qubits:
            raise DumpProtocolError(
                f"Basis index {amplitude.index} is out of range for "
                f"{self._n_qubits} qubits."
            )

        state.remaining -= 1
        term = self._render(amplitude, state)
        if term is not None:
            state.terms.append(term)

        if state.remaining == 0:
            self._flush(state)
            return False
        return True

    def on_entangled(self) -> None:
        """Abandon the session, dropping anything rendered so far."""
        if isinstance(self._state, Flushed):
            raise DumpProtocolError(
                "Engine reported entanglement after the session was flushed."
            )
        self._state = Discarded()

    def finish(self) -> None:
        """
        Confirm that enumeration completed.

        Raises:
            DumpProtocolError: If states are still outstanding.
        """
        state = self._state
        if isinstance(state, Accumulating):
            raise DumpProtocolError(
                f"Enumeration ended with {state.remaining} of "
                f"{2**self._n_qubits} basis states outstanding."
            )

    def _initial_state(self) -> Accumulating:
        return Accumulating(remaining=2**self._n_qubits)

    def _flush(self, state: Accumulating) -> None:
        lines = self._lines(state.terms)
        self._state = Flushed("\n".join(lines))
        logger.debug("Flushing %d rendered terms", len(state.terms))
        for line in lines:
            self._write(line)

    @abstractmethod
    def _render(self, amplitude: BasisAmplitude, state: Accumulating) -> Optional[str]:
        """Render one state, or return None to leave it out."""

    @abstractmethod
    def _lines(self, terms: List[str]) -> List[str]:
        """Assemble rendered terms into output lines."""


class DiracSession(DumpSession):
    """
    Render the state as a single line in Dirac notation.

    Example output for a Bell pair with precision 3::

        0.707|00⟩ + 0.707|11⟩
    """

    def __init__(
        self,
        n_qubits: int,
        write: Callable[[str], None],
        config: Optional[FormatConfig] = None,
    ) -> None:
        self._config = config if config is not None else FormatConfig()
        super().__init__(n_qubits, write)

    @property
    def config(self) -> FormatConfig:
        return self._config

    def _initial_state(self) -> Accumulating:
        normalizer = PhaseNormalizer() if self._config.use_relative_phases else None
        return Accumulating(remaining=2**self._n_qubits, normalizer=normalizer)

    def _render(self, amplitude: BasisAmplitude, state: Accumulating) -> Optional[str]:
        config = self._config
        real, imag = amplitude.real, amplitude.imaginary

        if is_negligible(real, imag, config.zero_tolerance):
            return None

        if state.normalizer is not None:
            real, imag = state.normalizer.rotate(real, imag)

        positive, text = format_amplitude(
            real, imag, config.precision, config.zero_tolerance
        )
        ket = basis_ket(amplitude.index, self._n_qubits)
        term = ket if text == "1" else f"{text}{ket}"

        # The first term carries no sign.
        if not state.terms:
            return term
        return f" {'+' if positive else MINUS} {term}"

    def _lines(self, terms: List[str]) -> List[str]:
        return ["".join(terms)]


class RawSession(DumpSession):
    """Render every basis state, including zero ones, as its own row."""

    def _render(self, amplitude: BasisAmplitude, state: Accumulating) -> Optional[str]:
        width = len(str(2**self._n_qubits - 1))
        return format_raw_row(amplitude.index, amplitude.real, amplitude.imaginary, width)

    def _lines(self, terms: List[str]) -> List[str]:
        return list(terms)


__all__ = [
    "BasisAmplitude",
    "DumpProtocolError",
    "DumpSession",
    "DiracSession",
    "RawSession",
    "Accumulating",
    "Flushed",
    "Discarded",
]
