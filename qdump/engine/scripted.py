"""Amplitude engine that replays a fixed list of amplitudes."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple, Union

from .base import AmplitudeCallback, AmplitudeEngine

AmplitudeLike = Union[complex, float, Tuple[float, float]]


def _as_pair(value: AmplitudeLike) -> Tuple[float, float]:
    if isinstance(value, tuple):
        real, imag = value
        return float(real), float(imag)
    value = complex(value)
    return value.real, value.imag


class ScriptedEngine(AmplitudeEngine):
    """
    Replay the same amplitudes for every enumeration request.

    The engine does no linear algebra: whatever the requested qubits, it
    reports ``amplitudes`` in index order. It stands in for a real
    simulator when exercising dump sessions, including engines that
    misbehave.

    Args:
        amplitudes: Sequence of amplitudes in basis-index order, or a
            mapping from basis index to amplitude (missing indices of
            [0, 2**n) are zero). Amplitudes may be complex numbers, floats
            or (real, imag) pairs.
        qubit_ids: Allocated qubit ids. Defaults to 0..n-1 where 2**n is
            the number of amplitudes.
        entangled: Report subset requests as entangled.
        emit_before_entangled: Number of amplitudes handed to the
            callback before an entangled subset request returns False.
    """

    def __init__(
        self,
        amplitudes: Union[Sequence[AmplitudeLike], Mapping[int, AmplitudeLike]],
        qubit_ids: Optional[Sequence[int]] = None,
        entangled: bool = False,
        emit_before_entangled: int = 0,
    ) -> None:
        if isinstance(amplitudes, Mapping):
            if qubit_ids is None:
                raise ValueError("qubit_ids is required when amplitudes is a mapping.")
            dim = 2 ** len(qubit_ids)
            pairs = [(0.0, 0.0)] * dim
            for index, value in amplitudes.items():
                if index < 0 or index >= dim:
                    raise ValueError(f"basis index {index} out of range [0, {dim})")
                pairs[index] = _as_pair(value)
        else:
            pairs = [_as_pair(value) for value in amplitudes]

        if qubit_ids is None:
            n_qubits = max(len(pairs) - 1, 0).bit_length()
            qubit_ids = range(n_qubits)

        self._pairs = pairs
        self._qubit_ids = tuple(int(q) for q in qubit_ids)
        self._entangled = bool(entangled)
        self._emit_before_entangled = int(emit_before_entangled)
        self.requests: list = []

    @property
    def qubit_ids(self) -> Tuple[int, ...]:
        return self._qubit_ids

    def enumerate_all(self, callback: AmplitudeCallback) -> bool:
        self.requests.append(None)
        self._replay(callback, len(self._pairs))
        return True

    def enumerate_subset(
        self,
        qubit_ids: Sequence[int],
        callback: AmplitudeCallback,
    ) -> bool:
        self.qubit_positions(qubit_ids)
        self.requests.append(tuple(qubit_ids))
        if self._entangled:
            self._replay(callback, self._emit_before_entangled)
            return False
        self._replay(callback, len(self._pairs))
        return True

    def _replay(self, callback: AmplitudeCallback, count: int) -> None:
        for index, (real, imag) in enumerate(self._pairs[:count]):
            if not callback(index, real, imag):
                break


__all__ = ["ScriptedEngine"]
