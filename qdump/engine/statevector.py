"""Amplitude engine backed by a dense torch statevector."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import torch

from ..backend.statevector import infer_n_qubits
from ..diagnostics import assert_normalized, is_debug_enabled
from ..logging import get_logger
from .base import AmplitudeCallback, AmplitudeEngine

logger = get_logger(__name__)


class StatevectorEngine(AmplitudeEngine):
    """
    Enumerate amplitudes of a pure state held as a torch tensor.

    Qubit position p is bit p of the basis index (LSB first) and
    ``qubit_ids[p]`` is its id. Subset requests are answered only when
    the requested qubits are in a product state with the rest of the
    register; whether that holds is decided from the singular values of
    the state reshaped into a (subset, rest) matrix.

    Args:
        state: Complex tensor of shape (2**n,). Converted to complex128
            on the CPU.
        qubit_ids: Id of the qubit at each position. Defaults to 0..n-1.
        separability_tol: A subset counts as entangled when its second
            singular value exceeds this fraction of the first.

    Example:
        >>> import math, torch
        >>> s = 1 / math.sqrt(2)
        >>> engine = StatevectorEngine(torch.tensor([s, 0, 0, s], dtype=torch.complex128))
        >>> engine.enumerate_subset([0], lambda i, re, im: True)
        False
    """

    def __init__(
        self,
        state: torch.Tensor | Sequence[complex],
        qubit_ids: Optional[Sequence[int]] = None,
        separability_tol: float = 1e-8,
    ) -> None:
        state = torch.as_tensor(state)
        if not torch.is_complex(state):
            state = state.to(torch.complex128)
        n_qubits = infer_n_qubits(state)

        if qubit_ids is None:
            ids = tuple(range(n_qubits))
        else:
            ids = tuple(int(q) for q in qubit_ids)
        if len(ids) != n_qubits:
            raise ValueError(
                f"Expected {n_qubits} qubit ids for a {n_qubits}-qubit state, "
                f"got {len(ids)}"
            )
        if len(set(ids)) != len(ids):
            raise ValueError(f"Qubit ids must be distinct, got {list(ids)}")
        if separability_tol < 0:
            raise ValueError(
                f"separability_tol must be non-negative, got {separability_tol}"
            )

        self._state = state.detach().to(device="cpu", dtype=torch.complex128)
        self._n_qubits = n_qubits
        self._qubit_ids = ids
        self._separability_tol = float(separability_tol)

    @property
    def qubit_ids(self) -> Tuple[int, ...]:
        return self._qubit_ids

    @property
    def n_qubits(self) -> int:
        return self._n_qubits

    @property
    def state(self) -> torch.Tensor:
        """A copy of the underlying statevector."""
        return self._state.clone()

    def enumerate_all(self, callback: AmplitudeCallback) -> bool:
        self._check_state()
        _visit(self._state, callback)
        return True

    def enumerate_subset(
        self,
        qubit_ids: Sequence[int],
        callback: AmplitudeCallback,
    ) -> bool:
        positions = self.qubit_positions(qubit_ids)
        self._check_state()

        reduced = self._reduced_state(positions)
        if reduced is None:
            return False

        _visit(reduced, callback)
        return True

    def _check_state(self) -> None:
        if is_debug_enabled():
            assert_normalized(self._state, atol=1e-6)

    def _reduced_state(self, positions: Tuple[int, ...]) -> Optional[torch.Tensor]:
        """Return the normalized state of `positions`, or None if entangled."""
        n = self._n_qubits
        k = len(positions)

        # Reshaping to (2,)*n puts the most significant bit on axis 0.
        # Listing the subset axes from last to first makes bit k of the
        # row index correspond to positions[k].
        subset_axes = [n - 1 - p for p in reversed(positions)]
        rest_axes = [axis for axis in range(n) if axis not in subset_axes]

        tensor = self._state.reshape((2,) * n)
        matrix = tensor.permute(subset_axes + rest_axes).reshape(2**k, -1)

        singular_values = torch.linalg.svdvals(matrix)
        if singular_values.numel() > 1:
            largest = float(singular_values[0])
            second = float(singular_values[1])
            if second > self._separability_tol * largest:
                logger.debug(
                    "Qubits at positions %s are entangled "
                    "(singular values %.3e, %.3e)",
                    list(positions),
                    largest,
                    second,
                )
                return None

        column_norms = torch.linalg.vector_norm(matrix, dim=0)
        column = int(torch.argmax(column_norms))
        norm = column_norms[column]
        if float(norm) == 0.0:
            raise ValueError("Cannot enumerate a subset of the zero vector.")
        return matrix[:, column] / norm


def _visit(state: torch.Tensor, callback: AmplitudeCallback) -> None:
    pairs = torch.view_as_real(state.contiguous()).tolist()
    for index, (real, imag) in enumerate(pairs):
        if not callback(index, real, imag):
            break


__all__ = ["StatevectorEngine"]
