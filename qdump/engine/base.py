"""Interface between dump sessions and amplitude enumeration engines."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Sequence, Tuple

AmplitudeCallback = Callable[[int, float, float], bool]
"""Visitor called as ``callback(basis_index, real, imaginary)``.

Returns whether the engine should keep enumerating.
"""


class AmplitudeEngine(ABC):
    """
    Base class for engines that enumerate basis-state amplitudes.

    An engine owns the simulated state. Dumps only ever see it one
    amplitude at a time through an AmplitudeCallback, invoked
    synchronously and in ascending basis-index order from inside
    enumerate_all / enumerate_subset.
    """

    @property
    @abstractmethod
    def qubit_ids(self) -> Tuple[int, ...]:
        """Ids of every allocated qubit, least significant first."""

    @abstractmethod
    def enumerate_all(self, callback: AmplitudeCallback) -> bool:
        """
        Visit every amplitude of the joint state of all allocated qubits.

        Returns:
            True once enumeration is complete.
        """

    @abstractmethod
    def enumerate_subset(
        self,
        qubit_ids: Sequence[int],
        callback: AmplitudeCallback,
    ) -> bool:
        """
        Visit the amplitudes of the state restricted to qubit_ids.

        Bit k of each reported basis index refers to qubit_ids[k].

        Returns:
            True once enumeration is complete, False if the subset is
            entangled with qubits outside it. The callback must not be
            relied upon to have produced anything meaningful when False
            is returned.

        Raises:
            ValueError: If a requested id is not allocated.
        """

    def qubit_positions(self, qubit_ids: Sequence[int]) -> Tuple[int, ...]:
        """
        Map qubit ids to bit positions in the full basis index.

        Raises:
            ValueError: If an id is not allocated.
        """
        allocated = self.qubit_ids
        positions = []
        for qid in qubit_ids:
            try:
                positions.append(allocated.index(qid))
            except ValueError:
                raise ValueError(
                    f"Qubit id {qid} is not allocated. "
                    f"Allocated ids: {list(allocated)}"
                ) from None
        return tuple(positions)
