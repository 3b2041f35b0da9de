"""Little-endian ket labels for computational basis states.

Bit i of a basis index is the value of the i-th listed qubit, and labels
list qubits in that order: index 1 of a 3-qubit register is ``|100⟩``.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

KET_OPEN = "|"
KET_CLOSE = "⟩"


def _check_index(index: int, n_qubits: int) -> None:
    if n_qubits < 0:
        raise ValueError(f"n_qubits must be non-negative, got {n_qubits}")
    if index < 0 or index >= 2**n_qubits:
        raise ValueError(
            f"basis index {index} out of range [0, {2**n_qubits}) "
            f"for {n_qubits} qubits"
        )


def index_to_bits(index: int, n_qubits: int) -> List[int]:
    """Return the bits of `index`, least significant first."""
    _check_index(index, n_qubits)
    return [(index >> i) & 1 for i in range(n_qubits)]


def bits_to_index(bits: Sequence[int]) -> int:
    """Inverse of index_to_bits."""
    index = 0
    for i, bit in enumerate(bits):
        if bit not in (0, 1):
            raise ValueError(f"bits must be 0 or 1, got {bit!r} at position {i}")
        index |= bit << i
    return index


def basis_ket(index: int, n_qubits: int) -> str:
    """
    Render basis index `index` of an n-qubit register as a ket.

    >>> basis_ket(1, 3)
    '|100⟩'
    >>> basis_ket(6, 3)
    '|011⟩'
    """
    bits = index_to_bits(index, n_qubits)
    return KET_OPEN + "".join("1" if bit else "0" for bit in bits) + KET_CLOSE


def parse_ket(label: str) -> Tuple[int, int]:
    """
    Parse a label produced by basis_ket.

    Returns:
        ``(index, n_qubits)``.

    Raises:
        ValueError: If label is not a little-endian bit-string ket.
    """
    if not (label.startswith(KET_OPEN) and label.endswith(KET_CLOSE)):
        raise ValueError(f"Not a ket label: {label!r}")
    body = label[len(KET_OPEN):-len(KET_CLOSE)]
    if any(ch not in "01" for ch in body):
        raise ValueError(f"Ket label must contain only 0 and 1: {label!r}")
    return bits_to_index([int(ch) for ch in body]), len(body)


__all__ = [
    "KET_OPEN",
    "KET_CLOSE",
    "index_to_bits",
    "bits_to_index",
    "basis_ket",
    "parse_ket",
]
