"""Statevector construction and validation helpers."""

from .statevector import basis_state, infer_n_qubits, zero_state

__all__ = [
    "zero_state",
    "basis_state",
    "infer_n_qubits",
]
