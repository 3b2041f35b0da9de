"""Statevector helpers used to build and check the states engines enumerate.

Convention: qubit 0 is the least significant bit of the computational basis
index, so basis index ``i`` has qubit ``p`` set iff ``(i >> p) & 1``.
"""

from __future__ import annotations

import math

import torch

from ..core.device import Device, default_device, device as device_factory


def _resolve_device(device: Device | torch.device | str | None) -> Device:
    if device is None:
        return default_device()
    if isinstance(device, Device):
        return device
    if isinstance(device, str):
        return device_factory(device)
    if isinstance(device, torch.device):
        if device.type == "cpu":
            return device_factory("sv_cpu")
        if device.type == "cuda":
            return device_factory("sv_cuda")
        raise ValueError(
            f"Unsupported torch.device type: {device.type}. "
            "Only 'cpu' and 'cuda' are supported."
        )
    raise TypeError(
        f"device must be Device, str, torch.device, or None, got {type(device)}"
    )


def infer_n_qubits(state: torch.Tensor, n_qubits: int | None = None) -> int:
    """
    Return the number of qubits described by a 1-D statevector.

    Args:
        state: Complex tensor of shape (2**n_qubits,).
        n_qubits: Expected number of qubits. If None, inferred from
            state.shape[-1].

    Returns:
        The number of qubits.

    Raises:
        ValueError: If state is not a complex 1-D tensor or its dimension
            is not a power of 2 (or does not match n_qubits).
    """
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    if state.dim() != 1:
        raise ValueError(
            f"state must be a 1-D statevector, got shape {tuple(state.shape)}"
        )

    dim = state.shape[-1]
    if n_qubits is None:
        if dim < 2:
            raise ValueError(f"state dimension {dim} describes no qubits")
        n_qubits = int(math.log2(dim))
        if 2**n_qubits != dim:
            raise ValueError(
                f"state dimension {dim} is not a power of 2. "
                "Please specify n_qubits explicitly."
            )
    elif 2**n_qubits != dim:
        raise ValueError(
            f"state dimension {dim} does not match 2**n_qubits = {2**n_qubits}"
        )

    return n_qubits


def zero_state(
    n_qubits: int,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the zero state |0...0⟩ for n_qubits.

    Args:
        n_qubits: Number of qubits. Must be >= 1.
        device: Device specification. Can be Device, str, torch.device, or None.
        dtype: Complex dtype. Defaults to the device's complex dtype.

    Returns:
        A complex tensor of shape (2**n_qubits,) with amplitude 1 at index 0.

    Raises:
        ValueError: If n_qubits < 1.
    """
    return basis_state(0, n_qubits, device=device, dtype=dtype)


def basis_state(
    index: int,
    n_qubits: int,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the computational basis state |index⟩ for n_qubits.

    Args:
        index: Basis index in [0, 2**n_qubits), little-endian.
        n_qubits: Number of qubits. Must be >= 1.
        device: Device specification. Can be Device, str, torch.device, or None.
        dtype: Complex dtype. Defaults to the device's complex dtype.

    Raises:
        ValueError: If n_qubits < 1 or index is out of range.
    """
    if n_qubits < 1:
        raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")

    dim = 2**n_qubits
    if index < 0 or index >= dim:
        raise ValueError(f"basis index {index} out of range [0, {dim})")

    qdevice = _resolve_device(device)
    if dtype is None:
        dtype = qdevice.complex_dtype

    state = torch.zeros(dim, dtype=dtype, device=qdevice.as_torch_device())
    state[index] = 1.0 + 0.0j
    return state


__all__ = [
    "zero_state",
    "basis_state",
    "infer_n_qubits",
]
