"""Where engine statevectors live, and in which precision."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

import torch


@dataclass(frozen=True)
class Device:
    """
    A named torch device together with the complex dtype used for states on it.

    Dumps read every amplitude as a pair of Python floats, so states are
    kept in complex128 unless a caller asks otherwise.

    Attributes:
        name: Logical name, "sv_cpu" or "sv_cuda".
        torch_device: Device that state tensors are allocated on.
        complex_dtype: Dtype of state tensors.
    """

    name: str
    torch_device: torch.device
    complex_dtype: torch.dtype = torch.complex128

    def as_torch_device(self) -> torch.device:
        return self.torch_device


def _cuda() -> Device:
    if not torch.cuda.is_available():
        raise RuntimeError(
            "CUDA device requested but torch.cuda.is_available() is False"
        )
    return Device(name="sv_cuda", torch_device=torch.device("cuda"))


_DEVICES: Dict[str, Callable[[], Device]] = {
    "sv_cpu": lambda: Device(name="sv_cpu", torch_device=torch.device("cpu")),
    "sv_cuda": _cuda,
}


def device(name: str) -> Device:
    """
    Look up a device by name.

    Raises:
        RuntimeError: If "sv_cuda" is requested but CUDA is not available.
        ValueError: If the name is unknown.
    """
    try:
        factory = _DEVICES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported device name: {name!r}. Supported devices: {sorted(_DEVICES)}"
        ) from None
    return factory()


def default_device() -> Device:
    """The CPU statevector device."""
    return device("sv_cpu")
