"""Sanity checks run on statevectors before an engine enumerates them."""

from __future__ import annotations

import torch


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Return the L2 norm of a statevector, or of each row of a batch.

    Args:
        state: Complex tensor of shape (..., 2**n).

    Raises:
        ValueError: If state is a scalar.
    """
    if state.dim() == 0:
        raise ValueError("state_norm expects at least one dimension, got a scalar.")
    return torch.linalg.vector_norm(state, dim=-1)


def assert_normalized(state: torch.Tensor, atol: float = 1e-5) -> None:
    """
    Raise unless every norm in `state` is within `atol` of 1.

    A dump of an unnormalized state would print amplitudes that do not
    correspond to any physical state, so engines call this in debug mode.

    Raises:
        ValueError: If a norm is non-finite or off by more than atol.
    """
    norms = state_norm(state)
    if not bool(torch.isfinite(norms).all()):
        raise ValueError("State norm contains non-finite values.")

    deviation = float(torch.max(torch.abs(norms - 1.0)))
    if deviation > atol:
        raise ValueError(
            f"State is not normalized within tolerance {atol} "
            f"(norms: {norms.detach().cpu().tolist()})"
        )
