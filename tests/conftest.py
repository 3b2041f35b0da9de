"""Pytest configuration and shared fixtures for qdump tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A recording message channel
- Common statevectors
"""

import math
import os
from typing import List

import numpy as np
import pytest
import torch


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic torch RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    from qdump.core.device import default_device

    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    device = default_device().as_torch_device()
    generator = torch.Generator(device=device)
    generator.manual_seed(seed)
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds(rng: np.random.Generator, torch_rng: torch.Generator) -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))
    torch.manual_seed(int(os.environ.get("TEST_RNG_SEED", "0")))


class RecordingChannel:
    """Message channel that keeps every line it receives."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)


@pytest.fixture
def channel() -> RecordingChannel:
    """Provide a message channel that records lines."""
    return RecordingChannel()


@pytest.fixture
def bell_state() -> torch.Tensor:
    """(|00⟩ + |11⟩)/√2 as a complex128 statevector."""
    s = 1.0 / math.sqrt(2.0)
    return torch.tensor([s, 0.0, 0.0, s], dtype=torch.complex128)


@pytest.fixture
def plus_zero_state() -> torch.Tensor:
    """|+⟩ on qubit 0 and |0⟩ on qubit 1: (|00⟩ + |10⟩)/√2 in ket order."""
    s = 1.0 / math.sqrt(2.0)
    return torch.tensor([s, s, 0.0, 0.0], dtype=torch.complex128)
