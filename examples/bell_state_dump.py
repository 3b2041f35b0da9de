"""Dump example: printing a Bell pair and a product state.

Shows Dirac and raw dumps of a whole register, a subset dump that fails
because the qubits are entangled, a relative-phase dump, and a dump to a
file.
"""

from __future__ import annotations

import math
import tempfile
from pathlib import Path

import torch

import qdump as qd


def main() -> None:
    """Render a few small states to the console and to a file."""
    s = 1.0 / math.sqrt(2.0)

    bell = qd.StatevectorEngine(
        torch.tensor([s, 0.0, 0.0, s], dtype=torch.complex128),
        qubit_ids=[3, 5],
    )

    print("Bell pair in Dirac notation:")
    qd.dump_register_dirac(bell, None)

    print("\nBell pair, raw amplitudes:")
    qd.dump_machine(bell)

    print("\nFirst qubit of the Bell pair alone:")
    qd.dump_register_dirac(bell, None, [3])

    # i|+⟩ on qubit 0, |1⟩ on qubit 1
    product = qd.StatevectorEngine(
        torch.tensor([0.0, 0.0, s * 1j, s * 1j], dtype=torch.complex128)
    )

    print("\nProduct state with a global phase of i:")
    qd.dump_register_dirac(product, None, precision=4)

    print("\nSame state with relative phases:")
    qd.dump_register_dirac(product, None, precision=4, use_relative_phases=True)

    print("\nQubit 1 of the product state:")
    qd.dump_register(product, None, [1])

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "bell.txt"
        result = qd.dump_register_dirac(bell, path)
        print(f"\nWrote {result.status.value} dump to file:")
        print(path.read_text(encoding="utf-8"), end="")

    print("\nDump to a directory that does not exist:")
    qd.dump_machine(bell, "/nonexistent-qdump-dir/state.txt")


if __name__ == "__main__":
    main()
