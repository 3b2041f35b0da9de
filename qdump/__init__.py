"""qdump - render simulated quantum register state as text."""

__version__ = "0.1.0"

# Statevector helpers
from .backend import basis_state, infer_n_qubits, zero_state
from .core import Device, default_device, device

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)

# Dumps
from .dump import (
    ENTANGLED_MESSAGE,
    BasisAmplitude,
    DiracSession,
    DumpProtocolError,
    DumpResult,
    DumpStatus,
    FormatConfig,
    PhaseNormalizer,
    RawSession,
    basis_ket,
    dump_machine,
    dump_register,
    dump_register_dirac,
    format_amplitude,
    parse_ket,
)

# Engines
from .engine import AmplitudeEngine, ScriptedEngine, StatevectorEngine

__all__ = [
    # Version
    "__version__",
    # Core
    "Device",
    "device",
    "default_device",
    # Statevectors
    "zero_state",
    "basis_state",
    "infer_n_qubits",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Engines
    "AmplitudeEngine",
    "StatevectorEngine",
    "ScriptedEngine",
    # Dumps
    "FormatConfig",
    "BasisAmplitude",
    "PhaseNormalizer",
    "DiracSession",
    "RawSession",
    "DumpProtocolError",
    "DumpStatus",
    "DumpResult",
    "ENTANGLED_MESSAGE",
    "format_amplitude",
    "basis_ket",
    "parse_ket",
    "dump_machine",
    "dump_register",
    "dump_register_dirac",
]
