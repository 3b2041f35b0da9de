"""State-dump rendering: Dirac-notation and raw dumps of engine amplitudes."""

from .config import DEFAULT_PRECISION, DEFAULT_ZERO_TOLERANCE, FormatConfig
from .formatting import format_amplitude, format_magnitude, format_raw_row, is_negligible
from .ket import basis_ket, bits_to_index, index_to_bits, parse_ket
from .orchestrator import (
    ENTANGLED_MESSAGE,
    DumpResult,
    DumpStatus,
    check_qubits,
    dump_machine,
    dump_register,
    dump_register_dirac,
    format_header,
)
from .phase import PhaseNormalizer
from .session import (
    BasisAmplitude,
    DiracSession,
    DumpProtocolError,
    DumpSession,
    RawSession,
)
from .sinks import (
    FileSink,
    MessageSink,
    Sink,
    SinkError,
    console_message,
    resolve_sink,
)

__all__ = [
    # Configuration
    "FormatConfig",
    "DEFAULT_PRECISION",
    "DEFAULT_ZERO_TOLERANCE",
    # Formatting
    "format_amplitude",
    "format_magnitude",
    "format_raw_row",
    "is_negligible",
    "PhaseNormalizer",
    # Kets
    "basis_ket",
    "parse_ket",
    "index_to_bits",
    "bits_to_index",
    # Sessions
    "BasisAmplitude",
    "DumpSession",
    "DiracSession",
    "RawSession",
    "DumpProtocolError",
    # Sinks
    "Sink",
    "MessageSink",
    "FileSink",
    "SinkError",
    "console_message",
    "resolve_sink",
    # Dump operations
    "DumpStatus",
    "DumpResult",
    "ENTANGLED_MESSAGE",
    "check_qubits",
    "format_header",
    "dump_machine",
    "dump_register",
    "dump_register_dirac",
]
