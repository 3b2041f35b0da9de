"""Dump operations: the caller-facing entry points.

Every dump writes a header naming the dumped qubit ids, least significant
first, and then either the rendered state or, if the engine reports the
qubits as entangled with the rest of the register, a fixed diagnostic
line.

Dumps are meant to be dropped into a running computation, so a file that
cannot be opened, written or closed never raises out of a dump call. The
failure is returned as a DumpResult with status SINK_FAILED and reported
as one ``[warning]`` line on the message channel. Every other error (bad
arguments, an engine that fails or breaks the enumeration contract, a
message channel that cannot be written) propagates.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from ..engine.base import AmplitudeEngine
from ..logging import get_logger
from .config import DEFAULT_PRECISION, DEFAULT_ZERO_TOLERANCE, FormatConfig
from .session import DiracSession, DumpSession, RawSession
from .sinks import (
    Location,
    MessageChannel,
    Sink,
    SinkError,
    console_message,
    resolve_sink,
)

logger = get_logger(__name__)

HEADER_TEMPLATE = "# wave function for qubits with ids (least to most significant): {ids}"
ENTANGLED_MESSAGE = (
    "## Qubits were entangled with an external qubit. "
    "Cannot dump corresponding wave function. ##"
)
WARNING_TEMPLATE = "[warning] Unable to write state to '{target}' ({cause})"

SessionFactory = Callable[[int, Callable[[str], None]], DumpSession]


class DumpStatus(Enum):
    """How a dump call ended."""

    COMPLETED = "completed"
    ENTANGLED = "entangled"
    SINK_FAILED = "sink_failed"


@dataclass(frozen=True)
class DumpResult:
    """
    Outcome of one dump call.

    Attributes
    ----------
    status:
        COMPLETED when the state was rendered, ENTANGLED when the engine
        could not separate the qubits, SINK_FAILED when the file target
        could not be written.
    target:
        ``"console"`` or the file path written to.
    qubit_ids:
        The dumped qubit ids, least significant first.
    text:
        The rendered state (COMPLETED) or the diagnostic line (ENTANGLED).
    error:
        The OSError behind a SINK_FAILED result.
    """

    status: DumpStatus
    target: str
    qubit_ids: Tuple[int, ...]
    text: Optional[str] = None
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.status is not DumpStatus.SINK_FAILED


def format_header(qubit_ids: Sequence[int]) -> str:
    """Return the header line naming the dumped qubits."""
    return HEADER_TEMPLATE.format(ids=";".join(str(q) for q in qubit_ids))


def check_qubits(qubits: Optional[Sequence[int]]) -> Tuple[int, ...]:
    """
    Validate a qubit register passed to a register dump.

    Raises:
        ValueError: If qubits is None, empty or contains duplicates.
        TypeError: If qubits is not a sequence of ints.
    """
    if qubits is None:
        raise ValueError("qubits must not be None.")
    if isinstance(qubits, (str, bytes)) or not isinstance(qubits, Sequence):
        raise TypeError(
            f"qubits must be a sequence of qubit ids, got {type(qubits).__name__}"
        )
    if len(qubits) == 0:
        raise ValueError("qubits must contain at least one qubit.")

    ids = []
    for q in qubits:
        if isinstance(q, bool):
            raise TypeError(f"qubit ids must be ints, got {q!r}")
        try:
            ids.append(operator.index(q))
        except TypeError:
            raise TypeError(f"qubit ids must be ints, got {q!r}") from None
    if len(set(ids)) != len(ids):
        raise ValueError(f"qubits must be distinct, got {ids}")
    return tuple(ids)


def dump_machine(
    engine: AmplitudeEngine,
    location: Location = None,
    *,
    message: Optional[MessageChannel] = None,
) -> DumpResult:
    """
    Dump the raw amplitudes of every allocated qubit.

    Parameters
    ----------
    engine:
        Engine holding the state.
    location:
        None or an empty string for the message channel, otherwise a file
        path.
    message:
        Message channel. Defaults to printing to stdout.
    """
    ids = tuple(engine.qubit_ids)
    return _dump(engine, location, ids, None, RawSession, message, mode="raw")


def dump_register(
    engine: AmplitudeEngine,
    location: Location,
    qubits: Sequence[int],
    *,
    message: Optional[MessageChannel] = None,
) -> DumpResult:
    """
    Dump the raw amplitudes of the qubits in `qubits`.

    Bit k of each basis index refers to ``qubits[k]``.

    Raises
    ------
    ValueError
        If qubits is empty, has duplicates, or names unallocated qubits.
    """
    ids = check_qubits(qubits)
    engine.qubit_positions(ids)
    return _dump(engine, location, ids, ids, RawSession, message, mode="raw")


def dump_register_dirac(
    engine: AmplitudeEngine,
    location: Location,
    qubits: Optional[Sequence[int]] = None,
    precision: int = DEFAULT_PRECISION,
    zero_tolerance: float = DEFAULT_ZERO_TOLERANCE,
    use_relative_phases: bool = False,
    *,
    message: Optional[MessageChannel] = None,
) -> DumpResult:
    """
    Dump a register in Dirac notation, e.g. ``0.707|00⟩ + 0.707|11⟩``.

    Kets are little-endian. Basis states whose amplitude is below
    `zero_tolerance` in both components are left out.

    Parameters
    ----------
    engine:
        Engine holding the state.
    location:
        None or an empty string for the message channel, otherwise a file
        path.
    qubits:
        Qubit ids to dump. None dumps every allocated qubit.
    precision:
        Maximum fractional digits per amplitude component.
    zero_tolerance:
        Magnitude below which a component counts as zero.
    use_relative_phases:
        Remove the global phase by rotating all amplitudes by the phase
        of the first non-zero one.
    message:
        Message channel. Defaults to printing to stdout.

    Raises
    ------
    ValueError
        If qubits is empty, has duplicates, or names unallocated qubits,
        or precision / zero_tolerance is negative.
    """
    config = FormatConfig(
        precision=precision,
        zero_tolerance=zero_tolerance,
        use_relative_phases=use_relative_phases,
    )

    if qubits is None:
        ids = tuple(engine.qubit_ids)
        subset = None
    else:
        ids = check_qubits(qubits)
        engine.qubit_positions(ids)
        subset = ids

    def make_session(n_qubits: int, write: Callable[[str], None]) -> DumpSession:
        return DiracSession(n_qubits, write, config)

    return _dump(engine, location, ids, subset, make_session, message, mode="dirac")


def _dump(
    engine: AmplitudeEngine,
    location: Location,
    ids: Tuple[int, ...],
    subset: Optional[Tuple[int, ...]],
    make_session: SessionFactory,
    message: Optional[MessageChannel],
    mode: str,
) -> DumpResult:
    channel = message if message is not None else console_message
    sink = resolve_sink(location, channel)
    logger.debug("Dumping qubits %s (%s) to %s", list(ids), mode, sink.target)

    try:
        with sink:
            result = _render(engine, sink, ids, subset, make_session)
    except SinkError as exc:
        result = DumpResult(
            status=DumpStatus.SINK_FAILED,
            target=exc.target,
            qubit_ids=ids,
            error=exc.error,
        )
        _report_sink_failure(result, channel)
    return result


def _render(
    engine: AmplitudeEngine,
    sink: Sink,
    ids: Tuple[int, ...],
    subset: Optional[Tuple[int, ...]],
    make_session: SessionFactory,
) -> DumpResult:
    sink.write(format_header(ids))

    session = make_session(len(ids), sink.write)
    if subset is None:
        completed = engine.enumerate_all(session)
    else:
        completed = engine.enumerate_subset(subset, session)

    if not completed:
        session.on_entangled()
        logger.info("Qubits %s are entangled with external qubits", list(ids))
        sink.write(ENTANGLED_MESSAGE)
        return DumpResult(
            status=DumpStatus.ENTANGLED,
            target=sink.target,
            qubit_ids=ids,
            text=ENTANGLED_MESSAGE,
        )

    session.finish()
    return DumpResult(
        status=DumpStatus.COMPLETED,
        target=sink.target,
        qubit_ids=ids,
        text=session.text,
    )


def _report_sink_failure(result: DumpResult, channel: MessageChannel) -> None:
    cause = result.error.strerror or str(result.error)
    logger.warning("Unable to write state to %r: %s", result.target, result.error)
    channel(WARNING_TEMPLATE.format(target=result.target, cause=cause))


__all__ = [
    "DumpStatus",
    "DumpResult",
    "HEADER_TEMPLATE",
    "ENTANGLED_MESSAGE",
    "WARNING_TEMPLATE",
    "check_qubits",
    "format_header",
    "dump_machine",
    "dump_register",
    "dump_register_dirac",
]
