"""Tests for dump sessions and their state machine."""

import math

import pytest

from qdump.dump.config import FormatConfig
from qdump.dump.formatting import MINUS
from qdump.dump.session import (
    Accumulating,
    BasisAmplitude,
    DiracSession,
    Discarded,
    DumpProtocolError,
    Flushed,
    RawSession,
)

S = 1 / math.sqrt(2)


def feed(session, amplitudes):
    """Call the session once per amplitude, in index order; return the results."""
    return [session(i, z.real, z.imag) for i, z in enumerate(amplitudes)]


class TestCountdown:
    """Tests for the flush-once countdown."""

    def test_flushes_exactly_once_after_last_state(self):
        """Output is written only after the 2**n-th callback."""
        lines = []
        session = DiracSession(2, lines.append)

        results = feed(session, [S, 0, 0, S])

        assert results == [True, True, True, False]
        assert lines == ["0.707|00⟩ + 0.707|11⟩"]
        assert isinstance(session.state, Flushed)
        assert session.text == lines[0]

    def test_nothing_written_before_last_state(self):
        """A partially fed session has written nothing."""
        lines = []
        session = DiracSession(2, lines.append)

        feed(session, [S, 0, 0])

        assert lines == []
        assert isinstance(session.state, Accumulating)
        assert session.state.remaining == 1
        assert session.text is None

    def test_skipped_states_still_count(self):
        """Negligible amplitudes count towards the flush."""
        lines = []
        session = DiracSession(3, lines.append)

        results = feed(session, [0] * 7 + [1])

        assert results[-1] is False
        assert lines == ["|111⟩"]

    def test_all_negligible_writes_empty_line(self):
        """A state below tolerance everywhere flushes an empty line."""
        lines = []
        session = DiracSession(1, lines.append)

        feed(session, [1e-9, -1e-9])

        assert lines == [""]

    def test_zero_qubits(self):
        """An empty register expects exactly one amplitude."""
        lines = []
        session = DiracSession(0, lines.append)

        assert session(0, 1.0, 0.0) is False
        assert lines == ["|⟩"]

    def test_negative_qubit_count_rejected(self):
        """Sessions need a non-negative qubit count."""
        with pytest.raises(ValueError, match="non-negative"):
            DiracSession(-1, print)


class TestProtocolErrors:
    """Tests for contract violations by engines."""

    def test_callback_after_flush(self):
        """Amplitudes after the flush raise DumpProtocolError."""
        session = DiracSession(1, lambda line: None)
        feed(session, [1, 0])

        with pytest.raises(DumpProtocolError, match="flushed"):
            session(0, 1.0, 0.0)

    def test_callback_after_discard(self):
        """Amplitudes after an entanglement signal raise DumpProtocolError."""
        session = DiracSession(1, lambda line: None)
        session.on_entangled()

        with pytest.raises(DumpProtocolError, match="discarded"):
            session(0, 1.0, 0.0)

    @pytest.mark.parametrize("index", [-1, 4])
    def test_index_out_of_range(self, index):
        """Indices outside the register raise DumpProtocolError."""
        session = DiracSession(2, lambda line: None)

        with pytest.raises(DumpProtocolError, match="out of range"):
            session(index, 1.0, 0.0)

    def test_finish_with_outstanding_states(self):
        """finish() raises while states are outstanding."""
        session = DiracSession(2, lambda line: None)
        feed(session, [S, 0])

        with pytest.raises(DumpProtocolError, match="2 of 4"):
            session.finish()

    def test_finish_after_flush(self):
        """finish() is a no-op once the session flushed."""
        session = DiracSession(1, lambda line: None)
        feed(session, [1, 0])
        session.finish()

    def test_entangled_after_flush(self):
        """An entanglement signal after the flush raises DumpProtocolError."""
        session = DiracSession(1, lambda line: None)
        feed(session, [1, 0])

        with pytest.raises(DumpProtocolError, match="after the session was flushed"):
            session.on_entangled()


class TestDiscard:
    """Tests for abandoning a session."""

    def test_partial_text_is_dropped(self):
        """Terms rendered before the entanglement signal are never written."""
        lines = []
        session = DiracSession(2, lines.append)
        feed(session, [S, 0])

        session.on_entangled()

        assert isinstance(session.state, Discarded)
        assert session.text is None
        assert lines == []

    def test_finish_after_discard(self):
        """A discarded session has nothing outstanding."""
        session = DiracSession(1, lambda line: None)
        session.on_entangled()
        session.finish()


class TestDiracRendering:
    """Tests for Dirac-notation output."""

    def test_unit_amplitude_shows_ket_only(self):
        """An amplitude that rounds to 1 is left out of the term."""
        lines = []
        feed(DiracSession(2, lines.append), [0, 0, 1, 0])
        assert lines == ["|01⟩"]

    def test_negative_terms_use_minus(self):
        """Later negative amplitudes are joined with an en dash."""
        lines = []
        feed(DiracSession(1, lines.append), [S, -S])
        assert lines == [f"0.707|0⟩ {MINUS} 0.707|1⟩"]

    def test_first_term_carries_no_sign(self):
        """A negative first amplitude is shown by magnitude only."""
        lines = []
        feed(DiracSession(1, lines.append), [-S, S])
        assert lines == ["0.707|0⟩ + 0.707|1⟩"]

    def test_complex_terms(self):
        """Amplitudes with both parts are parenthesized."""
        lines = []
        feed(DiracSession(1, lines.append), [complex(0.6, 0.0), complex(0.0, -0.8)])
        assert lines == [f"0.6|0⟩ {MINUS} 0.8i|1⟩"]

    def test_precision(self):
        """Precision limits the fractional digits."""
        lines = []
        config = FormatConfig(precision=1)
        feed(DiracSession(1, lines.append, config), [S, S])
        assert lines == ["0.7|0⟩ + 0.7|1⟩"]

    def test_zero_tolerance(self):
        """Amplitudes below a custom tolerance are left out."""
        lines = []
        config = FormatConfig(zero_tolerance=0.01)
        feed(DiracSession(1, lines.append, config), [0.99995, 0.005])
        assert lines == ["|0⟩"]

    def test_relative_phases(self):
        """The first non-zero amplitude is rotated onto the real axis."""
        lines = []
        config = FormatConfig(use_relative_phases=True)
        feed(DiracSession(2, lines.append, config), [0.7071j, 0, 0, 0.7071])
        assert lines == [f"0.707|00⟩ {MINUS} 0.707i|11⟩"]

    def test_relative_phases_skip_leading_zeros(self):
        """Negligible amplitudes do not fix the reference phase."""
        lines = []
        config = FormatConfig(use_relative_phases=True)
        feed(DiracSession(1, lines.append, config), [0, -1j])
        assert lines == ["|1⟩"]

    def test_without_relative_phases(self):
        """The same state without phase removal keeps its phases."""
        lines = []
        feed(DiracSession(2, lines.append), [0.7071j, 0, 0, 0.7071])
        assert lines == ["0.707i|00⟩ + 0.707|11⟩"]

    def test_on_amplitude_accepts_basis_amplitudes(self):
        """on_amplitude is the typed form of the callback."""
        lines = []
        session = DiracSession(1, lines.append)
        session.on_amplitude(BasisAmplitude(0, 0.0, 0.0))
        assert session.on_amplitude(BasisAmplitude(1, 1.0, 0.0)) is False
        assert lines == ["|1⟩"]


class TestRawSession:
    """Tests for raw rows."""

    def test_one_row_per_state(self):
        """Every state gets a row, zero or not."""
        lines = []
        session = RawSession(2, lines.append)

        results = feed(session, [S, 0, 0, S])

        assert results == [True, True, True, False]
        assert len(lines) == 4
        assert [line.split("❭")[0] for line in lines] == ["∣0", "∣1", "∣2", "∣3"]
        assert session.text == "\n".join(lines)

    def test_index_width(self):
        """Indices are right-aligned to the widest index."""
        lines = []
        feed(RawSession(4, lines.append), [1] + [0] * 15)
        assert lines[0].startswith("∣ 0❭:")
        assert lines[15].startswith("∣15❭:")
