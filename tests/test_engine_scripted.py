"""Tests for the scripted amplitude engine."""

import pytest

from qdump.engine import ScriptedEngine


def collect(engine, qubits=None):
    seen = []

    def callback(index, real, imag):
        seen.append((index, real, imag))
        return True

    if qubits is None:
        completed = engine.enumerate_all(callback)
    else:
        completed = engine.enumerate_subset(qubits, callback)
    return completed, seen


def test_amplitude_forms():
    """Complex numbers, floats and pairs are all accepted."""
    engine = ScriptedEngine([1j, 0.5, (0.25, -0.25), 0])
    _, seen = collect(engine)
    assert seen == [(0, 0.0, 1.0), (1, 0.5, 0.0), (2, 0.25, -0.25), (3, 0.0, 0.0)]


def test_default_ids():
    assert ScriptedEngine([1.0, 0.0]).qubit_ids == (0,)
    assert ScriptedEngine([1.0] + [0.0] * 7).qubit_ids == (0, 1, 2)


def test_mapping_fills_missing_states():
    engine = ScriptedEngine({3: 1.0}, qubit_ids=[4, 6])
    _, seen = collect(engine)
    assert [index for index, re, _ in seen if re] == [3]
    assert len(seen) == 4


def test_mapping_validation():
    with pytest.raises(ValueError, match="qubit_ids is required"):
        ScriptedEngine({0: 1.0})
    with pytest.raises(ValueError, match="out of range"):
        ScriptedEngine({4: 1.0}, qubit_ids=[0, 1])


def test_records_requests():
    engine = ScriptedEngine([1.0, 0.0, 0.0, 0.0])
    collect(engine)
    collect(engine, [1])
    assert engine.requests == [None, (1,)]


def test_entangled_subset():
    engine = ScriptedEngine([1.0, 0.0, 0.0, 0.0], entangled=True, emit_before_entangled=2)
    completed, seen = collect(engine, [0])
    assert completed is False
    assert [index for index, _, _ in seen] == [0, 1]

    completed, _ = collect(engine)
    assert completed is True


def test_subset_rejects_unknown_ids():
    with pytest.raises(ValueError, match="not allocated"):
        collect(ScriptedEngine([1.0, 0.0]), [3])


def test_stops_when_callback_declines():
    engine = ScriptedEngine([1.0, 0.0, 0.0, 0.0])
    seen = []
    engine.enumerate_all(lambda i, re, im: seen.append(i) or False)
    assert seen == [0]
