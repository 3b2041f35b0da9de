"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from qdump.dump import dump_register_dirac
from qdump.engine import ScriptedEngine
from qdump.logging import configure_logging, get_logger, set_log_level


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default level and stream after each test."""
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_namespaces_module_names():
    """Loggers live under the qdump namespace."""
    assert get_logger("sessions").name == "qdump.sessions"
    assert get_logger("qdump.dump.session").name == "qdump.dump.session"
    assert get_logger().name == "qdump"


def test_get_logger_caching():
    """The same name returns the same logger."""
    assert get_logger("cache_check") is get_logger("cache_check")


def test_logger_does_not_propagate():
    """qdump loggers keep their records to themselves."""
    assert get_logger("propagation").propagate is False


def test_set_log_level_accepts_names():
    """String level names are resolved."""
    logger = get_logger("levels")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("error")
    assert logger.level == logging.ERROR

    set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_configure_logging_redirects_stream():
    """configure_logging rebinds existing loggers to the given stream."""
    logger = get_logger("redirect")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    logger.debug("enumerating 4 states")

    output = stream.getvalue()
    assert "enumerating 4 states" in output
    assert "[DEBUG] qdump.redirect:" in output


def test_sink_failure_is_logged_as_warning(tmp_path, channel):
    """A failed file dump leaves a warning in the log as well as on the channel."""
    import qdump.dump.orchestrator  # noqa: F401  (creates the module logger)

    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)

    engine = ScriptedEngine([1.0, 0.0])
    target = tmp_path / "missing" / "state.txt"
    dump_register_dirac(engine, str(target), message=channel)

    assert "[WARNING] qdump.dump.orchestrator:" in stream.getvalue()
    assert len(channel.lines) == 1


def test_entanglement_is_logged_at_info(channel):
    """Entanglement signals are reported at INFO level."""
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)

    engine = ScriptedEngine([1.0, 0.0, 0.0, 0.0], entangled=True)
    dump_register_dirac(engine, None, [0], message=channel)

    assert "entangled" in stream.getvalue()
