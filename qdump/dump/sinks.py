"""Output targets for dumps: the message channel or a file.

A sink is a context manager. Entering it acquires whatever it writes to,
leaving it releases that again on every exit path. File sinks wrap any
OSError from opening, writing or closing their file in SinkError;
turning that into a warning is left to the caller. Errors raised by the
message channel are not wrapped.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import IO, Callable, Optional, Union

from ..logging import get_logger

logger = get_logger(__name__)

MessageChannel = Callable[[str], None]
Location = Union[None, str, "os.PathLike[str]"]

CONSOLE_TARGET = "console"


class SinkError(Exception):
    """A file sink could not open, write or close its file.

    Attributes:
        target: Path of the file.
        error: The underlying OSError.
    """

    def __init__(self, target: str, error: OSError) -> None:
        super().__init__(f"Unable to write state to {target!r}: {error}")
        self.target = target
        self.error = error


def console_message(line: str) -> None:
    """Default message channel: print the line to stdout."""
    print(line)


class Sink(ABC):
    """A line-oriented output target for one dump."""

    @property
    @abstractmethod
    def target(self) -> str:
        """Human-readable name of where output goes."""

    @abstractmethod
    def write(self, line: str) -> None:
        """Write one line of output."""

    def __enter__(self) -> "Sink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


class MessageSink(Sink):
    """Send every line to a message channel."""

    def __init__(self, channel: MessageChannel) -> None:
        self._channel = channel

    @property
    def target(self) -> str:
        return CONSOLE_TARGET

    def write(self, line: str) -> None:
        self._channel(line)


class FileSink(Sink):
    """
    Write lines to a text file, replacing any previous content.

    The file is opened when the sink is entered and closed when it is
    left.
    """

    def __init__(self, path: Union[str, "os.PathLike[str]"]) -> None:
        self._path = os.fspath(path)
        self._file: Optional[IO[str]] = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def target(self) -> str:
        return self._path

    def __enter__(self) -> "FileSink":
        try:
            self._file = open(self._path, "w", encoding="utf-8")
        except OSError as exc:
            raise SinkError(self._path, exc) from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        file, self._file = self._file, None
        if file is None:
            return
        try:
            file.close()
        except OSError as close_error:
            if exc_type is None:
                raise SinkError(self._path, close_error) from close_error
            # Leave the in-flight exception as the one that propagates.
            logger.warning("Closing %r failed: %s", self._path, close_error)

    def write(self, line: str) -> None:
        if self._file is None:
            raise ValueError(f"FileSink for {self._path!r} is not open.")
        try:
            self._file.write(line + "\n")
        except OSError as exc:
            raise SinkError(self._path, exc) from exc


def resolve_sink(location: Location, channel: MessageChannel) -> Sink:
    """
    Pick the sink for a dump location.

    None, the empty string and whitespace-only strings select the message
    channel. Any other string or path-like object is a file path.

    Raises:
        TypeError: If location is of any other type.
    """
    if location is None:
        return MessageSink(channel)
    if isinstance(location, os.PathLike):
        location = os.fspath(location)
    if not isinstance(location, str):
        raise TypeError(
            f"location must be None, a str or a path-like object, "
            f"got {type(location).__name__}"
        )
    if not location.strip():
        return MessageSink(channel)
    return FileSink(location)


__all__ = [
    "CONSOLE_TARGET",
    "MessageChannel",
    "Location",
    "Sink",
    "MessageSink",
    "FileSink",
    "SinkError",
    "console_message",
    "resolve_sink",
]
