"""Amplitude enumeration engines."""

from .base import AmplitudeCallback, AmplitudeEngine
from .scripted import ScriptedEngine
from .statevector import StatevectorEngine

__all__ = [
    "AmplitudeCallback",
    "AmplitudeEngine",
    "StatevectorEngine",
    "ScriptedEngine",
]
