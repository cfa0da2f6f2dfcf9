"""Reachability engine interface and adapters."""

from classprune.engine.protocol import (
    ClassBytes,
    ClassFileConsumer,
    EngineCommand,
    ProgramData,
    ReachabilityEngine,
    StringConsumer,
)
from classprune.engine.r8 import R8Engine

__all__ = [
    "ClassBytes",
    "ClassFileConsumer",
    "EngineCommand",
    "ProgramData",
    "R8Engine",
    "ReachabilityEngine",
    "StringConsumer",
]
