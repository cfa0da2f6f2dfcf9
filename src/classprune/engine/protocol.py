"""Interface between ClassPrune and a reachability engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

UNKNOWN_ORIGIN = "unknown"


@dataclass(frozen=True)
class ClassBytes:
    """A program class supplied as raw bytes."""

    data: bytes
    origin: str = UNKNOWN_ORIGIN


ProgramData = Union[ClassBytes, Path]


@runtime_checkable
class ClassFileConsumer(Protocol):
    """Receives every class the engine writes to its output."""

    def accept(self, data: bytes, descriptor: str) -> None:
        """Handle one emitted class.

        Args:
            data: The class file bytes.
            descriptor: Internal type descriptor, e.g. ``Lcom/foo/Bar;``.
        """
        ...

    def finished(self) -> None:
        """Called once after the last class was emitted."""
        ...


@runtime_checkable
class StringConsumer(Protocol):
    """Receives the engine's usage log as a stream of text tokens."""

    def accept(self, token: str) -> None:
        ...


@dataclass
class EngineCommand:
    """Everything a single engine invocation needs."""

    program: list[ProgramData] = field(default_factory=list)
    library: list[Path] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)
    jdk_home: Path | None = None
    class_consumer: ClassFileConsumer | None = None
    usage_consumer: StringConsumer | None = None

    def add_class_program_data(self, data: bytes, origin: str = UNKNOWN_ORIGIN) -> None:
        self.program.append(ClassBytes(data, origin))

    def add_program_files(self, *paths: Path) -> None:
        self.program.extend(Path(p) for p in paths)

    def add_library_files(self, *paths: Path) -> None:
        self.library.extend(Path(p) for p in paths)

    def add_rules(self, rules: list[str]) -> None:
        self.rules.extend(rules)


@runtime_checkable
class ReachabilityEngine(Protocol):
    """A whole-program shrinker driven in batch mode.

    ``run`` blocks until the engine finished and all consumers were called.
    Implementations raise ``EngineInvocationError`` on any failure.
    """

    def run(self, command: EngineCommand) -> None:
        ...
