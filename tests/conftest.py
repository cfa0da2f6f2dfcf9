"""Shared fixtures: a scripted reachability engine and fake class files."""

import zipfile
from pathlib import Path

import pytest

from classprune.engine.protocol import ClassBytes, EngineCommand
from classprune.names import descriptor, external_name, internal_name
from classprune.usage_log import LINE_SEPARATOR

FAKE_MAGIC = b"FAKECLASS "


def fake_class(name: str, *refs: str) -> bytes:
    """Fake class file content: internal name plus referenced internal names."""
    return FAKE_MAGIC + f"{name} -> {','.join(refs)}".encode()


def parse_fake_class(data: bytes) -> tuple[str, list[str]]:
    assert data.startswith(FAKE_MAGIC), data
    name, _, refs = data[len(FAKE_MAGIC):].decode().partition(" -> ")
    return name, [r for r in refs.split(",") if r]


class FakeEngine:
    """In-memory stand-in for R8.

    Program classes are fake class files. With ``-dontshrink`` every program
    class is emitted. Otherwise the classes reachable from ``roots`` (and from
    keep rules when ``honor_keep_rules`` is set) are emitted and the rest are
    reported in the usage log, one name per line. ``extra_emitted`` classes
    are written by the shrink pass regardless of reachability. With
    ``usage_after_classes`` set the usage log is streamed after the classes.
    """

    def __init__(self) -> None:
        self.commands: list[EngineCommand] = []
        self.roots: set[str] = set()
        self.honor_keep_rules = True
        self.extra_emitted: list[str] = []
        self.usage_tokens: list[str] | None = None
        self.error: Exception | None = None
        self.usage_after_classes = False

    def run(self, command: EngineCommand) -> None:
        self.commands.append(command)
        if self.error is not None:
            raise self.error

        classes = self._program_classes(command)

        if "-dontshrink" in command.rules:
            kept = list(classes)
            removed: list[str] = []
        else:
            kept, removed = self._shrink(classes, command.rules)
            kept += self.extra_emitted

        if not self.usage_after_classes:
            self._stream_usage(command, removed)

        if command.class_consumer is not None:
            for name in kept:
                data = classes.get(name, fake_class(name))
                command.class_consumer.accept(data, descriptor(name))
            command.class_consumer.finished()

        if self.usage_after_classes:
            self._stream_usage(command, removed)

    def _stream_usage(self, command: EngineCommand, removed: list[str]) -> None:
        if command.usage_consumer is None:
            return
        tokens = self.usage_tokens
        if tokens is None:
            tokens = []
            for name in removed:
                tokens += [external_name(name), LINE_SEPARATOR]
        for token in tokens:
            command.usage_consumer.accept(token)

    def _program_classes(self, command: EngineCommand) -> dict[str, bytes]:
        classes: dict[str, bytes] = {}
        for item in command.program:
            if isinstance(item, ClassBytes):
                classes[parse_fake_class(item.data)[0]] = item.data
            else:
                with zipfile.ZipFile(item) as archive:
                    for entry in archive.namelist():
                        if entry.endswith(".class"):
                            data = archive.read(entry)
                            classes[parse_fake_class(data)[0]] = data
        return classes

    def _shrink(self, classes: dict[str, bytes], rules: list[str]) -> tuple[list[str], list[str]]:
        roots = set(self.roots)
        if self.honor_keep_rules:
            for rule in rules:
                if rule.startswith("-keep class "):
                    roots.add(internal_name(rule.split()[2]))

        reachable: set[str] = set()
        pending = [r for r in roots if r in classes]
        while pending:
            current = pending.pop()
            if current in reachable:
                continue
            reachable.add(current)
            pending.extend(r for r in parse_fake_class(classes[current])[1] if r in classes)

        kept = [name for name in classes if name in reachable]
        removed = [name for name in classes if name not in reachable]
        return kept, removed


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_class():
    """Write a fake class file below a class directory."""

    def _make(class_dir: Path, name: str, *refs: str) -> Path:
        path = class_dir / f"{name}.class"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(fake_class(name, *refs))
        return path

    return _make


@pytest.fixture
def make_jar():
    """Write a jar of fake classes, given internal name -> references."""

    def _make(path: Path, classes: dict[str, list[str]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as archive:
            for name, refs in classes.items():
                archive.writestr(f"{name}.class", fake_class(name, *refs))
        return path

    return _make
