"""Unused class detection driven by a reachability engine.

The engine runs twice. The first pass disables all processing and only
enumerates the program classes, which become keep rules. The second pass
shrinks for real with those rules, so only dependency classes can be
removed, and the removed set is recovered from the usage log.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from classprune.collector import (
    CLASS_EXTENSION,
    MODULE_INFO_CLASS,
    collect_class_files,
    collect_program_files,
    is_class_file,
)
from classprune.dependencies import DependencyClassifier, compute_to_minimize
from classprune.engine.protocol import EngineCommand, ReachabilityEngine
from classprune.exclusion import ClassFileExcluder
from classprune.names import external_name, internal_name
from classprune.paths import get_minimize_dir
from classprune.rules import ENUMERATION_RULES, SHRINK_RULES, keep_class_rule
from classprune.usage_log import UsageLogParser

logger = logging.getLogger(__name__)


def processed_class_path(tmp_dir: Path, class_name: str) -> Path:
    """Map a class to its file below ``tmp_dir``.

    Accepts a dotted class name or an archive entry name such as
    ``com/foo/Bar.class``.
    """
    if class_name.endswith(CLASS_EXTENSION):
        class_name = class_name[: -len(CLASS_EXTENSION)]
    name = external_name(class_name)
    return Path(tmp_dir) / (internal_name(name) + CLASS_EXTENSION)


class KeepRuleCollector:
    """Turns every emitted class into a rule retaining it entirely."""

    def __init__(self) -> None:
        self.rules: list[str] = []

    def accept(self, data: bytes, descriptor: str) -> None:
        self.rules.append(keep_class_rule(external_name(descriptor)))

    def finished(self) -> None:
        pass


class ProcessedClassWriter:
    """Writes emitted classes to disk and withdraws them from the removed set."""

    def __init__(self, tracker: UnusedTracker, removed: set[str]) -> None:
        self.tracker = tracker
        self.removed = removed
        self.emitted: set[str] = set()

    def accept(self, data: bytes, descriptor: str) -> None:
        name = external_name(descriptor)
        self.emitted.add(name)
        # A class that is written out was not removed, whatever the log says.
        self.removed.discard(name)

        class_file = self.tracker.get_path_to_processed_class(name)
        class_file.parent.mkdir(parents=True, exist_ok=True)
        class_file.write_bytes(data)

    def finished(self) -> None:
        pass


class UnusedTracker:
    """Finds the dependency classes a full shrink would remove."""

    def __init__(
        self,
        tmp_dir: Path,
        class_dirs: Iterable[Path],
        class_jars: Iterable[Path],
        to_minimize: Iterable[Path],
        engine: ReachabilityEngine,
        jdk_home: Path | None = None,
        excluder: ClassFileExcluder | None = None,
    ) -> None:
        """Initialize the tracker.

        Args:
            tmp_dir: Directory receiving the processed class files.
            class_dirs: First-party class output directories.
            class_jars: First-party (API) archives, analyzed but never stripped.
            to_minimize: Dependencies whose classes may be stripped.
            engine: The reachability engine to drive.
            jdk_home: JDK used as library; defaults to ``$JAVA_HOME``.
            excluder: Filter for class files found in ``class_dirs``.
        """
        self.tmp_dir = Path(tmp_dir)
        self.engine = engine
        self.excluder = excluder
        self.classifier = DependencyClassifier(to_minimize)
        self.project_files: tuple[Path, ...] = tuple(
            collect_program_files(class_dirs, class_jars, excluder)
        )

        if jdk_home is None and os.environ.get("JAVA_HOME"):
            jdk_home = Path(os.environ["JAVA_HOME"])
        if jdk_home is None:
            logger.warning("JAVA_HOME is not set; analyzing without JDK library classes")
        self.jdk_home = jdk_home

    @classmethod
    def for_project(
        cls,
        build_dir: Path,
        class_dirs: Iterable[Path],
        api_jars: Iterable[Path],
        resolved_dependencies: Iterable[Path],
        engine: ReachabilityEngine,
        jdk_home: Path | None = None,
        excluder: ClassFileExcluder | None = None,
    ) -> UnusedTracker:
        """Create a tracker for a project's build layout.

        Creates ``<build_dir>/tmp/classprune/minimize`` and excludes the API
        archives from the dependencies eligible for minimization.
        """
        tmp_dir = get_minimize_dir(Path(build_dir).absolute())
        tmp_dir.mkdir(parents=True, exist_ok=True)

        api_jars = list(api_jars)
        to_minimize = compute_to_minimize(resolved_dependencies, api_jars)
        existing_dirs = [Path(d) for d in class_dirs if Path(d).is_dir()]

        return cls(tmp_dir, existing_dirs, api_jars, to_minimize, engine, jdk_home, excluder)

    @property
    def performs_full_shrinking(self) -> bool:
        return True

    @property
    def dependencies(self) -> tuple[Path, ...]:
        return self.classifier.dependencies

    def add_dependency(self, jar_or_dir: Path) -> bool:
        """Register a dependency the packaging step is about to merge."""
        return self.classifier.add_dependency(jar_or_dir)

    def get_path_to_processed_class(self, class_name: str) -> Path:
        """Return where the processed bytes of a class are written."""
        return processed_class_path(self.tmp_dir, class_name)

    def get_keep_rules(self) -> list[str]:
        """Enumerate the program classes as keep rules.

        Dependencies are visible as libraries so references resolve, but they
        are neither enumerated nor emitted.
        """
        command = EngineCommand()
        self._add_project_files(command)
        command.add_library_files(*self.dependencies)
        command.add_rules(ENUMERATION_RULES)

        collector = KeepRuleCollector()
        command.class_consumer = collector

        logger.debug("Enumerating program classes from %d inputs", len(self.project_files))
        self.engine.run(command)
        logger.info("Synthesized %d keep rules", len(collector.rules))
        return collector.rules

    def find_unused(self) -> set[str]:
        """Return the classes a full shrink would remove.

        Processed bytes of every class that survives are written below
        ``tmp_dir``.
        """
        keep_rules = self.get_keep_rules()

        command = EngineCommand()
        self._add_project_files(command)
        for dependency in self.dependencies:
            self._add_program_path(command, dependency)

        removed: set[str] = set()
        command.usage_consumer = UsageLogParser(removed)
        writer = ProcessedClassWriter(self, removed)
        command.class_consumer = writer

        command.add_rules(keep_rules)
        command.add_rules(SHRINK_RULES)

        logger.debug("Shrinking with %d dependencies", len(self.dependencies))
        self.engine.run(command)

        removed -= writer.emitted
        logger.info(
            "%d classes unused, %d classes retained", len(removed), len(writer.emitted)
        )
        return removed

    def _add_project_files(self, command: EngineCommand) -> None:
        command.jdk_home = self.jdk_home
        for path in self.project_files:
            self._add_program_path(command, path)

    def _add_program_path(self, command: EngineCommand, path: Path) -> None:
        if is_class_file(path):
            command.add_class_program_data(path.read_bytes())
        elif path.name.lower() == MODULE_INFO_CLASS:
            logger.debug("Skipping module descriptor %s", path)
        elif path.is_dir():
            for class_file in collect_class_files(path, self.excluder):
                command.add_class_program_data(class_file.read_bytes())
        else:
            command.add_program_files(path)
