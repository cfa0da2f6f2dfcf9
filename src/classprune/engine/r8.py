"""Reachability engine backed by the R8 command line."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
import zipfile
from pathlib import Path

from classprune.collector import collect_class_files
from classprune.engine.protocol import ClassBytes, ClassFileConsumer, EngineCommand, StringConsumer
from classprune.errors import EngineInvocationError
from classprune.names import descriptor
from classprune.rules import print_usage_rule
from classprune.usage_log import tokenize_usage_text

logger = logging.getLogger(__name__)

R8_MAIN_CLASS = "com.android.tools.r8.R8"

# Keep error messages readable when R8 dumps a stack trace
_STDERR_TAIL_LINES = 20


class R8Engine:
    """Runs R8 in class file mode, one JVM per invocation."""

    def __init__(
        self,
        r8_jar: Path,
        java: str = "java",
        jvm_args: list[str] | None = None,
    ) -> None:
        self.r8_jar = Path(r8_jar)
        self.java = java
        self.jvm_args = list(jvm_args or [])

    def run(self, command: EngineCommand) -> None:
        java = self._resolve_java()
        if not self.r8_jar.is_file():
            raise EngineInvocationError(f"R8 jar not found: {self.r8_jar}")

        with tempfile.TemporaryDirectory(prefix="classprune-r8-") as scratch_dir:
            scratch = Path(scratch_dir)
            output = scratch / "output.jar"
            usage = scratch / "usage.txt"

            rules = list(command.rules)
            if command.usage_consumer is not None:
                rules.append(print_usage_rule(usage))
            rules_path = scratch / "rules.pro"
            rules_path.write_text("\n".join(rules) + "\n", encoding="utf-8")

            cmd = [
                java,
                *self.jvm_args,
                "-cp",
                str(self.r8_jar),
                R8_MAIN_CLASS,
                "--classfile",
                "--output",
                str(output),
                "--pg-conf",
                str(rules_path),
            ]
            if command.jdk_home is not None:
                cmd += ["--lib", str(command.jdk_home)]
            for library in self._stage_library(command.library, scratch / "library"):
                cmd += ["--lib", str(library)]
            cmd += [str(p) for p in self._stage_program(command.program, scratch / "program")]

            self._execute(cmd)

            # R8 prints usage during tree shaking, before any class is written
            if command.usage_consumer is not None:
                _emit_usage(usage, command.usage_consumer)
            if command.class_consumer is not None:
                _emit_classes(output, command.class_consumer)

    def _resolve_java(self) -> str:
        java = shutil.which(self.java)
        if java is None:
            raise EngineInvocationError(
                f"Java executable '{self.java}' not found. "
                "Set engine.java in the config or add java to PATH."
            )
        return java

    def _execute(self, cmd: list[str]) -> None:
        logger.debug("Running %s", " ".join(cmd[:8]))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise EngineInvocationError(f"Could not start R8: {e}") from e

        if result.stdout:
            logger.debug("R8 output:\n%s", result.stdout)
        if result.returncode != 0:
            tail = "\n".join(result.stderr.splitlines()[-_STDERR_TAIL_LINES:])
            raise EngineInvocationError(
                f"R8 exited with status {result.returncode}: {tail}",
                stderr=result.stderr,
            )

    @staticmethod
    def _stage_program(program: list, staging: Path) -> list[Path]:
        """Write in-memory classes to disk so R8 can read them as inputs."""
        paths: list[Path] = []
        for index, item in enumerate(program):
            if isinstance(item, ClassBytes):
                staging.mkdir(parents=True, exist_ok=True)
                path = staging / f"input{index}.class"
                path.write_bytes(item.data)
                paths.append(path)
            else:
                paths.append(Path(item))
        return paths

    @staticmethod
    def _stage_library(library: list[Path], staging: Path) -> list[Path]:
        """R8 only takes archives as libraries; directories get packed first."""
        paths: list[Path] = []
        for index, path in enumerate(library):
            if path.is_dir():
                staging.mkdir(parents=True, exist_ok=True)
                jar = staging / f"library{index}.jar"
                _archive_directory(path, jar)
                paths.append(jar)
            else:
                paths.append(path)
        return paths


def _archive_directory(directory: Path, jar: Path) -> None:
    with zipfile.ZipFile(jar, "w") as archive:
        for class_file in collect_class_files(directory):
            archive.write(class_file, class_file.relative_to(directory.absolute()).as_posix())


def _emit_classes(output: Path, consumer: ClassFileConsumer) -> None:
    # R8 writes no archive when nothing survives
    if output.exists():
        with zipfile.ZipFile(output) as archive:
            for entry in archive.infolist():
                if entry.is_dir() or not entry.filename.endswith(".class"):
                    continue
                name = entry.filename[: -len(".class")]
                consumer.accept(archive.read(entry), descriptor(name))
    consumer.finished()


def _emit_usage(usage: Path, consumer: StringConsumer) -> None:
    if not usage.exists():
        logger.debug("R8 wrote no usage log")
        return
    for token in tokenize_usage_text(usage.read_text(encoding="utf-8")):
        consumer.accept(token)
