"""Discovery of first-party program inputs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from classprune.exclusion import ClassFileExcluder

logger = logging.getLogger(__name__)

CLASS_EXTENSION = ".class"
MODULE_INFO_CLASS = "module-info.class"


def is_class_file(path: Path) -> bool:
    """Check whether a path names a compiled class the engine accepts."""
    name = path.name.lower()
    # Java 9 module descriptors are not program classes.
    if name == MODULE_INFO_CLASS:
        return False
    return name.endswith(CLASS_EXTENSION)


def collect_class_files(
    directory: Path,
    excluder: ClassFileExcluder | None = None,
) -> list[Path]:
    """Recursively collect class files under a directory.

    Args:
        directory: Root to walk. A missing directory yields no files.
        excluder: Optional filter applied relative to ``directory``.

    Returns:
        Absolute paths of the class files found.
    """
    root = directory.absolute()
    if not root.is_dir():
        logger.debug("Skipping missing class directory %s", root)
        return []

    result: list[Path] = []
    for child in sorted(root.rglob("*")):
        if not child.is_file() or not is_class_file(child):
            continue
        if excluder is not None and excluder.should_exclude(child, root):
            continue
        result.append(child)
    return result


def collect_program_files(
    class_dirs: Iterable[Path],
    class_jars: Iterable[Path],
    excluder: ClassFileExcluder | None = None,
) -> list[Path]:
    """Combine class files from directories with archives into program inputs.

    Class files come first, in directory order; archives are appended
    unchanged. Duplicates are dropped, keeping the first occurrence.
    """
    files: list[Path] = []
    seen: set[Path] = set()

    for directory in class_dirs:
        for path in collect_class_files(Path(directory), excluder):
            if path not in seen:
                seen.add(path)
                files.append(path)

    for jar in class_jars:
        path = Path(jar).absolute()
        if path not in seen:
            seen.add(path)
            files.append(path)

    logger.debug("Collected %d program inputs", len(files))
    return files
