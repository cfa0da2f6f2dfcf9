"""Exclusion of discovered class files.

Patterns use gitignore syntax and are matched against paths relative to the
class directory being walked, using the pathspec library.
"""

from pathlib import Path

import pathspec


class ClassFileExcluder:
    """Filters class files with gitignore-style patterns."""

    def __init__(self, patterns: list[str] | None = None) -> None:
        """Initialize the excluder.

        Args:
            patterns: gitignore-style patterns. An empty list excludes nothing.
        """
        self._patterns = list(patterns or [])
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self._patterns)

    def should_exclude(self, file_path: Path, root: Path) -> bool:
        """Check if a file below ``root`` should be excluded.

        Args:
            file_path: Path to the class file.
            root: Directory the file was discovered under.

        Returns:
            True if the file should be excluded, False otherwise.
        """
        if not self._patterns:
            return False

        try:
            rel_path = file_path.relative_to(root)
        except ValueError:
            return False

        return self._spec.match_file(rel_path.as_posix())

    @property
    def patterns(self) -> list[str]:
        """Return the loaded patterns."""
        return list(self._patterns)
