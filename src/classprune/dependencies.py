"""Classification of dependency archives eligible for minimization."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def _normalize(path: Path | str) -> Path:
    return Path(path).absolute()


def compute_to_minimize(
    resolved: Iterable[Path | str],
    api_jars: Iterable[Path | str],
) -> frozenset[Path]:
    """Return the resolved dependencies that are not exported API archives."""
    api = {_normalize(p) for p in api_jars}
    return frozenset(p for p in map(_normalize, resolved) if p not in api)


class DependencyClassifier:
    """Accumulates the dependencies whose unused classes may be stripped.

    The eligible set is fixed at construction. ``add_dependency`` is the only
    way to grow the tracked set, and nothing removes from it.
    """

    def __init__(self, to_minimize: Iterable[Path | str]) -> None:
        self._to_minimize = frozenset(_normalize(p) for p in to_minimize)
        # dict keeps insertion order
        self._dependencies: dict[Path, None] = {}

    @property
    def to_minimize(self) -> frozenset[Path]:
        return self._to_minimize

    @property
    def dependencies(self) -> tuple[Path, ...]:
        """Tracked dependencies in registration order."""
        return tuple(self._dependencies)

    def add_dependency(self, candidate: Path | str) -> bool:
        """Track a dependency if it is eligible for minimization.

        Args:
            candidate: Archive or class directory of a resolved dependency.

        Returns:
            True if the candidate is tracked, False if it is not eligible.
        """
        path = _normalize(candidate)
        if path not in self._to_minimize:
            logger.debug("Not minimizing %s", path)
            return False
        if path not in self._dependencies:
            self._dependencies[path] = None
            logger.debug("Minimizing dependency %s", path)
        return True

    def is_dependency(self, path: Path | str) -> bool:
        return _normalize(path) in self._dependencies

    def __len__(self) -> int:
        return len(self._dependencies)
