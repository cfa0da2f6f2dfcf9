"""Data models for analysis results."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime


def package_of(class_name: str) -> str:
    """Return the package of a dotted class name ("" for the default package)."""
    return class_name.rpartition(".")[0]


@dataclass
class AnalysisMetadata:
    """Metadata about the analysis run."""

    project: str
    analyzed_at: datetime
    classprune_version: str
    program_inputs: int
    dependencies: list[str] = field(default_factory=list)
    analysis_duration_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "analyzed_at": self.analyzed_at.isoformat(),
            "classprune_version": self.classprune_version,
            "program_inputs": self.program_inputs,
            "dependencies": self.dependencies,
            "analysis_duration_ms": self.analysis_duration_ms,
        }


@dataclass
class UnusedResults:
    """Classes a full shrink would remove."""

    version: str = "1.0"
    metadata: AnalysisMetadata | None = None
    unused_classes: set[str] = field(default_factory=set)
    processed_dir: str | None = None

    @property
    def by_package(self) -> dict[str, int]:
        return dict(sorted(Counter(package_of(c) for c in self.unused_classes).items()))

    def to_dict(self) -> dict:
        result: dict = {"version": self.version}

        if self.metadata:
            result["metadata"] = self.metadata.to_dict()

        result["summary"] = {
            "unused_classes": len(self.unused_classes),
            "by_package": self.by_package,
        }
        result["processed_dir"] = self.processed_dir
        result["unused_classes"] = sorted(self.unused_classes)

        return result
