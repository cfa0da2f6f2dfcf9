"""Data models for ClassPrune."""

from classprune.models.results import AnalysisMetadata, UnusedResults, package_of

__all__ = [
    "AnalysisMetadata",
    "UnusedResults",
    "package_of",
]
