"""Output writers and display helpers."""

from classprune.output.json_writer import load_results, write_keep_rules, write_results
from classprune.output.tree import build_results_tree, build_summary_tree, display_tree

__all__ = [
    "build_results_tree",
    "build_summary_tree",
    "display_tree",
    "load_results",
    "write_keep_rules",
    "write_results",
]
