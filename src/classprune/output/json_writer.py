"""File writers for results and keep rules."""

import json
from pathlib import Path

from classprune.models.results import UnusedResults


def write_results(results: UnusedResults, output_path: Path) -> None:
    """Write the results.json file."""
    data = results.to_dict()

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_results(results_path: Path) -> dict:
    """Load a results.json file."""
    with open(results_path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_keep_rules(rules: list[str], output_path: Path) -> None:
    """Write keep rules, one per line, in ProGuard configuration syntax."""
    with open(output_path, "w", encoding="utf-8") as f:
        for rule in rules:
            f.write(rule + "\n")
