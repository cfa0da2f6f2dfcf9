"""Centralized path management for ClassPrune files."""

from pathlib import Path

# Directory name for ClassPrune outputs
CLASSPRUNE_DIR = ".classprune"

# File names within the .classprune directory
CONFIG_FILE = "config.json"
RESULTS_FILE = "results.json"

# Processed classes, relative to the build directory
MINIMIZE_TMP_DIR = Path("tmp") / "classprune" / "minimize"


def get_classprune_dir(project_path: Path) -> Path:
    """Get the .classprune directory path for a project."""
    return project_path / CLASSPRUNE_DIR


def ensure_classprune_dir(project_path: Path) -> Path:
    """Ensure .classprune directory exists and return its path."""
    classprune_dir = get_classprune_dir(project_path)
    classprune_dir.mkdir(parents=True, exist_ok=True)
    return classprune_dir


def get_config_path(project_path: Path) -> Path:
    """Get the config.json path for a project."""
    return get_classprune_dir(project_path) / CONFIG_FILE


def get_results_path(project_path: Path) -> Path:
    """Get the results.json path for a project."""
    return get_classprune_dir(project_path) / RESULTS_FILE


def get_minimize_dir(build_dir: Path) -> Path:
    """Get the directory receiving processed classes."""
    return build_dir / MINIMIZE_TMP_DIR
