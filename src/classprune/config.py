"""Configuration loading and saving for ClassPrune.

The configuration lives in ``.classprune/config.json``. Projects without
one may instead carry a ``[tool.classprune]`` table in ``pyproject.toml``.
Relative paths are resolved against the project root.
"""

import json
import os
from pathlib import Path

import tomli

from classprune.errors import ConfigError
from classprune.paths import get_config_path

DEFAULT_BUILD_DIR = "build"

# Gradle-style class output directories discovered by ``default_config``
DEFAULT_CLASS_DIR_GLOBS = ["build/classes/*/*"]


def load_config(config_path: Path) -> dict:
    """Load a config.json configuration file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict, config_path: Path) -> None:
    """Save configuration to config.json."""
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def load_pyproject_config(pyproject_path: Path) -> dict | None:
    """Load the [tool.classprune] table, or None if there is none."""
    if not pyproject_path.exists():
        return None

    try:
        with open(pyproject_path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid {pyproject_path}: {e}") from e

    return data.get("tool", {}).get("classprune")


def find_config(project_path: Path, config_path: Path | None = None) -> dict:
    """Load the configuration for a project.

    An explicit ``config_path`` must exist. Otherwise .classprune/config.json
    is tried first, then pyproject.toml.
    """
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        return load_config(config_path)

    default_path = get_config_path(project_path)
    if default_path.exists():
        return load_config(default_path)

    config = load_pyproject_config(project_path / "pyproject.toml")
    if config is None:
        raise ConfigError(
            f"No configuration found in {project_path}. "
            "Run 'classprune init' first to generate one."
        )
    return config


def default_config(project_path: Path) -> dict:
    """Build a starting configuration from the project's build layout."""
    class_dirs = sorted(
        str(p.relative_to(project_path))
        for pattern in DEFAULT_CLASS_DIR_GLOBS
        for p in project_path.glob(pattern)
        if p.is_dir()
    )
    return {
        "version": "1.0",
        "project": {
            "build_dir": DEFAULT_BUILD_DIR,
            "class_dirs": class_dirs,
            "api_jars": [],
            "dependencies": [],
            "exclude": [],
        },
        "engine": {
            "r8_jar": None,
            "java": "java",
            "jdk_home": None,
            "jvm_args": [],
        },
    }


def _resolve(project_path: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = project_path / path
    return path


def _path_list(config: dict, key: str, project_path: Path) -> list[Path]:
    values = config.get("project", {}).get(key, [])
    if not isinstance(values, list):
        raise ConfigError(f"project.{key} must be a list of paths")
    return [_resolve(project_path, v) for v in values]


def _string_list(config: dict, section: str, key: str) -> list[str]:
    values = config.get(section, {}).get(key, [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ConfigError(f"{section}.{key} must be a list of strings")
    return values


def get_build_dir(config: dict, project_path: Path) -> Path:
    """Get the build output root."""
    return _resolve(project_path, config.get("project", {}).get("build_dir", DEFAULT_BUILD_DIR))


def get_class_dirs(config: dict, project_path: Path) -> list[Path]:
    """Get first-party class output directories."""
    return _path_list(config, "class_dirs", project_path)


def get_api_jars(config: dict, project_path: Path) -> list[Path]:
    """Get exported archives that are analyzed but never stripped."""
    return _path_list(config, "api_jars", project_path)


def get_dependencies(config: dict, project_path: Path) -> list[Path]:
    """Get the resolved dependency archives and directories."""
    return _path_list(config, "dependencies", project_path)


def get_excludes(config: dict) -> list[str]:
    """Get gitignore-style patterns for class files to leave out."""
    return _string_list(config, "project", "exclude")


def get_r8_jar(config: dict, project_path: Path) -> Path:
    """Get the R8 jar to run."""
    r8_jar = config.get("engine", {}).get("r8_jar")
    if not r8_jar:
        raise ConfigError("engine.r8_jar is not configured")
    return _resolve(project_path, r8_jar)


def get_java_executable(config: dict) -> str:
    """Get the java executable used to run R8."""
    return config.get("engine", {}).get("java") or "java"


def get_jdk_home(config: dict, project_path: Path) -> Path | None:
    """Get the JDK used as library, falling back to JAVA_HOME."""
    jdk_home = config.get("engine", {}).get("jdk_home") or os.environ.get("JAVA_HOME")
    return _resolve(project_path, jdk_home) if jdk_home else None


def get_jvm_args(config: dict) -> list[str]:
    """Get extra JVM arguments for the R8 process."""
    return _string_list(config, "engine", "jvm_args")
