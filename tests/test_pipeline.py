"""Tests for building trackers and running analyses from config."""

from pathlib import Path

import pytest

from classprune.engine.r8 import R8Engine
from classprune.errors import ConfigError
from classprune.pipeline import build_engine, build_tracker, run_analysis


@pytest.fixture
def configured_project(tmp_path: Path, make_class, make_jar):
    classes = tmp_path / "build" / "classes" / "java" / "main"
    make_class(classes, "com/example/App", "com/lib/Used")
    make_jar(tmp_path / "libs" / "lib.jar", {"com/lib/Used": [], "com/lib/Unused": []})
    make_jar(tmp_path / "libs" / "api.jar", {"com/api/Iface": []})
    config = {
        "project": {
            "build_dir": "build",
            "class_dirs": ["build/classes/java/main"],
            "api_jars": ["libs/api.jar"],
            "dependencies": ["libs/lib.jar", "libs/api.jar"],
            "exclude": [],
        },
        "engine": {"r8_jar": "tools/r8.jar", "jdk_home": "/opt/jdk"},
    }
    return tmp_path, config


class TestBuildEngine:
    def test_r8_engine_from_config(self, tmp_path: Path) -> None:
        config = {"engine": {"r8_jar": "r8.jar", "java": "/opt/jdk/bin/java", "jvm_args": ["-Xmx1g"]}}

        engine = build_engine(config, tmp_path)

        assert isinstance(engine, R8Engine)
        assert engine.r8_jar == tmp_path / "r8.jar"
        assert engine.java == "/opt/jdk/bin/java"
        assert engine.jvm_args == ["-Xmx1g"]

    def test_requires_r8_jar(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            build_engine({}, tmp_path)


class TestBuildTracker:
    def test_registers_eligible_dependencies(self, configured_project, engine) -> None:
        """API archives are never registered as dependencies."""
        tmp_path, config = configured_project

        tracker = build_tracker(config, tmp_path, engine)

        assert tracker.dependencies == (tmp_path / "libs" / "lib.jar",)
        assert tracker.jdk_home == Path("/opt/jdk")
        assert tracker.tmp_dir == tmp_path / "build" / "tmp" / "classprune" / "minimize"


class TestRunAnalysis:
    def test_results(self, configured_project, engine) -> None:
        tmp_path, config = configured_project

        results = run_analysis(config, tmp_path, engine)

        assert results.unused_classes == {"com.lib.Unused"}
        assert results.metadata.program_inputs == 2
        assert results.metadata.dependencies == [str(tmp_path / "libs" / "lib.jar")]
        assert results.processed_dir == str(tmp_path / "build" / "tmp" / "classprune" / "minimize")
