"""Orchestrator: config -> tracker -> results."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path

from classprune import __version__
from classprune.config import (
    get_api_jars,
    get_build_dir,
    get_class_dirs,
    get_dependencies,
    get_excludes,
    get_java_executable,
    get_jdk_home,
    get_jvm_args,
    get_r8_jar,
)
from classprune.engine.protocol import ReachabilityEngine
from classprune.engine.r8 import R8Engine
from classprune.exclusion import ClassFileExcluder
from classprune.models.results import AnalysisMetadata, UnusedResults
from classprune.tracker import UnusedTracker

logger = logging.getLogger(__name__)


def build_engine(config: dict, project_path: Path) -> R8Engine:
    """Create the R8 engine described by the config."""
    return R8Engine(
        get_r8_jar(config, project_path),
        java=get_java_executable(config),
        jvm_args=get_jvm_args(config),
    )


def build_tracker(
    config: dict,
    project_path: Path,
    engine: ReachabilityEngine | None = None,
) -> UnusedTracker:
    """Create a tracker and register every configured dependency with it."""
    if engine is None:
        engine = build_engine(config, project_path)

    dependencies = get_dependencies(config, project_path)
    tracker = UnusedTracker.for_project(
        get_build_dir(config, project_path),
        get_class_dirs(config, project_path),
        get_api_jars(config, project_path),
        dependencies,
        engine,
        jdk_home=get_jdk_home(config, project_path),
        excluder=ClassFileExcluder(get_excludes(config)),
    )

    for dependency in dependencies:
        tracker.add_dependency(dependency)

    logger.info(
        "Tracking %d of %d dependencies for minimization",
        len(tracker.dependencies),
        len(dependencies),
    )
    return tracker


def run_analysis(
    config: dict,
    project_path: Path,
    engine: ReachabilityEngine | None = None,
) -> UnusedResults:
    """Find the unused classes of a configured project."""
    start_time = time.time()

    tracker = build_tracker(config, project_path, engine)
    unused = tracker.find_unused()

    duration_ms = int((time.time() - start_time) * 1000)

    metadata = AnalysisMetadata(
        project=str(project_path),
        analyzed_at=datetime.now(),
        classprune_version=__version__,
        program_inputs=len(tracker.project_files),
        dependencies=[str(d) for d in tracker.dependencies],
        analysis_duration_ms=duration_ms,
    )

    return UnusedResults(
        metadata=metadata,
        unused_classes=unused,
        processed_dir=str(tracker.tmp_dir),
    )
