"""Drive every registered build file processor over a project tree."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from constants import BuildSystem, Constants
from buildfiles import FormatProcessor, GradleProcessor, MavenProcessor
from common.logging_utils import extra_context, is_debug_enabled, Timer
from versioning.models import FileResult, RunSummary
from versioning.oracle import VersionOracle, VersionSource


def default_processors(
    source: VersionSource,
    *,
    root: str = ".",
    logger: Optional[logging.Logger] = None,
    **options,
) -> List[FormatProcessor]:
    """Gradle and Maven processors sharing one oracle (and its memo)."""
    oracle = VersionOracle(source, logger=logger)
    return [
        GradleProcessor(oracle, root=root, logger=logger, **options),
        MavenProcessor(oracle, root=root, logger=logger, **options),
    ]


class UpgradeOrchestrator:
    """Run each processor over the files it discovers.

    Processor order only affects log order. A failing file or processor never
    stops the run.
    """

    def __init__(
        self,
        processors: Iterable[FormatProcessor],
        *,
        max_workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.processors = list(processors)
        self.max_workers = max(1, max_workers if max_workers is not None else Constants.MAX_WORKERS)
        self.logger = logger or logging.getLogger(__name__)

    def run(self, build_systems: Optional[Iterable[BuildSystem]] = None) -> RunSummary:
        """Process every discovered file, optionally for selected build systems only."""
        selected = set(build_systems) if build_systems is not None else None
        summary = RunSummary()
        self.logger.info("Starting dependency update process for all supported build systems...")
        with Timer() as timer:
            for processor in self.processors:
                if selected is not None and processor.build_system not in selected:
                    continue
                for result in self._run_processor(processor):
                    summary.add(result)
        self.logger.info(
            "Dependency update process completed: %d files, %d upgrades, %d written, %d failed.",
            summary.files_found, summary.upgrades, summary.files_written, summary.files_failed,
        )
        if is_debug_enabled(self.logger):
            self.logger.debug(
                "Run finished",
                extra=extra_context(
                    event="function_exit",
                    component="updater",
                    action="run",
                    duration_ms=timer.duration_ms(),
                    count=summary.files_found,
                )
            )
        return summary

    def _run_processor(self, processor: FormatProcessor) -> List[FileResult]:
        self.logger.info("Processing %s build files...", processor.name)
        try:
            files = processor.find_files()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.logger.error("Error finding %s build files: %s", processor.name, exc)
            return []
        if not files:
            self.logger.info("No %s build files found.", processor.name)
            return []

        if self.max_workers == 1 or len(files) == 1:
            return [self._process_one(processor, path) for path in files]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(files))) as pool:
            return list(pool.map(lambda path: self._process_one(processor, path), files))

    def _process_one(self, processor: FormatProcessor, path: str) -> FileResult:
        self.logger.info("Updating %s build file: %s", processor.name, path)
        try:
            return processor.process(path)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.logger.error("Error updating file %s: %s", path, exc)
            return FileResult(path=path, build_system=processor.build_system.value, error=str(exc))
