"""
Dependency downloader implementation.

Runs the queued providers one after another: verify, prepare the filesystem,
execute each task with per-task caching, and always clean up the scratch directory.
"""

import logging
import os
import shutil
import tempfile
from enum import Enum
from typing import Dict, Optional

from minipack.dependency_config import DependencyConfigManager, DownloadStatus
from minipack.minipack_logger import MinipackLogger
from minipack.minipack_utils import FileUtils

TEMP_DIR_PREFIX = "minipack-vendor-deps-"


class PackState(str, Enum):
    """States of a single run."""

    IDLE = "idle"
    VERIFYING = "verifying"
    PREPARING_FILESYSTEM = "preparing_filesystem"
    RUNNING_TASKS = "running_tasks"
    CLEANING_UP = "cleaning_up"
    DONE = "done"


class PackOutcome(str, Enum):
    SUCCESS = "success"
    DEGRADED = "degraded"


class DependencyDownloader:
    """
    Executes the task list held by a DependencyConfigManager.

    The current phase of the run is always available as `state`; once the run is
    DONE, `outcome` tells whether every task succeeded and `error` holds the
    exception that terminated it, if any.
    """

    def __init__(
        self,
        config_manager: DependencyConfigManager,
        logger: MinipackLogger,
    ):
        """
        Initialize the dependency downloader.

        Args:
            config_manager: The DependencyConfigManager holding the task list
            logger: Logger for progress and error messages
        """
        self.config_manager = config_manager
        self.logger = logger
        self.state = PackState.IDLE
        self.outcome: Optional[PackOutcome] = None
        self.error: Optional[Exception] = None

    def run(self) -> bool:
        """
        Run every queued task.

        Returns:
            True if all tasks succeeded or were cached, False if the run failed
        """
        self.outcome = None
        self.error = None
        self.config_manager.dependency_states = {}

        if not self.config_manager.tasks:
            self.logger.log("No dependencies specified", logging.WARNING)
            self.state = PackState.DONE
            self.outcome = PackOutcome.SUCCESS
            return True

        try:
            self.state = PackState.VERIFYING
            self.config_manager.verify()

            self.state = PackState.PREPARING_FILESYSTEM
            self._prepare_filesystem()

            self.state = PackState.RUNNING_TASKS
            self._run_tasks()

            self.outcome = PackOutcome.SUCCESS
        except Exception as e:
            self.error = e
            self.outcome = PackOutcome.DEGRADED
            self.logger.log(f"{type(e).__name__}: {e}", logging.ERROR)
        finally:
            self.state = PackState.CLEANING_UP
            self._cleanup()
            self.state = PackState.DONE

        return self.outcome == PackOutcome.SUCCESS

    def _prepare_filesystem(self) -> None:
        config = self.config_manager.config

        if config.temp_dir:
            FileUtils.empty_dir(config.temp_dir)
            self.config_manager.scratch_dir = config.temp_dir
        else:
            self.config_manager.scratch_dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)

        if config.reload:
            self.logger.log("Reloading all dependencies", logging.INFO)
            FileUtils.empty_dir(config.out_dir)
        else:
            os.makedirs(config.out_dir, exist_ok=True)

    def _run_tasks(self) -> None:
        tasks = self.config_manager.tasks
        for index, task in enumerate(tasks):
            if not self.config_manager.needs_download(task):
                self.logger.log(
                    f'Skipping "{task.name}", key "{task.key}" has already been downloaded',
                    logging.INFO,
                )
                self.config_manager.mark(task, DownloadStatus.CACHED)
                continue

            self.config_manager.mark(task, DownloadStatus.IN_PROGRESS)
            try:
                context = self.config_manager.create_context(task)
                task.exec(context)
            except Exception as e:
                self.config_manager.mark(task, DownloadStatus.FAILED, str(e))
                for remaining in tasks[index + 1:]:
                    self.config_manager.mark(remaining, DownloadStatus.NOT_ATTEMPTED)
                raise

            self.config_manager.mark(task, DownloadStatus.COMPLETED)

    def _cleanup(self) -> None:
        # A configured scratch root is removed even when the run never prepared it
        scratch_dir = self.config_manager.scratch_dir or self.config_manager.config.temp_dir
        self.config_manager.scratch_dir = None
        if not scratch_dir or not os.path.isdir(scratch_dir):
            return

        self.logger.log(f"Removing scratch directory {scratch_dir}", logging.DEBUG)
        try:
            shutil.rmtree(scratch_dir)
        except OSError as e:
            self.logger.log(
                f"Failed to remove scratch directory {scratch_dir}: {e}", logging.ERROR
            )

    def get_download_summary(self) -> Dict[str, int]:
        """
        Get a summary of the last run.

        Returns:
            Dictionary with counts of completed, cached, failed and not attempted tasks
        """
        states = self.config_manager.get_dependency_states().values()

        def count(status: str) -> int:
            return sum(1 for state in states if state.download_status == status)

        return {
            "completed": count(DownloadStatus.COMPLETED),
            "cached": count(DownloadStatus.CACHED),
            "failed": count(DownloadStatus.FAILED),
            "not_attempted": count(DownloadStatus.NOT_ATTEMPTED),
            "total": len(self.config_manager.tasks),
        }
