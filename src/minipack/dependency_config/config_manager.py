"""
Dependency configuration manager.

Holds the ordered task list, verifies it, and decides per task whether a download
is needed and where it should be staged.
"""

import collections
import os
from typing import Dict, List, Optional

from minipack.dependency_models import ProviderContext
from minipack.dependency_providers import DependencyProvider
from minipack.minipack_config import MinipackConfig
from minipack.minipack_exceptions import DuplicateNameError
from minipack.minipack_utils import FileUtils, keyed_name


class DownloadStatus:
    """Enumeration of download statuses."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CACHED = "cached"
    FAILED = "failed"
    NOT_ATTEMPTED = "not_attempted"


class DependencyState:
    """
    Current state of a dependency.

    Tracks whether a dependency has been vendored and where it's located.
    """

    def __init__(
            self,
            dependency_name: str,
            download_status: str,
            output_path: Optional[str] = None,
            error_message: Optional[str] = None,
    ):
        """
        Initialize dependency state.

        Args:
            dependency_name: Unique name of the dependency
            download_status: Current download status
            output_path: Directory the dependency was vendored into
            error_message: Error message if the task failed
        """
        self.dependency_name = dependency_name
        self.download_status = download_status
        self.output_path = output_path
        self.error_message = error_message

    def __repr__(self) -> str:
        return (
            f"DependencyState(name={self.dependency_name}, "
            f"status={self.download_status}, path={self.output_path})"
        )


class DependencyConfigManager:
    """
    Manages the task list and the cache decisions for a run.
    """

    def __init__(self, config: MinipackConfig):
        """
        Initialize the dependency config manager.

        Args:
            config: The resolved run configuration
        """
        self.config = config
        self.tasks: List[DependencyProvider] = []
        self.dependency_states: Dict[str, DependencyState] = {}
        # Scratch root of the current run, set once the filesystem is prepared
        self.scratch_dir: Optional[str] = None

    def add_task(self, task: DependencyProvider) -> None:
        self.tasks.append(task)

    def verify(self) -> None:
        """
        Check the task list before any I/O happens.

        Raises:
            DuplicateNameError: If two tasks share a name
        """
        counts = collections.Counter(task.name for task in self.tasks)
        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateNameError(duplicates)

    def output_path(self, task: DependencyProvider) -> str:
        return os.path.join(self.config.out_dir, keyed_name(task.name, task.key))

    def needs_download(self, task: DependencyProvider) -> bool:
        """
        Unkeyed tasks are always fetched; keyed tasks only when their output directory
        is missing. The directory's content is never inspected.
        """
        if not task.key:
            return True
        return not FileUtils.is_directory(self.output_path(task))

    def create_context(self, task: DependencyProvider) -> ProviderContext:
        """
        Create (or empty) the per-task scratch and output directories.

        Args:
            task: The task about to run

        Returns:
            The ProviderContext the task executes in
        """
        temp_dir = os.path.join(self.scratch_dir, task.name)
        FileUtils.empty_dir(temp_dir)

        out_dir = self.output_path(task)
        FileUtils.empty_dir(out_dir)

        return ProviderContext(temp_dir=temp_dir, out_dir=out_dir)

    def mark(
        self,
        task: DependencyProvider,
        status: str,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Record the status of a task.

        Args:
            task: The task to mark
            status: One of DownloadStatus
            error_message: Why the task failed, if it did
        """
        self.dependency_states[task.name] = DependencyState(
            dependency_name=task.name,
            download_status=status,
            output_path=self.output_path(task) if status in (
                DownloadStatus.COMPLETED, DownloadStatus.CACHED
            ) else None,
            error_message=error_message,
        )

    def get_dependency_states(self) -> Dict[str, DependencyState]:
        """
        Get the states of all dependencies.

        Returns:
            Dictionary mapping dependency names to DependencyState objects
        """
        return self.dependency_states

    def get_dependency_state(self, name: str) -> Optional[DependencyState]:
        return self.dependency_states.get(name)
