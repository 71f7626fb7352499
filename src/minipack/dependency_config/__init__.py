"""
Dependency configuration management.

This package handles:
1. Holding the ordered task list for a run
2. Verifying that dependency names are unique
3. Deciding which dependencies are already cached in the output directory
4. Laying out the per-task scratch and output directories
"""

from .config_manager import DependencyConfigManager, DependencyState, DownloadStatus

__all__ = ["DependencyConfigManager", "DependencyState", "DownloadStatus"]
