"""
Dependency downloader.

This package handles:
1. Verifying the task list
2. Preparing the scratch and output directories
3. Running each provider, skipping cached ones
4. Removing the scratch directory on every exit path
"""

from .downloader import DependencyDownloader, PackOutcome, PackState

__all__ = ["DependencyDownloader", "PackOutcome", "PackState"]
