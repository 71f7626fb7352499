"""
minipack vendors third-party build assets: it downloads tarballs (plain URLs, GitHub
release tags or npm packages), extracts them, keeps the files selected by glob
patterns and stages them into a local output directory keyed by version.
"""

from minipack.dependency_providers import (
    ArchiveProvider,
    DependencyProvider,
    NpmRegistry,
    github,
    npm,
    tar,
)
from minipack.minipack import Minipack
from minipack.minipack_config import MinipackConfig
from minipack.minipack_exceptions import (
    CopyError,
    DownloadError,
    DuplicateNameError,
    ExtractionError,
    ManifestError,
    MinipackException,
    ResolutionError,
)
from minipack.minipack_logger import MinipackLogger

__all__ = [
    "Minipack",
    "MinipackConfig",
    "MinipackLogger",
    "ArchiveProvider",
    "DependencyProvider",
    "NpmRegistry",
    "tar",
    "github",
    "npm",
    "MinipackException",
    "DuplicateNameError",
    "ResolutionError",
    "DownloadError",
    "ExtractionError",
    "CopyError",
    "ManifestError",
]
