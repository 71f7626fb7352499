"""
Dependency models for minipack.

This package provides Pydantic data models describing resolved archive sources,
per-task execution contexts and npm registry records.
"""

from .archive_source import ArchiveSource, ProviderContext, DEFAULT_USE
from .registry_package import RegistryPackage, SemanticVersion, select_highest

__all__ = [
    # Archive sources
    "ArchiveSource",
    "ProviderContext",
    "DEFAULT_USE",
    # Registry
    "RegistryPackage",
    "SemanticVersion",
    "select_highest",
]
