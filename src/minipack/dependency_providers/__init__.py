"""
Dependency providers.

This package handles:
1. Resolving tarball, GitHub tag and npm package descriptions to archive sources
2. Downloading, extracting and filtering the resolved archives
"""

from .archive_provider import ArchiveProvider, DependencyProvider
from .resolvers import (
    NpmRegistry,
    github,
    github_source,
    npm,
    npm_source,
    resolve_registry_identifier,
    tar,
    tar_source,
)

__all__ = [
    "ArchiveProvider",
    "DependencyProvider",
    "NpmRegistry",
    "github",
    "github_source",
    "npm",
    "npm_source",
    "resolve_registry_identifier",
    "tar",
    "tar_source",
]
