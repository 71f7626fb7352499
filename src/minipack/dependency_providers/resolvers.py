"""
Resolvers turning the user-facing dependency descriptions (tarball URL, GitHub tag,
npm package) into ArchiveSource tuples, and the matching ArchiveProvider factories.
"""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional, Union

from minipack.dependency_models import ArchiveSource, RegistryPackage, select_highest
from minipack.dependency_providers.archive_provider import ArchiveProvider
from minipack.minipack_exceptions import ResolutionError
from minipack.minipack_logger import MinipackLogger

GITHUB_TAG_ARCHIVE_URL = "https://github.com/{repo}/archive/refs/tags/{tag}.tar.gz"
NPM_INFO_PROPERTIES = ["name", "version", "dist.tarball"]

Use = Union[None, str, List[str]]


class NpmRegistry:
    """
    Queries the npm registry through the npm CLI.
    """

    def __init__(self, executable: str = "npm"):
        self.executable = executable

    def query(self, identifier: str) -> List[Dict[str, Any]]:
        """
        Run `npm info --json` for {identifier} and return every candidate record.

        Raises:
            ResolutionError: If npm exits with failure or cannot be started
        """
        args = [self.executable, "info", "--json", identifier, *NPM_INFO_PROPERTIES]
        try:
            result = subprocess.run(args, capture_output=True)
        except OSError as exc:
            raise ResolutionError(identifier, f"{identifier}: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise ResolutionError(identifier, f"{identifier}: {stderr}")

        output = result.stdout.decode().strip()
        if not output:
            return []

        info = json.loads(output)
        if isinstance(info, list):
            return info
        return [info]


def tar_source(
    name: str,
    url: str,
    flatten: bool = False,
    key: Optional[str] = None,
    use: Use = None,
) -> ArchiveSource:
    return ArchiveSource(name=name, url=url, flatten=flatten, key=key, use=use)


def github_source(repo: str, tag: str, use: Use = None) -> ArchiveSource:
    """
    Resolve a GitHub repository tag to its release tarball.

    Tag archives always wrap their content in a "<repo>-<version>/" directory, so the
    source is always flattened, and the tag doubles as the cache key.
    """
    owner, _, repo_name = repo.partition("/")
    if not owner or not repo_name or "/" in repo_name:
        raise ValueError(f'GitHub repository must look like "owner/name", got {repo!r}')

    return ArchiveSource(
        name=repo,
        url=GITHUB_TAG_ARCHIVE_URL.format(repo=repo, tag=tag),
        flatten=True,
        key=tag,
        use=use,
    )


def resolve_registry_identifier(identifier: str, registry=None) -> RegistryPackage:
    """
    Resolve an npm identifier ("vue" or "vue@3.4") to a single package, picking the
    highest semantic version when the registry returns several candidates.

    Raises:
        ResolutionError: If no candidate matches
    """
    registry = registry or NpmRegistry()
    resolved = select_highest(registry.query(identifier))

    if resolved is None:
        raise ResolutionError(identifier)

    return resolved


def npm_source(package: str, use: Use = None, registry=None) -> ArchiveSource:
    resolved = resolve_registry_identifier(package, registry)
    return ArchiveSource(
        name=resolved.name,
        url=resolved.tarball_url,
        flatten=True,
        key=resolved.version,
        use=use,
    )


def tar(
    name: str,
    url: str,
    flatten: bool = False,
    key: Optional[str] = None,
    use: Use = None,
    logger: Optional[MinipackLogger] = None,
) -> ArchiveProvider:
    return ArchiveProvider(tar_source(name, url, flatten, key, use), logger)


def github(
    repo: str, tag: str, use: Use = None, logger: Optional[MinipackLogger] = None
) -> ArchiveProvider:
    return ArchiveProvider(github_source(repo, tag, use), logger)


def npm(
    package: str,
    use: Use = None,
    registry=None,
    logger: Optional[MinipackLogger] = None,
) -> ArchiveProvider:
    """
    Build a provider for an npm package. Resolution happens here, before the task is
    queued, so an unknown package fails immediately.
    """
    logger = logger or MinipackLogger()
    try:
        source = npm_source(package, use, registry)
    except ResolutionError as e:
        logger.log(str(e), logging.ERROR)
        raise

    return ArchiveProvider(source, logger)
