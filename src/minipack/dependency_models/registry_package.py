"""
Pydantic data models for records returned by the npm registry, and the semantic
version ordering used to choose between them.
"""

import functools
import re
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

_SEMVER_PATTERN = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@functools.total_ordering
class SemanticVersion(BaseModel):
    """
    A semantic version, ordered by SemVer 2.0.0 precedence.

    Build metadata is kept but never takes part in comparisons.
    """

    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, version: str) -> "SemanticVersion":
        match = _SEMVER_PATTERN.match(version.strip())
        if not match:
            raise ValueError(f"Invalid semantic version: {version!r}")
        prerelease = match.group("prerelease")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=match.group("build"),
        )

    def _precedence(self):
        # A release sorts above every pre-release of the same version
        release = (self.major, self.minor, self.patch)
        if not self.prerelease:
            return release, (1,)
        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return release, (0, identifiers)

    def __eq__(self, other):
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence() == other._precedence()

    def __lt__(self, other):
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __hash__(self):
        return hash(self._precedence())

    def __str__(self):
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + self.build
        return text


class RegistryPackage(BaseModel):
    """
    A single package record as printed by `npm info --json <id> name version dist.tarball`.
    """

    name: str
    version: str
    tarball_url: str = Field(..., alias="dist.tarball")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def semantic_version(self) -> SemanticVersion:
        return SemanticVersion.parse(self.version)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "RegistryPackage":
        return cls(**record)


def select_highest(
    records: Iterable[Union[RegistryPackage, Dict[str, Any]]]
) -> Optional[RegistryPackage]:
    """
    Returns the record with the highest semantic version, or None if there are no records
    """
    packages = [
        r if isinstance(r, RegistryPackage) else RegistryPackage.from_dict(r)
        for r in records
    ]
    if not packages:
        return None
    return max(packages, key=lambda p: p.semantic_version)
