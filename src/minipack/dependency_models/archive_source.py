"""
Pydantic data models describing a dependency archive and the directories it is staged through.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from minipack.minipack_utils import keyed_name

DEFAULT_USE = ["**/*"]


class ArchiveSource(BaseModel):
    """
    A fully resolved, downloadable dependency.

    Every provider kind (plain tarball, GitHub tag, npm package) boils down to one of
    these: where to fetch the archive, whether to strip its top-level directory, the
    cache key and which files to keep.
    """

    name: str = Field(..., min_length=1, description="Unique dependency name")
    url: str = Field(..., description="URL of the gzipped tarball")
    flatten: bool = Field(
        False, description="Strip the single leading directory of the archive"
    )
    key: Optional[str] = Field(
        None, description="Version or tag. Unkeyed dependencies are never cached"
    )
    use: List[str] = Field(
        default_factory=lambda: list(DEFAULT_USE),
        description="Glob patterns selecting the files to vendor",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("key", mode="before")
    @classmethod
    def _empty_key_is_none(cls, value):
        return value or None

    @field_validator("use", mode="before")
    @classmethod
    def _normalize_use(cls, value: Union[None, str, List[str]]):
        if value is None:
            return list(DEFAULT_USE)
        if isinstance(value, str):
            return [value]
        return list(value)

    @property
    def keyed_name(self) -> str:
        return keyed_name(self.name, self.key)


class ProviderContext(BaseModel):
    """Per-task scratch and destination directories handed to a provider."""

    temp_dir: str
    out_dir: str

    model_config = ConfigDict(frozen=True)
