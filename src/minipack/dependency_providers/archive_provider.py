"""
Generic fetch-extract-copy provider.

Every dependency kind is executed by ArchiveProvider; the kinds only differ in how
their ArchiveSource is resolved (see resolvers.py).
"""

import logging
import os
from typing import Optional, Protocol, runtime_checkable

from minipack.dependency_models import ArchiveSource, ProviderContext
from minipack.minipack_logger import SUCCESS, MinipackLogger
from minipack.minipack_utils import FileUtils

DOWNLOAD_FILE_NAME = "download"


@runtime_checkable
class DependencyProvider(Protocol):
    """
    Anything that can materialize one dependency into a ProviderContext.
    """

    @property
    def name(self) -> str: ...

    @property
    def key(self) -> Optional[str]: ...

    def exec(self, context: ProviderContext) -> None: ...


class ArchiveProvider:
    """
    Downloads a gzipped tarball, extracts it and copies the selected files to the
    task's output directory.
    """

    def __init__(self, source: ArchiveSource, logger: Optional[MinipackLogger] = None):
        self.source = source
        self.logger = logger or MinipackLogger()

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def key(self) -> Optional[str]:
        return self.source.key

    def exec(self, context: ProviderContext) -> None:
        """
        Run download, extract, cleanup and copy in order. Errors propagate unchanged.

        Args:
            context: The isolated scratch and output directories for this task
        """
        download_to = os.path.join(context.temp_dir, DOWNLOAD_FILE_NAME)

        self.logger.log(f"Downloading {self.name}...", logging.INFO)
        FileUtils.download_file(self.logger, self.source.url, download_to)

        self.logger.log("Unpacking...", logging.DEBUG)
        FileUtils.extract_tarball(
            self.logger, download_to, context.temp_dir, flatten=self.source.flatten
        )

        self.logger.log("Cleaning up download...", logging.DEBUG)
        os.remove(download_to)

        self.logger.log("Copying...", logging.DEBUG)
        FileUtils.glob_copy(self.source.use, context.temp_dir, context.out_dir)

        self.logger.log(self.source.keyed_name, SUCCESS)

    def __repr__(self) -> str:
        return f"ArchiveProvider(name={self.name}, key={self.key}, url={self.source.url})"
