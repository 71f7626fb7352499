"""
This file contains the main interface of minipack.

Example:
    Minipack({"temp_dir": "./.temp"}) \\
        .github("andreasphil/design-system", "v0.37.0", use=["*LICENSE*", "dist/*"]) \\
        .npm("vue@3.4", use=["*LICENSE*", "dist/vue.esm-browser.*"]) \\
        .pack()
"""

from typing import Any, Dict, Mapping, Optional

from minipack.dependency_config import DependencyConfigManager
from minipack.dependency_downloader import DependencyDownloader
from minipack.dependency_providers import DependencyProvider, github, npm, tar
from minipack.dependency_providers.resolvers import Use
from minipack.minipack_config import MinipackConfig
from minipack.minipack_logger import MinipackLogger


class Minipack:
    """
    Collects dependencies in order and vendors them into the output directory.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        flags: Optional[Mapping[str, Any]] = None,
        logger: Optional[MinipackLogger] = None,
    ):
        """
        Args:
            options: Run options (out_dir/outDir, temp_dir/tempDir, reload)
            flags: Overrides from the command line, taking precedence over options
            logger: Reporter for progress and errors
        """
        self.config = MinipackConfig.layered(options, flags)
        self.logger = logger or MinipackLogger()
        self.config_manager = DependencyConfigManager(self.config)
        self.downloader = DependencyDownloader(self.config_manager, self.logger)

    @property
    def tasks(self):
        return list(self.config_manager.tasks)

    def add(self, dependency: DependencyProvider) -> "Minipack":
        self.config_manager.add_task(dependency)
        return self

    def tar(
        self,
        name: str,
        url: str,
        flatten: bool = False,
        key: Optional[str] = None,
        use: Use = None,
    ) -> "Minipack":
        return self.add(tar(name, url, flatten, key, use, logger=self.logger))

    def github(self, repo: str, tag: str, use: Use = None) -> "Minipack":
        return self.add(github(repo, tag, use, logger=self.logger))

    def npm(self, package: str, use: Use = None, registry=None) -> "Minipack":
        return self.add(npm(package, use, registry, logger=self.logger))

    def pack(self) -> bool:
        """
        Vendor every queued dependency.

        Returns:
            True on success (including an empty task list), False if the run failed
        """
        return self.downloader.run()

    def get_download_summary(self) -> Dict[str, int]:
        return self.downloader.get_download_summary()
