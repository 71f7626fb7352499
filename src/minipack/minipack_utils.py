"""
This file contains various utility functions like I/O operations, handling paths, etc.
"""

import logging
import os
import pathlib
import shutil
import subprocess
from typing import Iterable, List, Optional, Union

import requests

from minipack.minipack_exceptions import CopyError, DownloadError, ExtractionError
from minipack.minipack_logger import MinipackLogger

DOWNLOAD_CHUNK_SIZE = 1 << 16


def keyed_name(name: str, key: Optional[str] = None) -> str:
    """
    Name of the output directory for a dependency: "name@key" when keyed, else "name"
    """
    return f"{name}@{key}" if key else name


class FileUtils:
    """
    Utility functions for file operations.
    """

    @staticmethod
    def download_file(logger: MinipackLogger, url: str, target_path: str) -> None:
        """
        Downloads the file from the given URL to the given {target_path}
        """
        logger.log(f"Downloading file from {url} to {target_path}", logging.DEBUG)
        try:
            with requests.get(url, stream=True) as response:
                if not response.ok:
                    raise DownloadError(
                        f'"{response.reason}" when downloading {url}'
                    )
                with open(target_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except requests.RequestException as exc:
            raise DownloadError(f"Error downloading file from {url}: {exc}") from exc

    @staticmethod
    def extract_tarball(
        logger: MinipackLogger,
        archive_path: str,
        target_path: Optional[str] = None,
        flatten: bool = False,
    ) -> None:
        """
        Extracts the gzipped tarball at {archive_path} into {target_path} using the system tar.

        With flatten set, the leading path component of every member is stripped.
        """
        args = ["tar", "-xzf", str(archive_path)]
        if target_path:
            args.extend(["-C", str(target_path)])
        if flatten:
            args.append("--strip-components=1")

        logger.log(f"Running {' '.join(args)}", logging.DEBUG)
        try:
            result = subprocess.run(args, capture_output=True)
        except OSError as exc:
            raise ExtractionError(str(exc)) from exc

        if result.returncode != 0:
            raise ExtractionError(result.stderr.decode(errors="replace"))

    @staticmethod
    def glob_copy(
        patterns: Union[str, Iterable[str]], from_dir: str, to_dir: str
    ) -> List[pathlib.Path]:
        """
        Copies the regular files under {from_dir} matching any of {patterns} into {to_dir},
        keeping their paths relative to {from_dir}. Returns the copied destination paths.
        """
        if isinstance(patterns, str):
            patterns = [patterns]

        source_root = pathlib.Path(from_dir).resolve()
        target_root = pathlib.Path(to_dir).resolve()

        copied = []
        try:
            for pattern in patterns:
                for entry in sorted(source_root.glob(pattern)):
                    if not entry.is_file():
                        continue
                    destination = target_root / entry.relative_to(source_root)
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copyfile(entry, destination)
                    copied.append(destination)
        except (OSError, ValueError, NotImplementedError) as exc:
            raise CopyError(f"Failed to copy files from {from_dir}: {exc}") from exc

        return copied

    @staticmethod
    def empty_dir(path: str) -> None:
        """
        Ensures {path} is an empty directory, creating it (and its parents) if missing
        """
        directory = pathlib.Path(path)
        if not directory.exists():
            directory.mkdir(parents=True)
            return

        for child in directory.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()

    @staticmethod
    def is_directory(path: str) -> bool:
        return os.path.isdir(path)
