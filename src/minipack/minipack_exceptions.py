"""
This module contains the exceptions raised by minipack.
"""


class MinipackException(Exception):
    """
    Base class for all exceptions raised while vendoring dependencies.
    """

    def __init__(self, message: str):
        super().__init__(message)


class DuplicateNameError(MinipackException):
    """Two or more queued dependencies share a name."""

    def __init__(self, duplicates):
        self.duplicates = sorted(duplicates)
        super().__init__(
            f"Names must be unique, duplicated: {', '.join(self.duplicates)}"
        )


class ResolutionError(MinipackException):
    """A registry package identifier did not resolve to any package."""

    def __init__(self, identifier: str, message: str = ""):
        self.identifier = identifier
        super().__init__(
            message or f"{identifier} did not resolve to an npm package"
        )


class DownloadError(MinipackException):
    """Non-success response or transport failure while fetching an archive."""


class ExtractionError(MinipackException):
    """The archive decompression tool exited with failure."""


class CopyError(MinipackException):
    """Filesystem failure while staging selected files into the output directory."""


class ManifestError(MinipackException):
    """The minipack.toml manifest is missing required fields or is malformed."""
