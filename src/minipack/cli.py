"""
Command line entry point for minipack.

Reads the dependencies to vendor from a `minipack.toml` manifest and applies any
command line flags on top of the manifest's options.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from minipack.minipack import Minipack
from minipack.minipack_exceptions import ManifestError, MinipackException
from minipack.minipack_logger import MinipackLogger

DEFAULT_MANIFEST = "minipack.toml"

MANIFEST_SCHEMA = """
# minipack manifest

[minipack]
# Options, overridden by --outDir / --tempDir / --reload
outDir = "./vendor"
# tempDir = "./.temp"
# reload = false

[[minipack.tar]]
name = "my-dependency"
url = "https://example.com/my-dependency-1.0.0.tar.gz"
flatten = true
key = "1.0.0"
use = ["dist/*"]

[[minipack.github]]
repo = "andreasphil/design-system"
tag = "v0.37.0"
use = ["*LICENSE*", "dist/*"]

[[minipack.npm]]
package = "vue@3.4"
use = ["*LICENSE*", "dist/vue.esm-browser.*"]
"""

_OPTION_KEYS = ("outDir", "tempDir", "reload", "out_dir", "temp_dir")


def _use_list(entry: Dict[str, Any], section: str) -> Optional[List[str]]:
    use = entry.get("use")
    if use is None or isinstance(use, str):
        return use
    if not isinstance(use, list) or not all(isinstance(u, str) for u in use):
        raise ManifestError(f"'use' in [[minipack.{section}]] must be a string or a list of strings")
    return use


def _require(entry: Dict[str, Any], section: str, key: str) -> str:
    if not isinstance(entry, dict):
        raise ManifestError(f"[[minipack.{section}]] entries must be tables")
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ManifestError(f"[[minipack.{section}]] entry is missing '{key}'")
    return value


@dataclass
class Manifest:
    """Dependencies and options loaded from minipack.toml."""

    options: Dict[str, Any] = field(default_factory=dict)
    tar: List[Dict[str, Any]] = field(default_factory=list)
    github: List[Dict[str, Any]] = field(default_factory=list)
    npm: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Manifest":
        """
        Create a Manifest from a dictionary (loaded from TOML).

        Raises:
            ManifestError: If the manifest is malformed
        """
        section = config_dict.get("minipack")
        if not isinstance(section, dict):
            raise ManifestError("Manifest has no [minipack] section")

        options = {k: v for k, v in section.items() if k in _OPTION_KEYS}

        tars = []
        for entry in section.get("tar", []):
            tars.append(
                {
                    "name": _require(entry, "tar", "name"),
                    "url": _require(entry, "tar", "url"),
                    "flatten": bool(entry.get("flatten", False)),
                    "key": entry.get("key"),
                    "use": _use_list(entry, "tar"),
                }
            )

        githubs = []
        for entry in section.get("github", []):
            githubs.append(
                {
                    "repo": _require(entry, "github", "repo"),
                    "tag": _require(entry, "github", "tag"),
                    "use": _use_list(entry, "github"),
                }
            )

        npms = []
        for entry in section.get("npm", []):
            npms.append(
                {
                    "package": _require(entry, "npm", "package"),
                    "use": _use_list(entry, "npm"),
                }
            )

        return cls(options=options, tar=tars, github=githubs, npm=npms)

    @classmethod
    def load(cls, path: str) -> "Manifest":
        if not os.path.exists(path):
            raise ManifestError(f"Manifest not found: {path}\n\nExpected format:{MANIFEST_SCHEMA}")
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ManifestError(f"Failed to parse {path}: {e}") from e
        return cls.from_dict(toml_dict)

    def build(self, flags: Optional[Dict[str, Any]] = None, logger: Optional[MinipackLogger] = None) -> Minipack:
        """Queue every manifest entry on a new Minipack, in tar, github, npm order."""
        packer = Minipack(self.options, flags, logger)
        for entry in self.tar:
            packer.tar(**entry)
        for entry in self.github:
            packer.github(**entry)
        for entry in self.npm:
            packer.npm(**entry)
        return packer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minipack",
        description="Vendor third-party build assets into a local directory.",
    )
    parser.add_argument("--config", default=DEFAULT_MANIFEST, help="path to the manifest (default: %(default)s)")
    parser.add_argument("--outDir", "--out-dir", dest="outDir", help="output directory")
    parser.add_argument("--tempDir", "--temp-dir", dest="tempDir", help="scratch directory")
    parser.add_argument(
        "--reload",
        action="store_true",
        default=None,
        help="discard every cached dependency and fetch again",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    return parser


def parse_flags(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def flag_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Flags the user actually passed, keyed by option name."""
    overrides = {"outDir": args.outDir, "tempDir": args.tempDir, "reload": args.reload}
    return {k: v for k, v in overrides.items() if v is not None}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_flags(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    logger = MinipackLogger()
    if args.verbose:
        logger.logger.setLevel(logging.DEBUG)

    try:
        packer = Manifest.load(args.config).build(flag_overrides(args), logger)
    except (MinipackException, ValueError) as e:
        logger.log(str(e), logging.ERROR)
        return 1

    return 0 if packer.pack() else 1


if __name__ == "__main__":
    sys.exit(main())
