"""
Configuration parameters for a minipack run.
"""

import inspect
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

DEFAULT_OUT_DIR = "./vendor"

# Flag names accepted from the external flag layer, mapped to field names
FLAG_ALIASES = {
    "outDir": "out_dir",
    "tempDir": "temp_dir",
    "reload": "reload",
}


@dataclass
class MinipackConfig:
    """
    Configuration parameters

    Attributes:
        out_dir: Directory the vendored dependencies are staged into.
        temp_dir: Scratch directory. A fresh unique directory is created when unset.
        reload: Discard every cached entry in out_dir before running.
    """

    out_dir: str = DEFAULT_OUT_DIR
    temp_dir: Optional[str] = None
    reload: bool = False

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "MinipackConfig":
        """
        Create a MinipackConfig instance from a dictionary, ignoring unknown keys
        """
        normalized = normalize_layer(env)
        return cls(
            **{
                k: v
                for k, v in normalized.items()
                if k in inspect.signature(cls).parameters
            }
        )

    @classmethod
    def layered(cls, *layers: Optional[Mapping[str, Any]]) -> "MinipackConfig":
        """
        Resolve the configuration from the built-in defaults plus each layer in
        increasing order of precedence (constructor options, then flags).

        A value of None in a layer leaves the lower layer's value in place.
        """
        merged: Dict[str, Any] = {f.name: f.default for f in fields(cls)}
        for layer in layers:
            for key, value in normalize_layer(layer).items():
                if key in merged and value is not None:
                    merged[key] = value
        merged["reload"] = bool(merged["reload"])
        return cls.from_dict(merged)


def normalize_layer(layer: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Map flag-style keys (outDir, tempDir) onto field names."""
    if not layer:
        return {}
    return {FLAG_ALIASES.get(key, key): value for key, value in layer.items()}
