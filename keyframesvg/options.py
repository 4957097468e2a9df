"""keyframesvg.options - per-call frame overrides and the YAML configuration layer."""

from __future__ import annotations

import copy
import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .errors import ConfigurationError
from .frame import Frame, Length, ViewBox

logger = logging.getLogger(__name__)

__all__ = [
    "CodecOptions",
    "create_default_config",
    "load_config",
]


@dataclass
class CodecOptions:
    """
    Global overrides for one read or write call.

    Every field left as None keeps the parsed value; a supplied field replaces
    it on every frame touched by the call.
    """
    width: Optional[Length] = None
    height: Optional[Length] = None
    viewbox: Optional[ViewBox] = None
    surfaces: Optional[List[Any]] = None
    duration: Optional[float] = None
    namespaces: Optional[Dict[Optional[str], str]] = None

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> "CodecOptions":
        if not values:
            return cls()

        names = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - names)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

        kwargs = {k: v for k, v in values.items() if v is not None}
        try:
            if "viewbox" in kwargs:
                kwargs["viewbox"] = ViewBox.coerce(kwargs["viewbox"])
            if "duration" in kwargs:
                kwargs["duration"] = float(kwargs["duration"])
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid option value: {exc}") from exc
        if "namespaces" in kwargs and not isinstance(kwargs["namespaces"], Mapping):
            raise ConfigurationError("namespaces must be a mapping")
        return cls(**kwargs)

    def choose(self, name: str, parsed: Any) -> Any:
        """Returns the override for `name` if one was supplied, else `parsed`."""
        override = getattr(self, name)
        return parsed if override is None else override

    def merge_namespaces(self, namespaces: Mapping[Optional[str], str]) -> Dict[Optional[str], str]:
        merged = dict(namespaces)
        if self.namespaces:
            merged.update(self.namespaces)
        return merged

    def apply(self, frame: Frame) -> Frame:
        """Returns a copy of `frame` with the overrides applied; `frame` is untouched."""
        viewbox = self.choose("viewbox", frame.viewbox)
        return dataclasses.replace(
            frame,
            width=self.choose("width", frame.width),
            height=self.choose("height", frame.height),
            viewbox=copy.copy(viewbox),
            namespaces=self.merge_namespaces(frame.namespaces),
            surfaces=list(self.choose("surfaces", frame.surfaces)),
            duration=self.choose("duration", frame.duration),
        )


# -----------------------------------------------------------------------------

def create_default_config() -> Dict[str, Any]:
    return {
        "options": {
            "width": None,
            "height": None,
            "viewbox": None,
            "duration": None,
            "namespaces": None,
        },
        "animation": {
            "loops": None,
            "skip_first": None,
        },
    }


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads a YAML configuration file and merges it over the defaults.

    Args:
        config_path: Path to the YAML file, or None for the defaults only

    Returns:
        The merged configuration

    Raises:
        ConfigurationError: When the file cannot be read or has the wrong shape
    """
    config = create_default_config()
    if not config_path:
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to load configuration {config_path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Configuration {config_path} must be a mapping")

    for section, values in loaded.items():
        if section not in config:
            raise ConfigurationError(f"Unknown configuration section: {section}")
        if not isinstance(values, dict):
            raise ConfigurationError(f"Configuration section {section} must be a mapping")
        config[section].update(values)

    logger.info(f"Loaded configuration from {config_path}")
    return config
