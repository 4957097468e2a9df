"""
Animation spec loaders.

An animation spec lists the image files of an animation together with their
display durations (in seconds). JSON and YAML specs share one schema:

    loops: 3
    skip_first: false
    delay: 0.1
    frames:
      - file: 0.svg
        delay: 0.05
      - 1.svg

The XML form carries the same information:

    <animation loops="3" skip_first="false" delay="0.1">
      <frame src="0.svg" delay="0.05"/>
      <frame src="1.svg"/>
    </animation>

File references are relative to the spec file and may be glob patterns.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from lxml import etree

from .document import Document
from .errors import MalformedDocumentError
from .options import CodecOptions

logger = logging.getLogger(__name__)

__all__ = [
    "load_animation_spec",
    "load_xml_animation_spec",
]

_TRUE_WORDS = ("1", "true", "yes", "on")


def load_animation_spec(path: Union[str, Path], options: Optional[CodecOptions] = None) -> Document:
    """
    Loads a JSON or YAML animation spec.

    Args:
        path: Spec file
        options: Overrides applied to every loaded frame

    Returns:
        Document with the listed frames, loop count and skip-first flag

    Raises:
        MalformedDocumentError: When the file cannot be parsed or lacks a frame list
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            spec = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(f"Cannot parse animation spec {path}: {exc}") from exc

    if not isinstance(spec, dict):
        raise MalformedDocumentError(f"Animation spec {path} must be a mapping")

    return _build_document(spec, Path(path).parent, options or CodecOptions(), path)


def load_xml_animation_spec(path: Union[str, Path], options: Optional[CodecOptions] = None) -> Document:
    """Loads an XML animation spec (<animation> root with <frame src=...> children)."""
    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
    try:
        root = etree.parse(str(path), parser).getroot()
    except etree.XMLSyntaxError as exc:
        raise MalformedDocumentError(f"Cannot parse animation spec {path}: {exc}") from exc

    if etree.QName(root).localname != "animation":
        raise MalformedDocumentError(f"Animation spec {path} must have an <animation> root")

    frames: List[Dict[str, Any]] = []
    for node in root:
        if not isinstance(node.tag, str) or etree.QName(node).localname != "frame":
            continue
        if node.get("src") is None:
            raise MalformedDocumentError(f"Animation spec {path}: <frame> without src")
        frames.append({"file": node.get("src"), "delay": node.get("delay")})

    spec = {
        "loops": root.get("loops"),
        "skip_first": root.get("skip_first"),
        "delay": root.get("delay"),
        "frames": frames,
    }
    return _build_document(spec, Path(path).parent, options or CodecOptions(), path)


# -----------------------------------------------------------------------------

def _build_document(spec: Dict[str, Any], base_dir: Path, options: CodecOptions, name: Any) -> Document:
    entries = spec.get("frames")
    if not isinstance(entries, list):
        raise MalformedDocumentError(f"Animation spec {name} needs a list of frames")

    document = Document()
    document.loops = _number(spec.get("loops"), int, 0, name)
    if document.loops < 0:
        raise MalformedDocumentError(f"Animation spec {name}: loops must not be negative")
    document.skip_first = _flag(spec.get("skip_first"))
    default_delay = _number(spec.get("delay"), float, None, name)

    for entry in entries:
        if isinstance(entry, str):
            entry = {"file": entry}
        if not isinstance(entry, dict) or not isinstance(entry.get("file"), str):
            raise MalformedDocumentError(f"Animation spec {name}: invalid frame entry {entry!r}")

        delay = _number(entry.get("delay"), float, default_delay, name)
        entry_options = options
        if delay is not None and options.duration is None:
            entry_options = dataclasses.replace(options, duration=delay)

        loaded = Document()
        loaded.add_frame_from_file(base_dir / entry["file"], entry_options)
        for frame in loaded.frames:
            document.add_frame(frame)

    logger.info(f"Loaded animation spec {name}: {len(document.frames)} frame(s), "
                f"loops={document.loops}, skip_first={document.skip_first}")
    return document


def _number(value: Any, kind: type, default: Any, name: Any) -> Any:
    if value is None or value == "":
        return default
    try:
        return kind(float(value)) if kind is int else kind(value)
    except (TypeError, ValueError) as exc:
        raise MalformedDocumentError(f"Animation spec {name}: {value!r} is not a number") from exc


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return bool(value)
