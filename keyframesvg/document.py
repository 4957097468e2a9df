"""
Document: an ordered list of frames plus the size, loop count and skip-first
flag of the animation they form.

Frames are loaded from files by extension:
    .svg                     plain or keyframe animated SVG
    .json / .yaml / .yml     animation spec
    .xml                     animation spec
    .png / .jpg / .jpeg / .bmp  raster image embedded in an SVG frame
"""

import glob
import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from .errors import EmptyInputError, UnsupportedInputError
from .frame import Frame, Length, ViewBox
from .options import CodecOptions

logger = logging.getLogger(__name__)

SVG_SUFFIXES = (".svg",)
SPEC_SUFFIXES = (".json", ".yaml", ".yml")
XML_SPEC_SUFFIXES = (".xml",)
RASTER_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp")

PathLike = Union[str, Path]


class Document:
    """
    Frames of an animation and its document level settings.

    Example:
        document = Document('frames/*.svg')
        document.loops = 2
        document.save_svg('animation.svg')
    """

    def __init__(self, path: Optional[PathLike] = None, options: Optional[CodecOptions] = None):
        self.reset()
        if path:
            self.add_frame_from_file(path, options)

    def reset(self):
        self.frames: List[Frame] = []
        self.width: Optional[Length] = None
        self.height: Optional[Length] = None
        self.viewbox: Optional[ViewBox] = None
        self.loops: int = 0
        self.skip_first: bool = False
        self.has_animation: bool = False

    @property
    def total_duration(self) -> float:
        """Length of one animation cycle in seconds."""
        frames = self.frames[1:] if self.skip_first else self.frames
        return sum(frame.duration for frame in frames)

    def add_frame(self, frame: Frame):
        """Appends a frame; the first frame of a sizeless document gives it its size."""
        if self.width is None:
            self.width = frame.width
        if self.height is None:
            self.height = frame.height
        self.frames.append(frame)

    def add_frame_from_file(self, path: PathLike, options: Optional[CodecOptions] = None) -> int:
        """
        Loads frames from every file matching `path`.

        Args:
            path: File path or glob pattern; matches are sorted naturally
            options: Overrides applied to every loaded frame

        Returns:
            Number of frames added

        Raises:
            EmptyInputError: When no file matches `path`
            UnsupportedInputError: When a file has an unknown extension
        """
        files = self._expand(path)
        if not files:
            raise EmptyInputError(f"No file matches {path}")

        added = 0
        for file in files:
            added += self._load_file(file, options or CodecOptions())

        logger.info(f"Added {added} frame(s) from {path}")
        return added

    def save_svg(self, path: PathLike) -> int:
        """Writes the document as SVG; returns the number of bytes written."""
        from .svg_writer import SVGWriter

        return SVGWriter().write(path, self)

    def save_svg_frame(self, path: PathLike, frame: Frame) -> int:
        """Writes a single frame as a plain SVG image."""
        from .svg_writer import SVGWriter

        return SVGWriter().write(path, frame)

    # --- loading ----------------------------------------------------------------
    def _expand(self, path: PathLike) -> List[str]:
        return sorted(glob.glob(str(path)), key=_natural_key)

    def _load_file(self, file: str, options: CodecOptions) -> int:
        suffix = Path(file).suffix.lower()

        if suffix in SVG_SUFFIXES:
            return self._load_from_svg(file, options)
        if suffix in SPEC_SUFFIXES:
            from .spec_loader import load_animation_spec

            return self._merge(load_animation_spec(file, options))
        if suffix in XML_SPEC_SUFFIXES:
            from .spec_loader import load_xml_animation_spec

            return self._merge(load_xml_animation_spec(file, options))
        if suffix in RASTER_SUFFIXES:
            from .raster import frame_from_image

            self.add_frame(options.apply(frame_from_image(file)))
            return 1

        raise UnsupportedInputError(f"Unsupported file type: {file}")

    def _load_from_svg(self, file: str, options: CodecOptions) -> int:
        from .svg_reader import SVGReader

        loaded = SVGReader().read(file, options)
        if loaded.has_animation:
            self.width = loaded.width
            self.height = loaded.height
            self.viewbox = loaded.viewbox
            self.loops = loaded.loops
            self.skip_first = loaded.skip_first
            self.frames.extend(loaded.frames)
        else:
            for frame in loaded.frames:
                self.add_frame(frame)
        self.has_animation = loaded.has_animation
        return len(loaded.frames)

    def _merge(self, loaded: "Document") -> int:
        self.loops = loaded.loops
        self.skip_first = loaded.skip_first
        for frame in loaded.frames:
            self.add_frame(frame)
        return len(loaded.frames)


def _natural_key(text: str) -> list:
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", text)]
