"""
keyframesvg - Convert frame sequences to and from keyframe animated SVG files.

This package reads plain SVG images and keyframe animated SVG files (frames
shown one after another by SMIL <set> triggers) into Document objects, and
writes Documents back out, keeping element ids unique across merged frames.
"""

__version__ = "0.1.0"

from .document import Document
from .errors import (
    ConfigurationError,
    EmptyInputError,
    KeyframeSVGError,
    MalformedDocumentError,
    UnsupportedInputError,
)
from .frame import Frame, ViewBox
from .options import CodecOptions
from .svg_reader import SVGReader
from .svg_writer import SVGWriter, convert_id_to_unique

__all__ = [
    'Document',
    'Frame',
    'ViewBox',
    'CodecOptions',
    'SVGReader',
    'SVGWriter',
    'convert_id_to_unique',
    'KeyframeSVGError',
    'MalformedDocumentError',
    'UnsupportedInputError',
    'EmptyInputError',
    'ConfigurationError',
]
