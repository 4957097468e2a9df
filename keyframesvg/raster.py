"""
Raster frames: wraps a bitmap in an SVG frame that embeds it as a base64 PNG.
"""

import base64
import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np
import svgwrite

from .errors import UnsupportedInputError
from .frame import DEFAULT_DURATION, Frame
from .svg_reader import SVGReader

logger = logging.getLogger(__name__)


def frame_from_array(image: np.ndarray,
                     duration: float = DEFAULT_DURATION,
                     compression: int = 8) -> Frame:
    """
    Converts an image array (BGR or grayscale, as OpenCV loads it) to a frame.

    Args:
        image: H x W or H x W x C array
        duration: Display duration in seconds
        compression: PNG compression level (0-9)

    Returns:
        Frame whose only drawing is an <image> of the array's pixel size

    Raises:
        UnsupportedInputError: When the array cannot be encoded as PNG
    """
    if not isinstance(image, np.ndarray) or image.ndim not in (2, 3) or image.size == 0:
        raise UnsupportedInputError("Expected a non-empty 2D or 3D image array")

    height, width = image.shape[:2]
    data = _frame_to_base64(image, compression)

    dwg = svgwrite.Drawing(size=(f"{width}px", f"{height}px"))
    dwg.viewbox(0, 0, width, height)
    dwg.add(dwg.image(
        f"data:image/png;base64,{data}",
        insert=(0, 0),
        size=(width, height)
    ))

    frame = SVGReader().read_string(dwg.tostring()).frames[0]
    frame.duration = duration
    logger.debug(f"Raster frame {width}x{height}, {len(data)} base64 bytes")
    return frame


def frame_from_image(path: Union[str, Path], duration: float = DEFAULT_DURATION) -> Frame:
    """Loads a PNG/JPEG/BMP file with OpenCV and converts it to a frame."""
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise UnsupportedInputError(f"Cannot read image: {path}")
    return frame_from_array(image, duration)


def _frame_to_base64(frame: np.ndarray, compression: int = 8) -> str:
    encode_params = [cv2.IMWRITE_PNG_COMPRESSION, compression]
    try:
        ok, buffer = cv2.imencode(".png", frame, encode_params)
    except cv2.error as exc:
        raise UnsupportedInputError(f"Cannot encode image as PNG: {exc}") from exc
    if not ok:
        raise UnsupportedInputError("Cannot encode image as PNG")

    return base64.b64encode(buffer).decode("utf-8")
