"""
Frame model: one still image of an animation together with its display duration.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

DEFAULT_SIZE = 64
DEFAULT_DURATION = 0.1

Length = Union[int, float, str]

_SEPARATORS = re.compile(r"[\s,]+")


@dataclass
class ViewBox:
    """The `viewBox` rectangle of an <svg> element"""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_text(cls, text: str) -> "ViewBox":
        """
        Parses `viewBox` attribute text such as "0 0 64 64" or "0,0,64,64".

        Missing trailing components default to 0.

        Raises:
            ValueError: When a component is not a number
        """
        parts = [p for p in _SEPARATORS.split(str(text).strip()) if p]
        values = [float(p) for p in parts[:4]]
        values.extend([0.0] * (4 - len(values)))
        return cls(*values)

    @classmethod
    def coerce(cls, value: Any) -> "ViewBox":
        """Accepts a ViewBox, its text form or a 4-sequence of numbers."""
        if isinstance(value, ViewBox):
            return ViewBox(value.x, value.y, value.width, value.height)
        if isinstance(value, str):
            return cls.from_text(value)
        return cls(*[float(v) for v in value])

    def __str__(self) -> str:
        return " ".join(_format_number(v) for v in (self.x, self.y, self.width, self.height))


@dataclass
class Frame:
    """
    One image of an animation.

    `width` and `height` keep whatever form the source used: a number of
    pixels, or a length string with units ("64px", "2cm").
    `namespaces` maps prefixes to URIs, None being the default binding.
    `surfaces` are the lxml elements that draw the image.
    """
    width: Length = DEFAULT_SIZE
    height: Length = DEFAULT_SIZE
    viewbox: Optional[ViewBox] = None
    namespaces: Dict[Optional[str], str] = field(default_factory=dict)
    surfaces: List[Any] = field(default_factory=list)
    duration: float = DEFAULT_DURATION


def format_length(value: Length) -> str:
    """Formats a frame/document size for an attribute; strings pass through."""
    if isinstance(value, str):
        return value
    return f"{int(value)}px"


def _format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)
