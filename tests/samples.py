"""
Sample SVG frames shared by the tests.
"""

from pathlib import Path
from typing import List, Optional

import svgwrite
from lxml import etree

from keyframesvg import Document, SVGReader

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XLINK_HREF = f"{{{XLINK_NS}}}href"
NSMAP = {"svg": SVG_NS, "xlink": XLINK_NS}

# References appear before the elements they point to; "#dotted" names no element.
FORWARD_REFERENCE_SVG = f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" width="32px" height="32px" viewBox="0 0 32 32">
  <rect width="32" height="32" fill="url(#late)" clip-path="url(#clip)"/>
  <use xlink:href="#dot"/>
  <a xlink:href="#dotted"><rect width="1" height="1" fill="#fff"/></a>
  <defs>
    <clipPath id="clip"><rect width="16" height="16"/></clipPath>
    <linearGradient id="late"><stop offset="0" stop-color="#fff"/></linearGradient>
  </defs>
  <circle id="dot" cx="8" cy="8" r="4" style="fill:url(#late);stroke:url(#late)"/>
  <circle id="dots" cx="8" cy="8" r="2"/>
</svg>
"""


def sample_svg(index: int = 0, size: int = 64) -> str:
    """A frame whose circle radius (10 + index) identifies it."""
    dwg = svgwrite.Drawing(size=(f"{size}px", f"{size}px"))
    dwg.viewbox(0, 0, size, size)

    gradient = dwg.linearGradient(id="shade")
    gradient.add_stop_color(0, "white")
    gradient.add_stop_color(1, f"rgb({index * 20 % 256},0,0)")
    dwg.defs.add(gradient)

    dwg.add(dwg.circle(center=(size // 2, size // 2), r=10 + index, fill="url(#shade)", id="face"))
    dwg.add(dwg.use("#face", id="echo"))
    return dwg.tostring()


def write_samples(directory: Path, count: int) -> List[Path]:
    paths = []
    for i in range(count):
        path = Path(directory) / f"{i}.svg"
        path.write_text(sample_svg(i), encoding="utf-8")
        paths.append(path)
    return paths


def sample_document(count: int,
                    skip_first: bool = False,
                    loops: int = 0,
                    durations: Optional[List[float]] = None) -> Document:
    document = Document()
    reader = SVGReader()
    for i in range(count):
        frame = reader.read_string(sample_svg(i)).frames[0]
        if durations is not None:
            frame.duration = durations[i]
        document.add_frame(frame)
    document.skip_first = skip_first
    document.loops = loops
    return document


def parse(data: bytes):
    return etree.fromstring(data)


def circle_radius(frame) -> str:
    """Radius of the first circle drawn by a sample frame."""
    for surface in frame.surfaces:
        if etree.QName(surface).localname == "circle":
            return surface.get("r")
    raise AssertionError("frame has no circle")


def ids_below(node) -> List[str]:
    return [e.get("id") for e in node.iter() if isinstance(e.tag, str) and e.get("id") is not None]
