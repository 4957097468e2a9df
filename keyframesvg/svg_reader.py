"""
SVG reader.

Reads a plain SVG image into a single frame, or a keyframe animated SVG
(root <svg id="phantom_svg">) back into its frames, durations, loop count
and skip-first flag.
"""

import copy
import logging
import re
from pathlib import Path
from typing import IO, Any, List, Optional, Union

from lxml import etree

from .document import Document
from .errors import MalformedDocumentError
from .frame import XLINK_NS, Frame, ViewBox
from .options import CodecOptions

logger = logging.getLogger(__name__)

ANIMATION_ID = "phantom_svg"

_LEADING_NUMBER = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

Source = Union[str, Path, IO[bytes]]


class SVGReader:
    """
    Reads SVG files into Document objects.

    Example:
        document = SVGReader().read('animation.svg')
        print(len(document.frames), document.loops, document.skip_first)
    """

    def read(self, source: Optional[Source], options: Optional[CodecOptions] = None) -> Document:
        """
        Reads an SVG file.

        Args:
            source: File path or binary file object; None or "" gives an empty Document
            options: Overrides applied to every frame read

        Returns:
            Document with the frames of the source

        Raises:
            MalformedDocumentError: When the markup cannot be parsed or an
                animation is missing one of its structural elements
        """
        if source is None or (isinstance(source, str) and not source):
            return Document()

        if isinstance(source, Path):
            source = str(source)

        try:
            root = etree.parse(source, self._parser()).getroot()
        except etree.XMLSyntaxError as exc:
            raise MalformedDocumentError(f"Cannot parse {source}: {exc}") from exc

        return self._read_root(root, options or CodecOptions(), source)

    def read_string(self, text: Union[str, bytes], options: Optional[CodecOptions] = None) -> Document:
        """Reads SVG markup held in memory."""
        if not text:
            return Document()
        if isinstance(text, str):
            text = text.encode("utf-8")

        try:
            root = etree.fromstring(text, self._parser())
        except etree.XMLSyntaxError as exc:
            raise MalformedDocumentError(f"Cannot parse SVG markup: {exc}") from exc

        return self._read_root(root, options or CodecOptions(), "<string>")

    # --- dispatch ---------------------------------------------------------------
    def _parser(self) -> etree.XMLParser:
        return etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)

    def _read_root(self, root: Any, options: CodecOptions, name: Any) -> Document:
        if etree.QName(root).localname != "svg":
            raise MalformedDocumentError(f"{name}: root element is not <svg>")

        document = Document()
        if root.get("id") == ANIMATION_ID:
            self._read_animation_svg(root, document, options)
            document.has_animation = True
        else:
            document.add_frame(self._read_image(root, options))
            document.has_animation = False

        logger.info(f"Read {len(document.frames)} frame(s) from {name} "
                    f"(animation: {document.has_animation})")
        return document

    def _read_animation_svg(self, root: Any, document: Document, options: CodecOptions):
        defs = _require_child(root, "defs")

        self._read_size(root, document, options)
        document.frames.extend(self._read_images(defs, options))

        symbol = _find_child(defs, "symbol")
        if symbol is None:
            if not _is_hand_off(root, document.frames):
                raise MalformedDocumentError("Animation is missing <defs><symbol>")
            # two frames, the first shown once: no cycle to read timings from
            document.skip_first = True
            document.loops = 0
            return

        document.skip_first = self._read_skip_first(symbol)
        self._read_durations(symbol, document, options)
        document.loops = self._read_loops(_require_child(root, "animate"))

    # --- frames -----------------------------------------------------------------
    def _read_size(self, node: Any, dest: Any, options: CodecOptions):
        dest.width = options.choose("width", node.get("width", dest.width))
        dest.height = options.choose("height", node.get("height", dest.height))

        viewbox = dest.viewbox
        text = node.get("viewBox")
        if text is not None:
            try:
                viewbox = ViewBox.from_text(text)
            except ValueError as exc:
                raise MalformedDocumentError(f"Invalid viewBox {text!r}") from exc
        dest.viewbox = copy.copy(options.choose("viewbox", viewbox))

    def _read_images(self, parent: Any, options: CodecOptions) -> List[Frame]:
        return [self._read_image(svg, options) for svg in _children(parent, "svg")]

    def _read_image(self, svg: Any, options: CodecOptions) -> Frame:
        frame = Frame()
        frame.namespaces = options.merge_namespaces(svg.nsmap)
        self._read_size(svg, frame, options)
        frame.surfaces = list(options.choose("surfaces", _elements(svg)))
        frame.duration = options.choose("duration", frame.duration)
        return frame

    # --- timing -----------------------------------------------------------------
    def _read_skip_first(self, symbol: Any) -> bool:
        use = _require_child(symbol, "use")
        return _href(use) != "#frame0"

    def _read_durations(self, symbol: Any, document: Document, options: CodecOptions):
        index = 1 if document.skip_first else 0
        for use in _children(symbol, "use"):
            timer = _require_child(use, "set")
            if index >= len(document.frames):
                raise MalformedDocumentError(
                    f"Animation has more timings than its {len(document.frames)} frames")
            duration = to_float(timer.get("dur"))
            document.frames[index].duration = options.choose("duration", duration)
            logger.debug(f"frame{index}: {document.frames[index].duration}s")
            index += 1

    def _read_loops(self, animate: Any) -> int:
        # "indefinite" is not a number and coerces to 0, i.e. loop forever
        return to_int(animate.get("repeatCount"))


# --- helpers --------------------------------------------------------------------

def to_float(text: Optional[str]) -> float:
    """Parses the leading number of `text` ("0.05s" -> 0.05); no number gives 0.0."""
    match = _LEADING_NUMBER.match(text or "")
    return float(match.group(1)) if match else 0.0


def to_int(text: Optional[str]) -> int:
    """Like to_float, truncated to an integer ("2.7" -> 2, "indefinite" -> 0)."""
    return int(to_float(text))


def _elements(node: Any) -> List[Any]:
    return [child for child in node if isinstance(child.tag, str)]


def _children(node: Any, name: str) -> List[Any]:
    return [child for child in _elements(node) if etree.QName(child).localname == name]


def _find_child(node: Any, name: str) -> Optional[Any]:
    children = _children(node, name)
    return children[0] if children else None


def _require_child(node: Any, name: str) -> Any:
    child = _find_child(node, name)
    if child is None:
        raise MalformedDocumentError(
            f"Animation is missing <{name}> in <{etree.QName(node).localname}>")
    return child


def _href(node: Any) -> Optional[str]:
    return node.get(f"{{{XLINK_NS}}}href", node.get("href"))


def _is_hand_off(root: Any, frames: List[Frame]) -> bool:
    if len(frames) != 2:
        return False
    for use in _children(root, "use"):
        if _href(use) != "#frame0":
            continue
        if any(timer.get("to") == "#frame1" for timer in _children(use, "set")):
            return True
    return False
