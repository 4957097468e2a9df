"""
SVG writer.

A single frame is written as a plain SVG image. Two or more frames are written
as a keyframe animated SVG: every frame becomes an <svg id="frame{i}"> inside
<defs>, a <symbol id="animation"> chains SMIL <set> triggers that show the
frames one after another, and a top level <animate id="controller"> repeats
the chain `loops` times.
"""

import copy
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Set, Tuple, Union

from lxml import etree

from .document import Document
from .errors import EmptyInputError, UnsupportedInputError
from .frame import SVG_NS, XLINK_NS, Frame, format_length
from .options import CodecOptions
from .svg_reader import ANIMATION_ID

logger = logging.getLogger(__name__)

GENERATOR_COMMENT = " Generated by keyframesvg. "

XLINK_HREF = f"{{{XLINK_NS}}}href"


class _Layout(Enum):
    IMAGE = "image"
    ANIMATION = "animation"


class _WriteTarget(NamedTuple):
    layout: _Layout
    frames: List[Frame]
    document: Optional[Document]


class SVGWriter:
    """
    Writes frames and documents as SVG.

    Example:
        size = SVGWriter().write('out.svg', document)
    """

    def write(self, path: Optional[Union[str, Path]], obj: Any,
              options: Optional[CodecOptions] = None) -> int:
        """
        Writes a Document or a Frame to `path`.

        Args:
            path: Destination file
            obj: Document or Frame
            options: Overrides applied to every written frame

        Returns:
            Number of bytes written; 0 when the path is empty, the document has
            no frames or `obj` is neither a Document nor a Frame
        """
        # Path("") normalises to "."
        if not path or Path(path) == Path(""):
            return 0

        try:
            data = self.to_bytes(obj, options)
        except (EmptyInputError, UnsupportedInputError) as exc:
            logger.warning(f"Nothing written to {path}: {exc}")
            return 0

        with open(path, "wb") as f:
            f.write(data)

        logger.info(f"Wrote {path} ({len(data)} bytes)")
        return len(data)

    def to_bytes(self, obj: Any, options: Optional[CodecOptions] = None) -> bytes:
        """
        Serializes a Document or a Frame to UTF-8 SVG markup.

        Raises:
            EmptyInputError: When the document has no frames
            UnsupportedInputError: When `obj` is neither a Document nor a Frame
        """
        target = self._resolve(obj, options or CodecOptions())

        if target.layout is _Layout.IMAGE:
            root = self._write_image(target.frames[0])
        else:
            root = self._write_animation_svg(target.document, target.frames)

        root.set("version", "1.1")
        root.addprevious(etree.Comment(GENERATOR_COMMENT))

        return etree.tostring(root.getroottree(), xml_declaration=True,
                              encoding="UTF-8", pretty_print=True)

    def _resolve(self, obj: Any, options: CodecOptions) -> _WriteTarget:
        if isinstance(obj, Frame):
            return _WriteTarget(_Layout.IMAGE, [options.apply(obj)], None)

        if isinstance(obj, Document):
            if not obj.frames:
                raise EmptyInputError("Document has no frames")
            frames = [options.apply(frame) for frame in obj.frames]
            layout = _Layout.IMAGE if len(frames) == 1 else _Layout.ANIMATION
            return _WriteTarget(layout, frames, obj)

        raise UnsupportedInputError(f"Cannot write {type(obj).__name__} as SVG")

    # --- images -----------------------------------------------------------------
    def _write_image(self, frame: Frame, parent: Any = None, frame_id: Optional[str] = None,
                     reserved: Iterable[str] = ()) -> Any:
        nsmap = _nsmap(frame.namespaces)
        if parent is None:
            svg = etree.Element(_svg("svg"), nsmap=nsmap)
        else:
            svg = etree.SubElement(parent, _svg("svg"), nsmap=nsmap)

        if frame_id is not None:
            svg.set("id", frame_id)
        svg.set("width", format_length(frame.width))
        svg.set("height", format_length(frame.height))
        if frame.viewbox is not None:
            svg.set("viewBox", str(frame.viewbox))
        svg.set("preserveAspectRatio", "none")

        for surface in frame.surfaces:
            svg.append(copy.deepcopy(surface))

        if frame_id is not None:
            convert_id_to_unique(svg, f"{frame_id}_", reserved)
        return svg

    def _write_images(self, frames: List[Frame], defs: Any) -> List[Any]:
        defs.append(etree.Comment(" Images. "))
        generated = _generated_ids(len(frames))
        blocks = [self._write_image(frame, defs, f"frame{i}", generated)
                  for i, frame in enumerate(frames)]
        _assert_unique_ids(blocks, generated)
        return blocks

    # --- animation --------------------------------------------------------------
    def _write_animation_svg(self, document: Document, frames: List[Frame]) -> Any:
        svg = etree.Element(_svg("svg"), nsmap={None: SVG_NS, "xlink": XLINK_NS})
        svg.set("id", ANIMATION_ID)

        # documents built frame by frame may not carry a size of their own
        width = document.width if document.width is not None else frames[0].width
        height = document.height if document.height is not None else frames[0].height
        svg.set("width", format_length(width))
        svg.set("height", format_length(height))
        if document.viewbox is not None:
            svg.set("viewBox", str(document.viewbox))

        defs = etree.SubElement(svg, _svg("defs"))
        self._write_images(frames, defs)

        if _is_hand_off(document, frames):
            svg.append(etree.Comment(" Main control. "))
            self._write_hand_off(svg)
        else:
            self._write_animation(document, frames, defs)
            svg.append(etree.Comment(" Main control. "))
            self._write_controller(document, frames, svg)

        logger.debug(f"Animation: {len(frames)} frames, loops={document.loops}, "
                     f"skip_first={document.skip_first}")
        return svg

    def _write_animation(self, document: Document, frames: List[Frame], defs: Any):
        defs.append(etree.Comment(" Animation. "))
        symbol = etree.SubElement(defs, _svg("symbol"), {"id": "animation"})

        begin = f"0s;frame{len(frames) - 1}_anim.end"
        for i, frame in enumerate(frames):
            if i == 0 and document.skip_first:
                continue

            frame_id = f"frame{i}"
            use = etree.SubElement(symbol, _svg("use"), {XLINK_HREF: f"#{frame_id}",
                                                         "visibility": "hidden"})
            etree.SubElement(use, _svg("set"), {
                "id": f"{frame_id}_anim",
                "attributeName": "visibility",
                "to": "visible",
                "begin": begin,
                "dur": f"{frame.duration}s",
            })
            begin = f"{frame_id}_anim.end"

    def _write_controller(self, document: Document, frames: List[Frame], svg: Any):
        loops = int(document.loops or 0)
        repeat_count = "indefinite" if loops == 0 else str(loops)
        total = sum(frame.duration for frame in _participating(frames, document.skip_first))

        etree.SubElement(svg, _svg("animate"), {
            "id": "controller",
            "begin": "0s",
            "dur": f"{total}s",
            "repeatCount": repeat_count,
        })

        use = etree.SubElement(svg, _svg("use"), {XLINK_HREF: "#frame0"})
        etree.SubElement(use, _svg("set"), {
            "attributeName": "xlink:href",
            "to": "#animation",
            "begin": "controller.begin",
        })
        etree.SubElement(use, _svg("set"), {
            "attributeName": "xlink:href",
            "to": f"#frame{len(frames) - 1}",
            "begin": "controller.end",
        })

    def _write_hand_off(self, svg: Any):
        use = etree.SubElement(svg, _svg("use"), {XLINK_HREF: "#frame0"})
        etree.SubElement(use, _svg("set"), {
            "attributeName": "xlink:href",
            "to": "#frame1",
            "begin": "0s",
        })


# --- id uniquification ------------------------------------------------------------

def convert_id_to_unique(node: Any, prefix: str, reserved: Iterable[str] = ()) -> List[str]:
    """
    Prefixes every id below `node` and rewrites the "#id" references to them.

    All ids are collected before any reference is rewritten, so references to
    elements that come later in the document are rewritten too.

    Args:
        node: Subtree to rewrite; its own id is kept
        prefix: Prepended to every id below `node`
        reserved: Ids used elsewhere in the output; a prefixed id that would
            equal one of them gets trailing underscores until it is free

    Returns:
        The original ids, in document order
    """
    ids, renamed = _overwrite_ids(node, prefix, set(reserved))
    _overwrite_references(node, renamed)
    return ids


def _overwrite_ids(node: Any, prefix: str, taken: Set[str]) -> Tuple[List[str], Dict[str, str]]:
    ids: List[str] = []
    renamed: Dict[str, str] = {}
    for element in _descendants(node):
        old_id = element.get("id")
        if old_id is None:
            continue
        ids.append(old_id)
        if old_id not in renamed:
            new_id = f"{prefix}{old_id}"
            while new_id in taken:
                new_id += "_"
            taken.add(new_id)
            renamed[old_id] = new_id
        element.set("id", renamed[old_id])
    return ids, renamed


def _overwrite_references(node: Any, renamed: Dict[str, str]):
    names = [i for i in renamed if i]
    if not names:
        return

    # one substitution per value so a rewritten reference is never matched again
    pattern = re.compile("#(" + "|".join(re.escape(i) for i in names) + r")(?![\w.:-])")
    for element in _descendants(node):
        for key, value in element.attrib.items():
            rewritten = pattern.sub(lambda m: f"#{renamed[m.group(1)]}", value)
            if rewritten != value:
                element.set(key, rewritten)


def _generated_ids(count: int) -> Set[str]:
    """Ids the animation layout gives its own elements."""
    ids = {ANIMATION_ID, "animation", "controller"}
    for i in range(count):
        ids.update((f"frame{i}", f"frame{i}_anim"))
    return ids


def _assert_unique_ids(blocks: List[Any], generated: Set[str]):
    owners: Dict[str, int] = {}
    for index, block in enumerate(blocks):
        for element in _descendants(block):
            ident = element.get("id")
            if ident is None:
                continue
            assert ident not in generated, f"id {ident!r} in frame{index} is used by the animation"
            owner = owners.setdefault(ident, index)
            assert owner == index, f"id {ident!r} defined in both frame{owner} and frame{index}"


# --- helpers ----------------------------------------------------------------------

def _svg(name: str) -> str:
    return f"{{{SVG_NS}}}{name}"


def _nsmap(namespaces: Dict[Optional[str], str]) -> Dict[Optional[str], str]:
    nsmap: Dict[Optional[str], str] = {None: SVG_NS}
    nsmap.update(namespaces or {})
    return nsmap


def _descendants(node: Any) -> List[Any]:
    return [element for element in node.iterdescendants() if isinstance(element.tag, str)]


def _participating(frames: List[Frame], skip_first: bool) -> List[Frame]:
    return frames[1:] if skip_first else frames


def _is_hand_off(document: Document, frames: List[Frame]) -> bool:
    return bool(document.skip_first) and len(frames) == 2
