#!/usr/bin/env python
"""
keyframesvg - command line interface for building keyframe animated SVG files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .document import Document
from .errors import KeyframeSVGError
from .options import CodecOptions, load_config

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Combine SVG frames, animation specs and images into a keyframe animated SVG')

    parser.add_argument('inputs', nargs='+',
                        help='Input files or glob patterns (.svg, .json, .yaml, .xml, .png, .jpg)')
    parser.add_argument('-o', '--output', required=True, help='Output SVG file path')
    parser.add_argument('--loops', type=int, help='Loop count, 0 loops forever (default: from input)')
    parser.add_argument('--skip-first', action='store_true', default=None,
                        help='Show the first frame once, outside the loop')
    parser.add_argument('--duration', type=float, help='Duration of every frame in seconds')
    parser.add_argument('--width', help='Width of every frame (e.g. 64 or 64px)')
    parser.add_argument('--height', help='Height of every frame (e.g. 64 or 64px)')
    parser.add_argument('--split', metavar='DIR', help='Also write every frame to DIR/<index>.svg')
    parser.add_argument('--config', help='Path to YAML configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def build_document(args: argparse.Namespace) -> Document:
    """Loads every input into one document and applies the animation settings."""
    config = load_config(args.config)

    option_values = dict(config['options'])
    for key in ('width', 'height', 'duration'):
        value = getattr(args, key)
        if value is not None:
            option_values[key] = value
    options = CodecOptions.from_dict(option_values)

    document = Document()
    for pattern in args.inputs:
        document.add_frame_from_file(pattern, options)

    # command line wins over the config file, which wins over the inputs
    animation = config['animation']
    loops = args.loops if args.loops is not None else animation.get('loops')
    skip_first = args.skip_first if args.skip_first is not None else animation.get('skip_first')
    if loops is not None:
        document.loops = int(loops)
    if skip_first is not None:
        document.skip_first = bool(skip_first)

    return document


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT
    )

    try:
        document = build_document(args)

        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        size = document.save_svg(output_path)
        if size == 0:
            logger.error(f"Nothing was written to {args.output}")
            return 1

        if args.split:
            split_dir = Path(args.split)
            split_dir.mkdir(parents=True, exist_ok=True)
            for i, frame in enumerate(document.frames):
                document.save_svg_frame(split_dir / f"{i}.svg", frame)
            logger.info(f"Wrote {len(document.frames)} frame(s) to {split_dir}")

    except KeyframeSVGError as e:
        logger.error(f"Conversion failed: {e}")
        return 1

    logger.info(f"Successfully wrote {len(document.frames)} frame(s) to {args.output} ({size} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
