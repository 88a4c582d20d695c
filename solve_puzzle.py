#!/usr/bin/env python
"""
Edge-Hash Puzzle Assembler

Usage:
    python solve_puzzle.py <pieces_dir> [--output <output_path>] [--grid <size>]

Examples:
    python solve_puzzle.py ./pieces
    python solve_puzzle.py ./pieces --output ./debug/result.png --placement-map ./debug/cells.png

Pipeline:
    1. Decode every tile, fingerprint its four borders
    2. Grow grid coordinates from the origin tile by matching fingerprints
    3. Composite the placed tiles and write the result
"""

import argparse
import logging
import sys

from core.config import PuzzleConfig
from core.image_utils import IngestionError
from pipeline import solve_directory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reassemble a grid image from shuffled tiles by edge fingerprints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Tile layout:
  Column 0 tiles are canvas_width/grid wide, row 0 tiles canvas_height/grid
  tall. Every other tile carries one extra overlap column/row shared with
  its left/top neighbour.
        """
    )
    parser.add_argument("pieces_dir", help="Directory with one image file per tile")
    parser.add_argument("--output", "-o", default="result.jpg", help="Output image path")
    parser.add_argument("--grid", "-g", type=int, default=16, help="Tiles per grid side")
    parser.add_argument("--width", type=int, default=3840, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, default=2160, help="Canvas height in pixels")
    parser.add_argument("--workers", "-w", type=int, help="Thread pool size")
    parser.add_argument("--expand-backward", action="store_true",
                        help="Also match through left and top borders")
    parser.add_argument("--placement-map", help="Save a coverage map of placed cells")
    parser.add_argument("--show", action="store_true", help="Display the result")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log warnings")
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log every placement")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        config = PuzzleConfig(
            grid_size=args.grid,
            canvas_width=args.width,
            canvas_height=args.height,
            max_workers=args.workers,
            expand_backward=args.expand_backward,
        )
        pieces, board, canvas = solve_directory(args.pieces_dir, args.output, config)
    except (IngestionError, ValueError) as e:
        logger.error("%s", e)
        return 1

    n_cells = config.grid_size * config.grid_size
    logger.info("Filled %d/%d cells, %d pieces unresolved",
                len(board), n_cells, len(pieces) - len(board))

    if args.placement_map:
        from visualization import save_placement_map
        save_placement_map(board, config, args.placement_map)
        logger.info("Saved placement map: %s", args.placement_map)

    if args.show:
        from visualization import display_result
        display_result(canvas)

    return 0


if __name__ == "__main__":
    sys.exit(main())
