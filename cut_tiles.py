#!/usr/bin/env python
"""
Cut an image into a shuffled, anonymous tile set.

Usage:
    python cut_tiles.py <image_path> <output_dir> [--grid <size>] [--seed <n>]

The image must be exactly divisible by the grid. Tiles are written as PNG
under position-free names; their true cells are printed with --truth.
"""

import argparse
import logging
import sys

from core.config import PuzzleConfig
from core.image_utils import IngestionError, load_image_bgr
from core.splitting import split_image_to_tiles, write_tiles

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Cut an image into overlapping puzzle tiles")
    parser.add_argument("image_path", help="Source image")
    parser.add_argument("output_dir", help="Directory for the tile files")
    parser.add_argument("--grid", "-g", type=int, default=16, help="Tiles per grid side")
    parser.add_argument("--seed", type=int, help="Shuffle seed for file names")
    parser.add_argument("--truth", action="store_true", help="Print file name -> (col, row)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        image = load_image_bgr(args.image_path)
        height, width = image.shape[:2]
        config = PuzzleConfig(grid_size=args.grid, canvas_width=width, canvas_height=height)
        truth = write_tiles(split_image_to_tiles(image, config), args.output_dir, seed=args.seed)
    except (IngestionError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if args.truth:
        for name, (col, row) in sorted(truth.items()):
            print(f"{name}\t{col}\t{row}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
