"""Cutting an image into the overlapping tile layout."""

import logging
import random
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

from .config import PuzzleConfig
from .image_utils import save_image

logger = logging.getLogger(__name__)


def cell_origin(col: int, row: int, config: PuzzleConfig) -> Tuple[int, int]:
    """Top-left pixel of tile (col, row), including its overlap border."""
    x = config.first_col_width * col - (1 if col > 0 else 0)
    y = config.first_row_height * row - (1 if row > 0 else 0)
    return x, y


def split_image_to_tiles(image_data: np.ndarray,
                         config: PuzzleConfig) -> Dict[Tuple[int, int], np.ndarray]:
    """
    Split image into grid_size x grid_size overlapping tiles.

    Tiles outside column 0 repeat the last pixel column of their left
    neighbour, tiles outside row 0 the last pixel row of the tile above.

    Args:
        image_data: Input image of exactly canvas_height x canvas_width
        config: Puzzle layout

    Returns:
        Dict mapping (col, row) to a tile copy
    """
    height, width = image_data.shape[:2]
    if (width, height) != (config.canvas_width, config.canvas_height):
        raise ValueError(
            f"Image is {width}x{height}, expected "
            f"{config.canvas_width}x{config.canvas_height}"
        )

    tiles = {}
    for row in range(config.grid_size):
        for col in range(config.grid_size):
            x_start, y_start = cell_origin(col, row, config)
            x_end = config.first_col_width * (col + 1)
            y_end = config.first_row_height * (row + 1)
            tiles[(col, row)] = image_data[y_start:y_end, x_start:x_end].copy()

    return tiles


def write_tiles(tiles: Dict[Tuple[int, int], np.ndarray], output_dir,
                seed: Optional[int] = None, ext: str = ".png") -> Dict[str, Tuple[int, int]]:
    """
    Write tiles under shuffled, position-free file names.

    Returns:
        Dict mapping written file name to the tile's true (col, row)
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    cells = list(tiles.keys())
    random.Random(seed).shuffle(cells)

    truth = {}
    for idx, cell in enumerate(cells):
        name = f"piece_{idx:04d}{ext}"
        save_image(tiles[cell], output_dir / name)
        truth[name] = cell

    logger.info("Wrote %d tiles to %s", len(truth), output_dir)
    return truth
