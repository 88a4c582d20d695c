"""Shared fixtures: synthetic noise images and their tile sets."""

import os
import sys

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import PuzzleConfig  # noqa: E402
from core.splitting import split_image_to_tiles  # noqa: E402


def noise_image(config: PuzzleConfig, seed: int = 0) -> np.ndarray:
    """Random BGR image matching the config's canvas size."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(config.canvas_height, config.canvas_width, 3), dtype=np.uint8)


def tile_images(config: PuzzleConfig, seed: int = 0):
    """Source image plus {piece_id: tile} and {piece_id: (col, row)}."""
    source = noise_image(config, seed)
    tiles = split_image_to_tiles(source, config)
    images = {f"tile_{col}_{row}": tile for (col, row), tile in tiles.items()}
    truth = {f"tile_{col}_{row}": (col, row) for (col, row) in tiles}
    return source, images, truth


@pytest.fixture
def small_config():
    return PuzzleConfig(grid_size=4, canvas_width=80, canvas_height=60)


@pytest.fixture
def tiny_config():
    return PuzzleConfig(grid_size=2, canvas_width=40, canvas_height=30)
