"""Edge fingerprints for tile borders."""

from typing import Dict

import numpy as np

from core.config import PuzzleConfig
from core.image_utils import to_grayscale

SIDES = ('left', 'top', 'right', 'bottom')

MASK_64 = (1 << 64) - 1


def extract_edge_strip(gray_image: np.ndarray, edge: str) -> np.ndarray:
    """
    Extract the 1-pixel border strip on one side of a grayscale tile.

    Columns are read top to bottom, rows left to right.
    """
    if edge == 'left':
        return gray_image[:, 0]
    elif edge == 'top':
        return gray_image[0, :]
    elif edge == 'right':
        return gray_image[:, -1]
    elif edge == 'bottom':
        return gray_image[-1, :]
    raise ValueError(f"Unknown edge: {edge}")


def compute_edge_hash(strip: np.ndarray, quantization_step: int = 10,
                      seed: int = 0x9e379967) -> int:
    """
    Fold a border strip into a 64-bit fingerprint.

    Each intensity is integer-divided by quantization_step so that
    near-identical borders on two neighbouring tiles hash the same.

    Args:
        strip: 1D array of grayscale intensities
        quantization_step: Intensity bucket size
        seed: Constant added with every pixel

    Returns:
        Unsigned 64-bit fingerprint
    """
    h = 0
    for value in (strip // quantization_step).tolist():
        h = (h + value + seed) & MASK_64
        h = (h + (h << 6)) & MASK_64
        h = (h + (h >> 2)) & MASK_64
    return h


def compute_edge_hashes(image: np.ndarray, config: PuzzleConfig) -> Dict[str, int]:
    """Fingerprint all four borders of a BGR or grayscale tile."""
    gray = to_grayscale(image).astype(np.int64)
    return {
        edge: compute_edge_hash(extract_edge_strip(gray, edge),
                                config.quantization_step, config.hash_seed)
        for edge in SIDES
    }
