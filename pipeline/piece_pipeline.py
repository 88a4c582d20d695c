"""
Piece Ingestion Pipeline

Reads every tile file of a directory, decodes it and wraps it in a Piece
with its edge fingerprints and anchor classification. Decoding runs on a
thread pool; the resulting order carries no meaning.

Any unreadable or undecodable file aborts the whole ingestion.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List

import numpy as np

from core.config import PuzzleConfig
from core.image_utils import IngestionError, load_image_bgr
from features.artifacts import Piece

logger = logging.getLogger(__name__)


def list_tile_files(directory) -> List[Path]:
    """Regular, non-hidden files of a directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise IngestionError(f"Pieces directory not found: {directory}")
    return sorted(
        path for path in directory.iterdir()
        if path.is_file() and not path.name.startswith('.')
    )


def load_piece(path, config: PuzzleConfig) -> Piece:
    """Decode one tile file into a Piece."""
    path = Path(path)
    piece = Piece.from_bgr(path.name, load_image_bgr(path), config)
    logger.debug("Loaded %s (%dx%d, col=%d, row=%d)",
                 piece.piece_id, piece.width, piece.height, piece.col, piece.row)
    return piece


def load_pieces(directory, config: PuzzleConfig) -> List[Piece]:
    """
    Load every tile of a directory.

    Args:
        directory: Directory holding one image file per tile
        config: Puzzle layout used for anchor classification and hashing

    Returns:
        List of pieces in unspecified order

    Raises:
        IngestionError: If the directory is missing or empty, or any file
            cannot be decoded
    """
    paths = list_tile_files(directory)
    if not paths:
        raise IngestionError(f"No tile files in {directory}")

    # map() re-raises the first failing decode when its result is consumed
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        pieces = list(executor.map(lambda path: load_piece(path, config), paths))

    anchors = sum(1 for piece in pieces if piece.is_anchor)
    logger.info("Loaded %d pieces from %s (%d anchors)", len(pieces), directory, anchors)
    return pieces


def pieces_from_images(images: Dict[str, np.ndarray], config: PuzzleConfig) -> List[Piece]:
    """
    Wrap in-memory tiles into pieces.

    Args:
        images: Dict[str, np.ndarray] - piece_id -> BGR tile

    Returns:
        List of pieces in the dict's order
    """
    return [Piece.from_bgr(piece_id, image, config) for piece_id, image in images.items()]
