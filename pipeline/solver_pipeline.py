"""
Solver Pipeline

Orchestrates the full run:
1. Load tiles -> pieces with edge fingerprints
2. Assemble grid coordinates from the anchors
3. Composite placed pieces onto the canvas
4. Encode and write the canvas

Compositing runs on a thread pool. Each task owns the canvas slice of its
grid cell: a tile skips its leading overlap column/row only when the left/top
neighbour is placed and covers it, so no two tasks write the same pixel.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import AbstractSet, List, Optional, Tuple

import numpy as np

from core.config import PuzzleConfig, DEFAULT_CONFIG
from core.image_utils import save_image
from features.artifacts import Piece
from solvers.grid_assembler import Board, assemble_grid
from .piece_pipeline import load_pieces

logger = logging.getLogger(__name__)


def owned_region(piece: Piece, config: PuzzleConfig,
                 placed_cells: AbstractSet[Tuple[int, int]] = frozenset()
                 ) -> Tuple[Tuple[slice, slice], Tuple[slice, slice]]:
    """
    Canvas slice owned by a placed piece and the matching tile slice.

    The leading overlap column (row) is left to the neighbour on the left
    (above) when that cell is in placed_cells; otherwise the piece writes
    its whole rectangle.

    Returns:
        (canvas_rows, canvas_cols), (tile_rows, tile_cols)
    """
    x, y, width, height = piece.rect(config)
    skip_x = 1 if piece.col > 0 and (piece.col - 1, piece.row) in placed_cells else 0
    skip_y = 1 if piece.row > 0 and (piece.col, piece.row - 1) in placed_cells else 0

    x_end = min(x + width, config.first_col_width * (piece.col + 1))
    y_end = min(y + height, config.first_row_height * (piece.row + 1))

    dest = (slice(y + skip_y, y_end), slice(x + skip_x, x_end))
    src = (slice(skip_y, y_end - y), slice(skip_x, x_end - x))
    return dest, src


def composite_canvas(pieces: List[Piece], config: PuzzleConfig) -> np.ndarray:
    """
    Blit every placed piece onto a blank canvas.

    Pieces outside the grid or still unresolved are skipped and their
    region stays black.

    Args:
        pieces: Assembled pieces
        config: Puzzle layout

    Returns:
        BGR canvas of canvas_height x canvas_width
    """
    canvas = np.zeros((config.canvas_height, config.canvas_width, 3), dtype=np.uint8)
    placed = [piece for piece in pieces if config.in_grid(piece.col, piece.row)]
    placed_cells = frozenset(piece.cell for piece in placed)

    def blit(piece: Piece):
        dest, src = owned_region(piece, config, placed_cells)
        canvas[dest] = piece.image[src]

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        # list() surfaces exceptions raised in workers
        list(executor.map(blit, placed))

    logger.info("Composited %d pieces, skipped %d", len(placed), len(pieces) - len(placed))
    return canvas


def solve_pieces(pieces: List[Piece], config: PuzzleConfig) -> Tuple[Board, np.ndarray]:
    """Assemble already-loaded pieces and composite the result."""
    start = time.perf_counter()
    board = assemble_grid(pieces, config)
    logger.info("Assemble puzzle time: %.0fms", (time.perf_counter() - start) * 1000)

    start = time.perf_counter()
    canvas = composite_canvas(pieces, config)
    logger.info("Image creation time: %.0fms", (time.perf_counter() - start) * 1000)

    return board, canvas


def solve_directory(pieces_dir, output_path: Optional[str] = None,
                    config: PuzzleConfig = DEFAULT_CONFIG) -> Tuple[List[Piece], Board, np.ndarray]:
    """
    Complete pipeline: load -> assemble -> composite -> write.

    Nothing is written if ingestion fails.

    Args:
        pieces_dir: Directory of tile files
        output_path: Optional path to save the canvas (format by extension)
        config: Puzzle layout

    Returns:
        pieces: Sorted pieces with their final coordinates
        board: Dict mapping (col, row) -> index into pieces
        canvas: Reconstructed image
    """
    total = time.perf_counter()

    start = time.perf_counter()
    pieces = load_pieces(pieces_dir, config)
    logger.info("Load puzzle time: %.0fms", (time.perf_counter() - start) * 1000)

    board, canvas = solve_pieces(pieces, config)

    if output_path:
        start = time.perf_counter()
        save_image(canvas, output_path)
        logger.info("Image write time: %.0fms", (time.perf_counter() - start) * 1000)
        logger.info("Saved: %s", output_path)

    logger.info("Total time: %.0fms", (time.perf_counter() - total) * 1000)
    return pieces, board, canvas
