"""
Puzzle solvers - edge fingerprint matching.

Usage:
    from pipeline import load_pieces
    from solvers import assemble_grid

    pieces = load_pieces("pieces", config)
    board = assemble_grid(pieces, config)  # (col, row) -> piece index
"""
from .edge_index import (
    build_edge_index,
    candidates,
    count_collisions,
    OPPOSITE
)
from .grid_assembler import assemble_grid, sort_pieces, grow_grid, OFFSETS
