"""
Grid assembly by frontier growth.

Algorithm:
- Sort pieces so the origin anchor comes first, then the other anchors,
  then everything else
- Index pieces by edge fingerprint
- Depth-first growth from the origin: for each placed piece, look up the
  piece whose left border matches its right border (and whose top border
  matches its bottom border) and place it one cell further
- First unresolved candidate in index order wins, no backtracking
"""

import logging
from typing import Dict, List, Tuple

from core.config import PuzzleConfig
from features.artifacts import Piece, UNRESOLVED
from .edge_index import EdgeIndex, OPPOSITE, build_edge_index, candidates, count_collisions

logger = logging.getLogger(__name__)

Board = Dict[Tuple[int, int], int]

OFFSETS = {
    'left': (-1, 0),
    'top': (0, -1),
    'right': (1, 0),
    'bottom': (0, 1),
}

FORWARD_EDGES = ('right', 'bottom')
BACKWARD_EDGES = ('left', 'top')


def piece_sort_key(piece: Piece) -> tuple:
    """
    Anchors first, the origin ahead of every other anchor, then ascending
    col + row. Fingerprints break the remaining ties so the order never
    depends on ingestion order.
    """
    return (
        0 if piece.is_anchor else 1,
        0 if piece.is_origin else 1,
        piece.col + piece.row,
        piece.hash_key(),
    )


def sort_pieces(pieces: List[Piece]) -> None:
    """Sort pieces in place into traversal order."""
    pieces.sort(key=piece_sort_key)


def _accepts(piece: Piece, col: int, row: int) -> bool:
    if not piece.is_unresolved:
        return False
    # An anchor keeps its known coordinate
    if piece.col not in (UNRESOLVED, col):
        return False
    return piece.row in (UNRESOLVED, row)


def find_neighbor(pieces: List[Piece], index: EdgeIndex, current: int,
                  edge: str, col: int, row: int) -> int:
    """
    Find the piece to place against `edge` of pieces[current].

    Args:
        pieces: Piece arena
        index: Edge index built over the arena
        current: Index of the placed piece being expanded
        edge: Side of the current piece to match
        col, row: Target cell for the neighbour

    Returns:
        Arena index of the neighbour, or -1 if none qualifies
    """
    fingerprint = pieces[current].edge_hashes[edge]
    for idx in candidates(index, OPPOSITE[edge], fingerprint):
        if idx != current and _accepts(pieces[idx], col, row):
            return idx
    return -1


def grow_grid(pieces: List[Piece], index: EdgeIndex, config: PuzzleConfig) -> Board:
    """
    Place pieces outward from pieces[0], which must be the origin.

    Mutates col/row of every piece it reaches.

    Returns:
        board: Dict mapping (col, row) -> arena index
    """
    board = {(0, 0): 0}
    stack = [0]

    edges = FORWARD_EDGES + (BACKWARD_EDGES if config.expand_backward else ())

    while stack:
        current = stack.pop()
        col, row = pieces[current].cell

        for edge in edges:
            # The last cell has nothing to its right or below
            if edge in FORWARD_EDGES and (col, row) == config.last_cell:
                continue

            d_col, d_row = OFFSETS[edge]
            target = (col + d_col, row + d_row)
            if not config.in_grid(*target) or target in board:
                continue

            match = find_neighbor(pieces, index, current, edge, *target)
            if match < 0:
                continue

            pieces[match].col, pieces[match].row = target
            board[target] = match
            stack.append(match)
            logger.debug("Placed %s at %s via %s edge of %s",
                         pieces[match].piece_id, target, edge, pieces[current].piece_id)

    return board


def assemble_grid(pieces: List[Piece], config: PuzzleConfig) -> Board:
    """
    Assign grid coordinates to every reachable piece.

    Sorts `pieces` in place, then grows the grid from the origin anchor.
    Pieces never reached stay unresolved and are left out of the board.

    Args:
        pieces: All ingested pieces (mutated)
        config: Puzzle layout

    Returns:
        board: Dict mapping (col, row) -> index into the sorted pieces
    """
    sort_pieces(pieces)

    if not pieces or not pieces[0].is_origin:
        logger.warning("No origin tile (%dx%d) among %d pieces; nothing placed",
                       config.first_col_width, config.first_row_height, len(pieces))
        return {}

    index = build_edge_index(pieces)
    collisions = count_collisions(index)
    if collisions:
        logger.info("%d edge fingerprints are shared by several pieces", collisions)

    board = grow_grid(pieces, index, config)

    unresolved = len(pieces) - len(board)
    logger.info("Placed %d of %d pieces (%d unresolved)", len(board), len(pieces), unresolved)
    return board
