"""
Edge fingerprint index.

For every side, maps a fingerprint to the indices of the pieces exposing
that fingerprint on that side, in piece order. Equal fingerprints are not
deduplicated; the assembler decides between colliding candidates.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from features.artifacts import Piece
from features.edges import SIDES

EdgeIndex = Dict[str, Dict[int, List[int]]]

OPPOSITE = {
    'left': 'right',
    'top': 'bottom',
    'right': 'left',
    'bottom': 'top',
}


def build_edge_index(pieces: Sequence[Piece]) -> EdgeIndex:
    """
    Index all pieces by edge fingerprint.

    Args:
        pieces: Pieces in their final (sorted) order

    Returns:
        index where index[side][fingerprint] = [piece index, ...]
    """
    index = {edge: defaultdict(list) for edge in SIDES}

    for idx, piece in enumerate(pieces):
        for edge in SIDES:
            index[edge][piece.edge_hashes[edge]].append(idx)

    return {edge: dict(table) for edge, table in index.items()}


def candidates(index: EdgeIndex, edge: str, fingerprint: int) -> List[int]:
    """Pieces whose `edge` border has this fingerprint, in insertion order."""
    return index[edge].get(fingerprint, [])


def count_collisions(index: EdgeIndex) -> int:
    """Number of (side, fingerprint) buckets shared by more than one piece."""
    return sum(
        1 for table in index.values()
        for ids in table.values()
        if len(ids) > 1
    )
