"""Piece data model for puzzle tiles."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np

from core.config import PuzzleConfig
from .edges import SIDES, compute_edge_hashes

UNRESOLVED = -1


@dataclass(eq=False)
class Piece:
    """
    One tile of the unassembled puzzle.

    Attributes:
        piece_id: Label for diagnostics (usually the file name)
        image: Decoded BGR pixels
        col: Grid column, UNRESOLVED until placed
        row: Grid row, UNRESOLVED until placed
        edge_hashes: Border fingerprint per side, fixed at construction
    """
    piece_id: str
    image: np.ndarray
    col: int = UNRESOLVED
    row: int = UNRESOLVED
    edge_hashes: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_bgr(cls, piece_id: str, bgr_image: np.ndarray,
                 config: PuzzleConfig) -> 'Piece':
        """Create a piece, classifying anchors by the tile dimensions."""
        height, width = bgr_image.shape[:2]
        return cls(
            piece_id=piece_id,
            image=bgr_image,
            col=0 if width == config.first_col_width else UNRESOLVED,
            row=0 if height == config.first_row_height else UNRESOLVED,
            edge_hashes=compute_edge_hashes(bgr_image, config),
        )

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    @property
    def is_anchor(self) -> bool:
        return self.col == 0 or self.row == 0

    @property
    def is_origin(self) -> bool:
        return self.col == 0 and self.row == 0

    @property
    def is_unresolved(self) -> bool:
        """True while either coordinate is still unknown."""
        return self.col == UNRESOLVED or self.row == UNRESOLVED

    @property
    def is_placed(self) -> bool:
        return self.col >= 0 and self.row >= 0

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.col, self.row)

    def hash_key(self) -> Tuple[int, ...]:
        return tuple(self.edge_hashes[edge] for edge in SIDES)

    def rect(self, config: PuzzleConfig) -> Tuple[int, int, int, int]:
        """Absolute (x, y, width, height) of the tile on the canvas."""
        x = config.first_col_width * self.col - (1 if self.col > 0 else 0)
        y = config.first_row_height * self.row - (1 if self.row > 0 else 0)
        return x, y, self.width, self.height
