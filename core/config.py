"""Puzzle layout and matching configuration."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PuzzleConfig:
    """
    Layout contract between the tile set and the assembler.

    The canvas is cut into a grid_size x grid_size grid. Tiles in column 0
    are first_col_width pixels wide, every other tile is one pixel wider
    because it repeats the last column of its left neighbour. Rows work
    the same way with heights.

    Attributes:
        grid_size: Tiles per side of the square grid
        canvas_width: Output width in pixels
        canvas_height: Output height in pixels
        quantization_step: Intensity divisor applied before hashing
        hash_seed: Constant mixed into every hashed pixel
        max_workers: Thread pool size (None lets the executor decide)
        expand_backward: Also grow the grid through left and top edges
    """
    grid_size: int = 16
    canvas_width: int = 3840
    canvas_height: int = 2160
    quantization_step: int = 10
    hash_seed: int = 0x9e379967
    max_workers: Optional[int] = None
    expand_backward: bool = False

    def __post_init__(self):
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.canvas_width < self.grid_size or self.canvas_height < self.grid_size:
            raise ValueError(
                f"Canvas {self.canvas_width}x{self.canvas_height} is smaller "
                f"than the {self.grid_size}x{self.grid_size} grid"
            )
        if self.canvas_width % self.grid_size or self.canvas_height % self.grid_size:
            raise ValueError(
                f"Canvas {self.canvas_width}x{self.canvas_height} is not divisible "
                f"by grid size {self.grid_size}"
            )
        if self.quantization_step < 1:
            raise ValueError(f"quantization_step must be >= 1, got {self.quantization_step}")
        if not 0 <= self.hash_seed < 2 ** 64:
            raise ValueError(f"hash_seed must fit in 64 bits, got {self.hash_seed:#x}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    @property
    def first_col_width(self) -> int:
        return self.canvas_width // self.grid_size

    @property
    def first_row_height(self) -> int:
        return self.canvas_height // self.grid_size

    @property
    def tile_width(self) -> int:
        """Width of tiles outside column 0 (one overlap column)."""
        return self.first_col_width + 1

    @property
    def tile_height(self) -> int:
        return self.first_row_height + 1

    @property
    def last_cell(self) -> Tuple[int, int]:
        return (self.grid_size - 1, self.grid_size - 1)

    def in_grid(self, col: int, row: int) -> bool:
        """True if (col, row) is a cell of the grid."""
        return 0 <= col < self.grid_size and 0 <= row < self.grid_size


# Data set contract: 16x16 tiles of a 3840x2160 image
DEFAULT_CONFIG = PuzzleConfig()
