"""Display utilities for puzzle visualization."""

from pathlib import Path
from typing import Optional

import cv2
import matplotlib.pyplot as plt
import numpy as np

from core.config import PuzzleConfig


def display_result(canvas: np.ndarray, title: str = "Assembled",
                   figsize: tuple = (12, 7)):
    """
    Show the assembled canvas.

    Args:
        canvas: BGR canvas
        title: Figure title
        figsize: Figure size
    """
    plt.figure(figsize=figsize)
    plt.imshow(cv2.cvtColor(canvas, cv2.COLOR_BGR2RGB))
    plt.title(title)
    plt.axis('off')
    plt.tight_layout()
    plt.show()


def placement_matrix(board: dict, config: PuzzleConfig) -> np.ndarray:
    """grid_size x grid_size array, 1 where a cell holds a piece."""
    matrix = np.zeros((config.grid_size, config.grid_size), dtype=np.uint8)
    for col, row in board:
        if config.in_grid(col, row):
            matrix[row, col] = 1
    return matrix


def save_placement_map(board: dict, config: PuzzleConfig, output_path: str,
                       title: Optional[str] = None, dpi: int = 100):
    """
    Save a coverage map of the grid: placed cells light, unresolved dark.

    Args:
        board: Dict mapping (col, row) -> piece index
        config: Puzzle layout
        output_path: Image file to write
        title: Optional title (defaults to the placed count)
        dpi: Output DPI
    """
    matrix = placement_matrix(board, config)
    n_cells = config.grid_size * config.grid_size

    fig, ax = plt.subplots(figsize=(6, 6 * config.canvas_height / config.canvas_width + 0.5))
    ax.imshow(matrix, cmap='gray', vmin=0, vmax=1, aspect='auto')

    ax.set_xticks(np.arange(-0.5, config.grid_size, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, config.grid_size, 1), minor=True)
    ax.grid(which='minor', color='tab:blue', linewidth=0.5)
    ax.tick_params(which='both', length=0, labelsize=6)

    if title is None:
        title = f"Placed {int(matrix.sum())}/{n_cells} cells"
    ax.set_title(title)

    output_dir = Path(output_path).parent
    if output_dir and str(output_dir) != '.':
        output_dir.mkdir(parents=True, exist_ok=True)

    fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
