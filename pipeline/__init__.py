"""
Pipeline orchestration modules.

1. load_pieces() - decode tiles and fingerprint their edges
2. solve_pieces() - assemble the grid and composite the canvas
3. solve_directory() - both, plus writing the result
"""
from .piece_pipeline import (
    list_tile_files,
    load_piece,
    load_pieces,
    pieces_from_images
)
from .solver_pipeline import (
    composite_canvas,
    owned_region,
    solve_pieces,
    solve_directory
)
