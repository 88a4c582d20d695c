"""Visualization utilities for puzzle solving."""
from .display import (
    display_result,
    placement_matrix,
    save_placement_map
)
