"""Tests for frontier-growth grid assembly."""

import random

import numpy as np

from core.config import PuzzleConfig
from core.splitting import split_image_to_tiles
from features.artifacts import Piece, UNRESOLVED
from pipeline.piece_pipeline import pieces_from_images
from solvers.grid_assembler import assemble_grid, piece_sort_key, sort_pieces

from conftest import tile_images


def placements(pieces):
    return {piece.piece_id: piece.cell for piece in pieces if piece.is_placed}


def test_recovers_true_layout(small_config):
    _, images, truth = tile_images(small_config, seed=1)
    pieces = pieces_from_images(images, small_config)

    board = assemble_grid(pieces, small_config)

    assert len(board) == 16
    assert placements(pieces) == truth
    for cell, idx in board.items():
        assert pieces[idx].cell == cell


def test_adjacent_tiles_one_unit_apart(small_config):
    _, images, _ = tile_images(small_config, seed=2)
    pieces = pieces_from_images(images, small_config)
    assemble_grid(pieces, small_config)

    by_left = {p.edge_hashes['left']: p for p in pieces}
    by_top = {p.edge_hashes['top']: p for p in pieces}
    for piece in pieces:
        right = by_left.get(piece.edge_hashes['right'])
        if right is not None and right is not piece:
            assert (right.col - piece.col, right.row - piece.row) == (1, 0)
        below = by_top.get(piece.edge_hashes['bottom'])
        if below is not None and below is not piece:
            assert (below.col - piece.col, below.row - piece.row) == (0, 1)


def test_origin_sorted_first_and_at_pixel_zero(small_config):
    _, images, _ = tile_images(small_config, seed=3)
    pieces = pieces_from_images(images, small_config)
    random.Random(0).shuffle(pieces)

    board = assemble_grid(pieces, small_config)

    assert pieces[0].is_origin
    assert board[(0, 0)] == 0
    assert pieces[0].rect(small_config)[:2] == (0, 0)


def test_sort_order_anchors_then_rest(small_config):
    _, images, _ = tile_images(small_config, seed=4)
    pieces = pieces_from_images(images, small_config)
    random.Random(1).shuffle(pieces)

    sort_pieces(pieces)

    n_anchors = 2 * small_config.grid_size - 1
    assert pieces[0].is_origin
    assert all(p.is_anchor for p in pieces[:n_anchors])
    assert not any(p.is_anchor for p in pieces[n_anchors:])
    assert [p.piece_id for p in pieces] == [p.piece_id for p in sorted(pieces, key=piece_sort_key)]


def test_shuffled_ingestion_is_deterministic(tiny_config):
    _, images, truth = tile_images(tiny_config, seed=5)
    names = list(images)

    results = []
    for run in range(10):
        random.Random(run).shuffle(names)
        pieces = pieces_from_images({name: images[name] for name in names}, tiny_config)
        assemble_grid(pieces, tiny_config)
        results.append(placements(pieces))

    assert all(result == truth for result in results)


def test_no_duplicate_cells_under_collisions():
    # A flat image makes every edge of equal length collide
    config = PuzzleConfig(grid_size=3, canvas_width=60, canvas_height=45)
    flat = np.full((45, 60, 3), 128, dtype=np.uint8)
    tiles = split_image_to_tiles(flat, config)
    pieces = pieces_from_images({f"p{i}": t for i, t in enumerate(tiles.values())}, config)

    board = assemble_grid(pieces, config)

    cells = [p.cell for p in pieces if p.is_placed]
    assert len(cells) == len(set(cells))
    assert len(board) == 9
    for piece in pieces:
        # Anchors keep their known coordinate
        if piece.width == config.first_col_width:
            assert piece.col == 0
        if piece.height == config.first_row_height:
            assert piece.row == 0


def test_missing_column_anchor_leaves_column_below_unresolved():
    config = PuzzleConfig(grid_size=6, canvas_width=120, canvas_height=90)
    _, images, truth = tile_images(config, seed=6)
    del images["tile_0_3"]
    pieces = pieces_from_images(images, config)

    assemble_grid(pieces, config)

    result = placements(pieces)
    stranded = {"tile_0_4", "tile_0_5"}
    for name in stranded:
        assert name not in result
    for name, cell in truth.items():
        if name not in stranded and name != "tile_0_3":
            assert result[name] == cell


def test_expand_backward_reaches_stranded_anchors():
    config = PuzzleConfig(grid_size=6, canvas_width=120, canvas_height=90, expand_backward=True)
    _, images, truth = tile_images(config, seed=6)
    del images["tile_0_3"]
    del truth["tile_0_3"]
    pieces = pieces_from_images(images, config)

    assemble_grid(pieces, config)

    assert placements(pieces) == truth


def test_without_origin_nothing_is_placed(small_config):
    _, images, _ = tile_images(small_config, seed=7)
    del images["tile_0_0"]
    pieces = pieces_from_images(images, small_config)

    board = assemble_grid(pieces, small_config)

    assert board == {}
    assert not any(p.is_placed for p in pieces)


def test_unmatched_tile_stays_unresolved(small_config):
    _, images, truth = tile_images(small_config, seed=8)
    stranger = np.random.default_rng(99).integers(
        0, 256, size=(small_config.tile_height, small_config.tile_width, 3), dtype=np.uint8)
    images["stranger"] = stranger
    pieces = pieces_from_images(images, small_config)

    board = assemble_grid(pieces, small_config)

    assert len(board) == 16
    odd = next(p for p in pieces if p.piece_id == "stranger")
    assert (odd.col, odd.row) == (UNRESOLVED, UNRESOLVED)
    assert placements(pieces) == truth


def test_piece_state_helpers():
    image = np.zeros((15, 20, 3), dtype=np.uint8)
    piece = Piece("p", image, col=0)
    assert piece.is_anchor and not piece.is_origin
    assert piece.is_unresolved and not piece.is_placed
    piece.row = 2
    assert piece.is_placed and piece.cell == (0, 2)
