"""Tests for piece functionality."""

import pytest

from tetris_engine.piece import Piece, SPAWN_COL, SPAWN_ROW, rotate
from tetris_engine.shapes import PIECE_KINDS, SHAPES, cell_count


def test_piece_creation():
    """Test creating a piece."""
    piece = Piece.spawn("T", row=4, col=2)
    assert piece.kind == "T"
    assert piece.shape == SHAPES["T"]
    assert piece.row == 4
    assert piece.col == 2


def test_piece_default_spawn_position():
    piece = Piece.spawn("L")
    assert (piece.row, piece.col) == (SPAWN_ROW, SPAWN_COL) == (0, 3)


def test_invalid_piece_kind():
    with pytest.raises(ValueError):
        Piece("X", ((1,),))


def test_piece_get_cells():
    """Test getting absolute cell coordinates."""
    piece = Piece.spawn("T", row=10, col=4)
    assert sorted(piece.get_cells()) == [(10, 5), (11, 4), (11, 5), (11, 6)]


def test_piece_move_returns_new_piece():
    """Test piece movement leaves the original untouched."""
    piece = Piece.spawn("I", row=3, col=3)

    moved = piece.move(1, -1)
    assert (moved.row, moved.col) == (4, 2)
    assert (piece.row, piece.col) == (3, 3)
    assert moved.shape == piece.shape


def test_piece_is_frozen():
    piece = Piece.spawn("O")
    with pytest.raises(AttributeError):
        piece.row = 5


def test_rotate_t_clockwise():
    """T pointing up turns to point right."""
    assert rotate(SHAPES["T"]) == ((1, 0), (1, 1), (1, 0))


def test_rotate_matches_index_formula():
    shape = SHAPES["L"]
    rotated = rotate(shape)
    rows = len(shape)
    for i, line in enumerate(rotated):
        for j, cell in enumerate(line):
            assert cell == shape[rows - 1 - j][i]


@pytest.mark.parametrize("kind", PIECE_KINDS)
def test_rotate_swaps_dimensions_and_keeps_cells(kind):
    shape = SHAPES[kind]
    rotated = rotate(shape)
    assert len(rotated) == len(shape[0])
    assert len(rotated[0]) == len(shape)
    assert cell_count(rotated) == cell_count(shape)


@pytest.mark.parametrize("kind", ["T", "L", "J", "S", "Z"])
def test_four_rotations_return_to_original(kind):
    shape = SHAPES[kind]
    result = shape
    for _ in range(4):
        result = rotate(result)
    assert result == shape


def test_o_piece_is_rotation_fixed_point():
    assert rotate(SHAPES["O"]) == SHAPES["O"]


def test_i_piece_alternates():
    vertical = rotate(SHAPES["I"])
    assert vertical == ((1,), (1,), (1,), (1,))
    assert rotate(vertical) == SHAPES["I"]


def test_rotate_empty_shape():
    assert rotate(()) == ()


def test_piece_rotate_keeps_position():
    piece = Piece.spawn("S", row=5, col=6)
    rotated = piece.rotate()
    assert (rotated.row, rotated.col) == (5, 6)
    assert rotated.shape == rotate(SHAPES["S"])
    assert (rotated.height, rotated.width) == (3, 2)
    assert piece.shape == SHAPES["S"]
