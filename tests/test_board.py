"""Tests for board functionality."""

import pytest

from tetris_engine.board import Board, clear_full_rows, is_valid, merge
from tetris_engine.shapes import SHAPES


def test_board_initialization():
    """Test board starts empty."""
    board = Board()
    assert (board.rows, board.cols) == (20, 10)
    assert board.occupied_count() == 0, "Board should start empty"
    assert all(len(row) == 10 for row in board.grid)


def test_board_dimension_mismatch():
    with pytest.raises(ValueError):
        Board(2, 3, [[0, 0, 0], [0, 0]])
    with pytest.raises(ValueError):
        Board(3, 3, [[0, 0, 0]])


def test_out_of_bounds_reads_occupied():
    board = Board()
    assert board.get(-1, 0)
    assert board.get(0, 10)
    assert not board.get(0, 0)


def test_is_valid_inside_empty_board():
    board = Board()
    assert is_valid(SHAPES["T"], board, 18, 4)
    assert is_valid(SHAPES["I"], board, 0, 6)


def test_is_valid_out_of_bounds():
    """Test placements leaving the board are invalid, never raising."""
    board = Board()
    assert not is_valid(SHAPES["T"], board, 10, -1), "Left edge"
    assert not is_valid(SHAPES["I"], board, 0, 7), "Right edge"
    assert not is_valid(SHAPES["O"], board, 19, 0), "Below bottom"
    assert not is_valid(SHAPES["O"], board, -1, 0), "Above top"
    assert not is_valid(SHAPES["O"], board, 500, 500)


def test_is_valid_ignores_empty_shape_cells():
    """Empty cells of a shape may hang outside the board or over blocks."""
    board = Board.from_strings([
        "#..",
        "...",
        "...",
    ])
    # T's empty top-left cell sits on the occupied cell
    assert is_valid(SHAPES["T"], board, 0, 0)
    # Empty left column hangs off the left edge
    assert is_valid(((0, 1), (0, 1)), board, 1, -1)
    # An occupied cell off the edge still invalidates
    assert not is_valid(((1, 1), (0, 1)), board, 1, -1)


def test_is_valid_detects_collision():
    board = Board().merge(SHAPES["O"], 18, 4)
    assert not is_valid(SHAPES["I"], board, 18, 2)
    assert is_valid(SHAPES["I"], board, 17, 2)


def test_merge_sets_only_shape_cells():
    board = Board()
    merged = merge(SHAPES["S"], board, 5, 2)

    assert merged is not board
    assert board.occupied_count() == 0, "Input board must be untouched"
    for r in range(board.rows):
        for c in range(board.cols):
            expected = (r, c) in {(5, 3), (5, 4), (6, 2), (6, 3)}
            assert merged.get(r, c) == expected, f"Cell ({r}, {c})"


def test_merge_keeps_existing_cells():
    board = Board.from_strings(["#...", "...#"])
    merged = board.merge(((1, 1),), 0, 1)
    assert merged == Board.from_strings(["###.", "...#"])


def test_merge_ignores_out_of_range_cells():
    board = Board()
    merged = board.merge(SHAPES["I"], 19, 8)
    assert merged.occupied_count() == 2
    assert merged.get(19, 8) and merged.get(19, 9)
    assert board.merge(SHAPES["O"], -5, -5) == board


def test_line_clearing():
    """Test clearing a complete line."""
    board = Board.from_strings([
        "....",
        "#...",
        "####",
    ])

    board, cleared = clear_full_rows(board)
    assert cleared == 1, "Should clear one line"
    assert board == Board.from_strings([
        "....",
        "....",
        "#...",
    ])


def test_multiple_line_clearing():
    """Test clearing non-adjacent full rows."""
    board = Board.from_strings([
        "..#.",
        "####",
        "#.#.",
        "####",
        "####",
    ])

    result = board.clear_full_rows()
    assert result.cleared_count == 3
    assert result.board.rows == 5
    assert result.board == Board.from_strings([
        "....",
        "....",
        "....",
        "..#.",
        "#.#.",
    ])


def test_clear_without_full_rows():
    board = Board().merge(SHAPES["T"], 18, 0)
    result = board.clear_full_rows()
    assert result.cleared_count == 0
    assert result.board == board


def test_clear_full_board():
    board = Board(3, 2, [[1, 1]] * 3)
    result = board.clear_full_rows()
    assert result.cleared_count == 3
    assert result.board == Board(3, 2)


def test_board_export():
    board = Board.from_strings(["#.", ".#"])
    assert board.to_list() == [[1, 0], [0, 1]]
    assert board.flatten() == [1, 0, 0, 1]
    assert board.render_text() == "#.\n.#"
