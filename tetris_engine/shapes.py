"""Tetromino shape catalog.

Each piece kind has a single canonical (spawn) grid. Grids are row-major
tuples of 0/1 values; other rotation states are computed on demand by
``tetris_engine.piece.rotate``.
"""

import random
from typing import Dict, NamedTuple, Optional, Tuple

# One rotation state: rows of 0/1 occupancy values
Shape = Tuple[Tuple[int, ...], ...]

PIECE_KINDS: Tuple[str, ...] = ("I", "O", "T", "L", "J", "S", "Z")

SHAPES: Dict[str, Shape] = {
    "I": ((1, 1, 1, 1),),
    "O": (
        (1, 1),
        (1, 1),
    ),
    "T": (
        (0, 1, 0),
        (1, 1, 1),
    ),
    "L": (
        (1, 0, 0),
        (1, 1, 1),
    ),
    "J": (
        (0, 0, 1),
        (1, 1, 1),
    ),
    "S": (
        (0, 1, 1),
        (1, 1, 0),
    ),
    "Z": (
        (1, 1, 0),
        (0, 1, 1),
    ),
}


class ShapeChoice(NamedTuple):
    """A drawn piece kind paired with its canonical grid."""

    kind: str
    shape: Shape


def get_shape(kind: str) -> Shape:
    """Get the canonical grid for a piece kind.

    Args:
        kind: One of "I", "O", "T", "L", "J", "S", "Z"

    Returns:
        Unrotated shape grid

    Raises:
        ValueError: If the kind is unknown
    """
    if kind not in SHAPES:
        raise ValueError(f"Invalid piece kind: {kind}")
    return SHAPES[kind]


def cell_count(shape: Shape) -> int:
    """Count occupied cells of a shape."""
    return sum(1 for row in shape for cell in row if cell)


def random_piece(rng: Optional[random.Random] = None) -> ShapeChoice:
    """Draw a piece kind uniformly at random.

    Args:
        rng: Random source to draw from (module-level default if None)

    Returns:
        The drawn kind and its canonical grid
    """
    kind = (rng or random).choice(PIECE_KINDS)
    return ShapeChoice(kind, SHAPES[kind])
