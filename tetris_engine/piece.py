"""Falling piece model and rotation.

A piece carries its current rotation grid directly; there is no rotation
index. Coordinates are (row, col) with row 0 at the top of the board.
"""

from dataclasses import dataclass, replace
from typing import List, Tuple

from tetris_engine.shapes import SHAPES, Shape, get_shape

SPAWN_ROW = 0
SPAWN_COL = 3


def rotate(shape: Shape) -> Shape:
    """Rotate a shape grid 90 degrees clockwise.

    out[i][j] = shape[rows - 1 - j][i], so an R x C grid becomes C x R.
    No bounds checking happens here; the caller validates the placement.

    Args:
        shape: Grid to rotate

    Returns:
        New rotated grid
    """
    if not shape:
        return shape
    rows = len(shape)
    cols = len(shape[0])
    return tuple(
        tuple(shape[rows - 1 - j][i] for j in range(rows)) for i in range(cols)
    )


@dataclass(frozen=True)
class Piece:
    """The currently falling piece: kind tag, grid and board offset."""

    kind: str
    shape: Shape
    row: int = SPAWN_ROW
    col: int = SPAWN_COL

    def __post_init__(self):
        if self.kind not in SHAPES:
            raise ValueError(f"Invalid piece kind: {self.kind}")
        object.__setattr__(
            self, "shape", tuple(tuple(int(bool(c)) for c in r) for r in self.shape)
        )

    @classmethod
    def spawn(cls, kind: str, row: int = SPAWN_ROW, col: int = SPAWN_COL) -> "Piece":
        """Create a piece in its canonical orientation.

        Args:
            kind: One of "I", "O", "T", "L", "J", "S", "Z"
            row: Board row of the grid's top edge
            col: Board column of the grid's left edge

        Returns:
            New unrotated piece
        """
        return cls(kind, get_shape(kind), row, col)

    @property
    def height(self) -> int:
        return len(self.shape)

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    def get_cells(self) -> List[Tuple[int, int]]:
        """Get absolute board coordinates of the occupied cells.

        Returns:
            List of (row, col) tuples
        """
        return [
            (self.row + y, self.col + x)
            for y, line in enumerate(self.shape)
            for x, cell in enumerate(line)
            if cell
        ]

    def move(self, dy: int, dx: int) -> "Piece":
        """Return a new piece offset by (dy, dx)."""
        return replace(self, row=self.row + dy, col=self.col + dx)

    def rotate(self) -> "Piece":
        """Return a new piece with the grid rotated clockwise in place."""
        return replace(self, shape=rotate(self.shape))

    def __repr__(self) -> str:
        return f"Piece({self.kind}, row={self.row}, col={self.col}, size={self.height}x{self.width})"
