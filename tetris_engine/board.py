"""Tetris board with collision probing and line clearing.

Boards are immutable: merge and clear operations return a new board and
leave the input untouched.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from tetris_engine.shapes import Shape

Grid = Tuple[Tuple[bool, ...], ...]


class ClearResult(NamedTuple):
    """Outcome of removing full rows."""

    board: "Board"
    cleared_count: int


class Board:
    """Fixed-size grid of occupied/empty cells (20x10 by default)."""

    ROWS = 20
    COLS = 10

    __slots__ = ("rows", "cols", "_grid")

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        grid: Optional[Iterable[Iterable[object]]] = None,
    ):
        """Initialize a board.

        Args:
            rows: Number of rows
            cols: Number of columns
            grid: Optional initial cells, row-major; truthy values are occupied

        Raises:
            ValueError: If grid does not match the given dimensions
        """
        self.rows = rows
        self.cols = cols
        if grid is None:
            empty_row = (False,) * cols
            self._grid: Grid = (empty_row,) * rows
            return

        cells = tuple(tuple(bool(cell) for cell in row) for row in grid)
        if len(cells) != rows:
            raise ValueError(f"Expected {rows} rows, got {len(cells)}")
        for y, row in enumerate(cells):
            if len(row) != cols:
                raise ValueError(f"Row {y}: expected {cols} cells, got {len(row)}")
        self._grid = cells

    @classmethod
    def empty(cls, rows: int = ROWS, cols: int = COLS) -> "Board":
        """Create an empty board."""
        return cls(rows, cols)

    @classmethod
    def from_rows(cls, grid: Sequence[Sequence[object]]) -> "Board":
        """Create a board whose dimensions are taken from the grid itself."""
        cols = len(grid[0]) if grid else 0
        return cls(len(grid), cols, grid)

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Board":
        """Create a board from text rows where '#' is occupied and '.' empty.

        Args:
            lines: One string per row, top to bottom

        Returns:
            New board
        """
        return cls.from_rows([[ch == "#" for ch in line] for line in lines])

    @property
    def grid(self) -> Grid:
        """Row-major cell values."""
        return self._grid

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> bool:
        """Get the cell at (row, col).

        Out of bounds cells read as occupied.
        """
        if not self.in_bounds(row, col):
            return True
        return self._grid[row][col]

    def is_row_full(self, row: int) -> bool:
        return all(self._grid[row])

    def occupied_count(self) -> int:
        return sum(sum(row) for row in self._grid)

    def is_valid(self, shape: Shape, row: int, col: int) -> bool:
        """Check whether a shape fits at (row, col).

        Only occupied shape cells are checked: each must land inside the
        board on an empty cell.

        Args:
            shape: Grid to place
            row: Board row of the grid's top edge
            col: Board column of the grid's left edge

        Returns:
            True if the placement is legal
        """
        for y, line in enumerate(shape):
            for x, cell in enumerate(line):
                if not cell:
                    continue
                r, c = row + y, col + x
                if not self.in_bounds(r, c) or self._grid[r][c]:
                    return False
        return True

    def merge(self, shape: Shape, row: int, col: int) -> "Board":
        """Return a new board with the shape's occupied cells filled in.

        Shape cells falling outside the board are skipped.

        Args:
            shape: Grid to merge
            row: Board row of the grid's top edge
            col: Board column of the grid's left edge

        Returns:
            New board
        """
        cells = [list(line) for line in self._grid]
        for y, line in enumerate(shape):
            for x, cell in enumerate(line):
                r, c = row + y, col + x
                if cell and self.in_bounds(r, c):
                    cells[r][c] = True
        return Board(self.rows, self.cols, cells)

    def clear_full_rows(self) -> ClearResult:
        """Remove all full rows and drop the remaining rows to the bottom.

        Returns:
            New board and number of rows removed
        """
        retained = [line for line in self._grid if not all(line)]
        cleared = self.rows - len(retained)
        if cleared == 0:
            return ClearResult(self, 0)
        empty_row = (False,) * self.cols
        return ClearResult(Board(self.rows, self.cols, [empty_row] * cleared + retained), cleared)

    def to_list(self) -> List[List[int]]:
        """Export board as nested 0/1 lists (for serialization)."""
        return [[int(cell) for cell in line] for line in self._grid]

    def flatten(self) -> List[int]:
        """Export board as a flat row-major list of 0/1 values."""
        return [int(cell) for line in self._grid for cell in line]

    def render_text(self, filled: str = "#", empty: str = ".") -> str:
        """Render the board as text, one line per row."""
        return "\n".join(
            "".join(filled if cell else empty for cell in line) for line in self._grid
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self) -> int:
        return hash(self._grid)

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols}, occupied={self.occupied_count()})"


def merge(shape: Shape, board: Board, row: int, col: int) -> Board:
    """Overlay a shape onto a board. See ``Board.merge``."""
    return board.merge(shape, row, col)


def is_valid(shape: Shape, board: Board, row: int, col: int) -> bool:
    """Check a placement against a board. See ``Board.is_valid``."""
    return board.is_valid(shape, row, col)


def clear_full_rows(board: Board) -> ClearResult:
    """Remove full rows from a board. See ``Board.clear_full_rows``."""
    return board.clear_full_rows()
