"""Tetris game engine.

Orchestrates the board and the falling piece: validates moves, applies
gravity, locks landed pieces, clears full rows, spawns new pieces and detects
game over. Every transition replaces the game state instead of mutating it,
so snapshots handed to a renderer stay valid.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

from tetris_engine.board import Board
from tetris_engine.config import GameConfig
from tetris_engine.piece import Piece
from tetris_engine.rng import PieceGenerator
from tetris_engine.shapes import ShapeChoice

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Discrete player commands."""
    MOVE_LEFT = "MOVE_LEFT"
    MOVE_RIGHT = "MOVE_RIGHT"
    SOFT_DROP = "SOFT_DROP"
    ROTATE = "ROTATE"


# Intent -> (dy, dx, rotate)
INTENT_MOVES: Dict[Intent, Tuple[int, int, bool]] = {
    Intent.MOVE_LEFT: (0, -1, False),
    Intent.MOVE_RIGHT: (0, 1, False),
    Intent.SOFT_DROP: (1, 0, False),
    Intent.ROTATE: (0, 0, True),
}


class GameStatus(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class PieceSource(Protocol):
    """Anything that can hand out the next piece to spawn."""

    def next(self) -> ShapeChoice:
        ...


@dataclass(frozen=True)
class GameState:
    """Complete engine state. Never mutated; each transition builds a new one."""
    board: Board
    current: Piece
    game_over: bool = False

    @property
    def status(self) -> GameStatus:
        return GameStatus.GAME_OVER if self.game_over else GameStatus.RUNNING

    def display_board(self) -> Board:
        """Board as it should be painted.

        While running, the falling piece is merged in. Once the game is over
        no piece is active, so only the settled board is shown.
        """
        if self.game_over:
            return self.board
        return self.board.merge(self.current.shape, self.current.row, self.current.col)

    def render_text(self) -> str:
        """Render the display board as text."""
        return self.display_board().render_text()

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary for serialization."""
        return {
            "board": {
                "rows": self.board.rows,
                "cols": self.board.cols,
                "cells": self.board.to_list(),
            },
            "current": {
                "kind": self.current.kind,
                "shape": [list(line) for line in self.current.shape],
                "row": self.current.row,
                "col": self.current.col,
            },
            "game_over": self.game_over,
            "status": self.status.value,
            "display": self.display_board().flatten(),
        }


@dataclass
class StepResult:
    """Result of a move, intent or tick."""
    state: GameState
    done: bool
    info: Dict[str, Any] = field(default_factory=dict)

    @property
    def events(self) -> List[str]:
        return self.info.get("events", [])

    @property
    def piece_changed(self) -> bool:
        """True if the falling piece was moved, rotated or replaced."""
        return any(e in ("move", "rotate", "spawn") for e in self.events)


class Game:
    """Single-player Tetris engine."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        generator: Optional[PieceSource] = None,
    ):
        """Initialize and start a game.

        Args:
            config: Board geometry and spawn point (defaults if None)
            seed: Seed for the default piece generator
            generator: Piece source to use instead of a seeded PieceGenerator
        """
        self.config = config or GameConfig()
        self.generator = generator if generator is not None else PieceGenerator(seed)
        self.ticks = 0
        self.state = self._initial_state()

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current(self) -> Piece:
        return self.state.current

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def reset(self, seed: Optional[int] = None) -> GameState:
        """Start a new game.

        Args:
            seed: Reseeds the generator when given and the generator supports it

        Returns:
            Initial state
        """
        if seed is not None and hasattr(self.generator, "reset"):
            self.generator.reset(seed)
        self.ticks = 0
        self.state = self._initial_state()
        logger.info("Game reset: seed=%s, first piece=%s", seed, self.state.current.kind)
        return self.state

    def get_snapshot(self) -> GameState:
        """Current state (immutable, safe to keep)."""
        return self.state

    def handle_intent(self, intent: Union[Intent, str]) -> StepResult:
        """Apply a player intent.

        Args:
            intent: Intent member or its name ("MOVE_LEFT", ...)

        Returns:
            Step result

        Raises:
            ValueError: If the intent name is unknown
        """
        if not isinstance(intent, Intent):
            try:
                intent = Intent[intent]
            except (KeyError, TypeError):
                raise ValueError(f"Invalid intent: {intent}")

        dy, dx, rotate = INTENT_MOVES[intent]
        return self.move(dy, dx, rotate)

    def tick(self) -> StepResult:
        """Apply one gravity step (same as a soft drop)."""
        if not self.state.game_over:
            self.ticks += 1
        return self.move(1, 0)

    def move(self, dy: int, dx: int, rotate: bool = False) -> StepResult:
        """Try to move and/or rotate the falling piece.

        A blocked pure downward move locks the piece; any other blocked move
        is ignored.

        Args:
            dy: Row delta
            dx: Column delta
            rotate: Rotate clockwise before offsetting

        Returns:
            Step result
        """
        if self.state.game_over:
            return self._result(["ignored"])

        current = self.state.current
        candidate = current.rotate() if rotate else current
        candidate = candidate.move(dy, dx)

        if self.state.board.is_valid(candidate.shape, candidate.row, candidate.col):
            self.state = GameState(self.state.board, candidate)
            return self._result(["rotate" if rotate else "move"])

        if dy == 1 and dx == 0 and not rotate:
            return self._lock_and_clear()

        return self._result(["blocked"])

    def _lock_and_clear(self) -> StepResult:
        """Settle the falling piece, clear rows and spawn the next piece."""
        current = self.state.current
        merged = self.state.board.merge(current.shape, current.row, current.col)
        board, lines_cleared = merged.clear_full_rows()
        events = ["lock"]
        logger.debug("Locked %r", current)

        if lines_cleared > 0:
            events.append("clear")
            logger.debug("Cleared %d line(s)", lines_cleared)

        spawned = self._spawn()
        if not board.is_valid(spawned.shape, spawned.row, spawned.col):
            # No piece becomes active; the locked piece stays as the last current
            self.state = GameState(board, current, game_over=True)
            events.append("top_out")
            logger.info("Game over: %s blocked at spawn after %d ticks", spawned.kind, self.ticks)
        else:
            self.state = GameState(board, spawned)
            events.append("spawn")

        return self._result(events, lines_cleared)

    def _spawn(self) -> Piece:
        choice = self.generator.next()
        return Piece(choice.kind, choice.shape, self.config.spawn_row, self.config.spawn_col)

    def _initial_state(self) -> GameState:
        board = Board.empty(self.config.rows, self.config.cols)
        return GameState(board, self._spawn())

    def _result(self, events: List[str], lines_cleared: int = 0) -> StepResult:
        return StepResult(
            self.state,
            self.state.game_over,
            {"events": events, "lines_cleared": lines_cleared},
        )
