"""Falling-block puzzle engine: board, pieces, rotation, gravity and line clears."""

from tetris_engine.board import Board, ClearResult, clear_full_rows, is_valid, merge
from tetris_engine.config import GameConfig
from tetris_engine.game import Game, GameState, GameStatus, Intent, StepResult
from tetris_engine.piece import Piece, rotate
from tetris_engine.rng import PieceGenerator
from tetris_engine.shapes import PIECE_KINDS, SHAPES, ShapeChoice, random_piece

__all__ = [
    "Board",
    "ClearResult",
    "clear_full_rows",
    "is_valid",
    "merge",
    "GameConfig",
    "Game",
    "GameState",
    "GameStatus",
    "Intent",
    "StepResult",
    "Piece",
    "rotate",
    "PieceGenerator",
    "PIECE_KINDS",
    "SHAPES",
    "ShapeChoice",
    "random_piece",
]
