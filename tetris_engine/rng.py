"""Seedable piece generator.

Pieces are drawn uniformly at random from the seven kinds. The generator is
injected into the game so tests and replays can control the sequence.
"""

import random
from typing import Optional

from tetris_engine.shapes import ShapeChoice, random_piece


class PieceGenerator:
    """Deterministic uniform piece generator."""

    def __init__(self, seed: Optional[int] = None):
        """Initialize with an optional seed.

        Args:
            seed: Random seed for reproducibility (system entropy if None)
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def next(self) -> ShapeChoice:
        """Draw the next piece.

        Returns:
            Kind and canonical grid of the drawn piece
        """
        return random_piece(self.rng)

    def reset(self, seed: Optional[int] = None) -> None:
        """Restart the sequence with a new seed.

        Args:
            seed: New random seed
        """
        self.seed = seed
        self.rng = random.Random(seed)
