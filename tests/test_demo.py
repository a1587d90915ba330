"""Tests for the headless demo script."""

import demo_game
from tetris_engine.game import Game
from tetris_engine.shapes import SHAPES, ShapeChoice


class AlternatingGenerator:
    """Deals I, O, I, O, ..."""

    def __init__(self):
        self.count = 0

    def next(self):
        kind = "IO"[self.count % 2]
        self.count += 1
        return ShapeChoice(kind, SHAPES[kind])


def test_lock_label_names_the_locked_piece(monkeypatch, capsys):
    """The first piece to lock is the I, not the O spawned after it."""
    monkeypatch.setattr(demo_game, "Game", lambda seed: Game(generator=AlternatingGenerator()))
    monkeypatch.setattr("sys.argv", ["demo_game.py", "42", "2000"])

    demo_game.main()
    out = capsys.readouterr().out

    assert "Lock #1 (I)" in out
    assert "Lock #2 (O)" in out
