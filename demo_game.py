#!/usr/bin/env python3
"""Headless demo: plays random intents until game over and prints frames."""

import random
import sys

from tetris_engine.game import Game, Intent


def main():
    """Run a random playthrough."""
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 42
    max_steps = int(sys.argv[2]) if len(sys.argv) > 2 else 2000

    print("Tetris Engine Demo")
    print("=" * 40)
    print(f"Seed: {seed}, max steps: {max_steps}")

    game = Game(seed=seed)
    chooser = random.Random(seed)
    intents = list(Intent)
    locks = 0
    lines = 0

    for step in range(max_steps):
        kind = game.current.kind
        # Mix player intents with gravity the way a 500ms timer would
        if step % 3 == 2:
            result = game.tick()
        else:
            result = game.handle_intent(chooser.choice(intents))

        if "lock" in result.events:
            locks += 1
            lines += result.info["lines_cleared"]
            print(f"\nLock #{locks} ({kind}), lines so far: {lines}")
            print(result.state.render_text())

        if result.done:
            break

    state = game.get_snapshot()
    print("\n" + "=" * 40)
    print(f"Status: {state.status.value}")
    print(f"Pieces locked: {locks}, lines cleared: {lines}, gravity ticks: {game.ticks}")
    print("=" * 40)


if __name__ == "__main__":
    main()
