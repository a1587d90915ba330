"""FastAPI WebSocket server for the Tetris engine.

Each WebSocket connection owns one independent single-player game. The
server plays the part of the display layer: it turns key presses into
intents, drives gravity with a periodic timer and pushes snapshots.
"""

import asyncio
import json
import logging
import os
import random
from typing import Any, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from tetris_engine.config import GameConfig
from tetris_engine.game import Game, StepResult
from tetris_engine.timer import GravityTimer
from tetris_api.protocol import (
    KEY_INTENTS,
    HelloRequest,
    HelloResponse,
    ResetRequest,
    IntentRequest,
    KeyRequest,
    SnapshotRequest,
    SnapshotResponse,
    ErrorResponse,
    ErrorCode,
    parse_message,
    to_dict,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class GameNotInitializedError(Exception):
    """Raised when a game command arrives before any reset."""


class InvalidActionError(ValueError):
    """Raised for intents the engine does not know."""


class GameSession:
    """Manages a single game session."""

    def __init__(self, websocket: WebSocket, config: GameConfig):
        self.websocket = websocket
        self.config = config
        self.game: Optional[Game] = None
        self.initialized = False
        self.timer = GravityTimer(config.gravity_interval, self.on_gravity_tick)
        self.send_lock = asyncio.Lock()

    def reset(self, seed: Optional[int] = None) -> SnapshotResponse:
        """Start a new game and arm the gravity timer.

        Args:
            seed: Random seed (generates one if None)

        Returns:
            Initial snapshot response
        """
        if seed is None:
            seed = random.randint(0, 1_000_000)

        if self.game is None:
            self.game = Game(self.config, seed=seed)
        else:
            self.game.reset(seed)
        self.initialized = True
        self.timer.restart()

        state = self.game.get_snapshot()
        return SnapshotResponse(
            data=state.to_dict(),
            done=state.game_over,
            info={"events": ["reset"], "seed": seed},
        )

    def apply_intent(self, intent: str) -> SnapshotResponse:
        """Apply a player intent.

        Args:
            intent: Intent name (MOVE_LEFT, MOVE_RIGHT, SOFT_DROP, ROTATE)

        Returns:
            Snapshot after the intent

        Raises:
            GameNotInitializedError: If no game has been started
            InvalidActionError: If the intent is unknown
        """
        game = self._require_game()
        try:
            result = game.handle_intent(intent)
        except ValueError as e:
            raise InvalidActionError(str(e))
        self._update_timer(result)
        return SnapshotResponse(data=result.state.to_dict(), done=result.done, info=result.info)

    def press_key(self, key: str) -> SnapshotResponse:
        """Map a browser key name to an intent; other keys are ignored."""
        game = self._require_game()
        intent = KEY_INTENTS.get(key)
        if intent is None:
            state = game.get_snapshot()
            return SnapshotResponse(
                data=state.to_dict(),
                done=state.game_over,
                info={"events": ["ignored"], "lines_cleared": 0},
            )
        return self.apply_intent(intent)

    def snapshot(self) -> SnapshotResponse:
        state = self._require_game().get_snapshot()
        return SnapshotResponse(data=state.to_dict(), done=state.game_over)

    async def on_gravity_tick(self) -> bool:
        """Advance gravity and push the new state.

        Returns:
            False once the game is over (stops the timer)
        """
        if self.game is None or self.game.game_over:
            return False

        result = self.game.tick()
        response = SnapshotResponse(
            data=result.state.to_dict(),
            done=result.done,
            info=result.info,
            source="tick",
        )
        try:
            await self.send(response)
        except Exception as e:
            logger.warning(f"[Gravity] Failed to send tick (client may have disconnected): {e}")
            return False
        return not result.done

    async def send(self, message: Any) -> None:
        async with self.send_lock:
            await self.websocket.send_text(json.dumps(to_dict(message)))

    def close(self) -> None:
        """Tear down the session."""
        self.timer.cancel()

    def _require_game(self) -> Game:
        if not self.initialized or self.game is None:
            raise GameNotInitializedError("Game not initialized. Send reset first.")
        return self.game

    def _update_timer(self, result: StepResult) -> None:
        if result.done:
            self.timer.stop()
        elif result.piece_changed:
            # A moved or new piece gets a full gravity interval
            self.timer.restart()


def create_app(config: Optional[GameConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Game configuration (read from TETRIS_* variables if None)

    Returns:
        Configured application
    """
    config = config or GameConfig.from_env()
    app = FastAPI(title="Tetris Engine API", version="0.1.0")
    app.state.config = config

    # Enable CORS for web frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "tetris-engine-api", "version": "0.1.0"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/config")
    async def display_config():
        """Display geometry and gravity period for renderers."""
        return {
            "rows": config.rows,
            "cols": config.cols,
            "block_size": config.block_size,
            "gravity_interval_ms": config.gravity_interval_ms,
        }

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """WebSocket endpoint for game communication."""
        await websocket.accept()
        session = GameSession(websocket, config)
        logger.info("[WS] Client connected")

        try:
            while True:
                data = await websocket.receive_text()

                try:
                    message = parse_message(json.loads(data))

                    if isinstance(message, HelloRequest):
                        response = HelloResponse()
                    elif isinstance(message, ResetRequest):
                        response = session.reset(message.seed)
                        logger.info(f"[WS] Game reset: seed={response.info['seed']}")
                    elif isinstance(message, IntentRequest):
                        response = session.apply_intent(message.intent)
                    elif isinstance(message, KeyRequest):
                        response = session.press_key(message.key)
                    elif isinstance(message, SnapshotRequest):
                        response = session.snapshot()
                    else:
                        response = ErrorResponse(
                            code=ErrorCode.INVALID_MESSAGE,
                            message=f"Unknown message type: {type(message)}",
                        )

                except json.JSONDecodeError as e:
                    response = ErrorResponse(
                        code=ErrorCode.INVALID_MESSAGE,
                        message=f"Invalid JSON: {str(e)}",
                    )
                except GameNotInitializedError as e:
                    response = ErrorResponse(
                        code=ErrorCode.GAME_NOT_INITIALIZED,
                        message=str(e),
                    )
                except InvalidActionError as e:
                    response = ErrorResponse(
                        code=ErrorCode.INVALID_ACTION,
                        message=str(e),
                    )
                except ValueError as e:
                    logger.warning(f"[WS] Rejected message: {e}")
                    response = ErrorResponse(
                        code=ErrorCode.INVALID_MESSAGE,
                        message=str(e),
                    )
                except TypeError as e:
                    logger.warning(f"[WS] Rejected message with bad field type: {e}")
                    response = ErrorResponse(
                        code=ErrorCode.INVALID_MESSAGE,
                        message=str(e),
                    )

                await session.send(response)

        except WebSocketDisconnect:
            logger.info("[WS] Client disconnected")
        finally:
            session.close()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("TETRIS_HOST", "0.0.0.0"),
        port=int(os.getenv("TETRIS_PORT", "8000")),
    )
