"""Protocol data classes for WebSocket communication."""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Literal, Optional
from enum import Enum

PROTOCOL_VERSION = "t1.0.0"


class MessageType(str, Enum):
    """WebSocket message types."""
    HELLO = "hello"
    RESET = "reset"
    INTENT = "intent"
    KEY = "key"
    SNAPSHOT = "snapshot"
    ERROR = "error"


# Browser key names -> engine intent names
KEY_INTENTS: Dict[str, str] = {
    "ArrowLeft": "MOVE_LEFT",
    "ArrowRight": "MOVE_RIGHT",
    "ArrowDown": "SOFT_DROP",
    "ArrowUp": "ROTATE",
}


@dataclass
class HelloRequest:
    """Client hello message."""
    type: Literal["hello"] = "hello"
    version: str = PROTOCOL_VERSION


@dataclass
class HelloResponse:
    """Server hello response."""
    type: Literal["hello"] = "hello"
    version: str = PROTOCOL_VERSION
    server: str = "tetris-engine-py"


@dataclass
class ResetRequest:
    """Request to start a new game."""
    seed: Optional[int] = None
    type: Literal["reset"] = "reset"


@dataclass
class IntentRequest:
    """Request to apply an intent: MOVE_LEFT, MOVE_RIGHT, SOFT_DROP, ROTATE."""
    intent: str
    type: Literal["intent"] = "intent"


@dataclass
class KeyRequest:
    """Raw key press forwarded by a browser client."""
    key: str
    type: Literal["key"] = "key"


@dataclass
class SnapshotRequest:
    """Request the current game state."""
    type: Literal["snapshot"] = "snapshot"


@dataclass
class SnapshotResponse:
    """Game state snapshot, sent as a reply or pushed on a gravity tick."""
    data: Dict[str, Any]  # GameState.to_dict()
    done: bool
    info: Dict[str, Any] = field(default_factory=dict)
    source: str = "reply"  # "reply" or "tick"
    type: Literal["snapshot"] = "snapshot"


@dataclass
class ErrorResponse:
    """Error response."""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    type: Literal["error"] = "error"


class ErrorCode:
    """Standard error codes."""
    INVALID_MESSAGE = "INVALID_MESSAGE"
    INVALID_ACTION = "INVALID_ACTION"
    GAME_NOT_INITIALIZED = "GAME_NOT_INITIALIZED"


# Message class -> {field: accepted JSON types}
FIELD_TYPES: Dict[type, Dict[str, tuple]] = {
    ResetRequest: {"seed": (int, type(None))},
    IntentRequest: {"intent": (str,)},
    KeyRequest: {"key": (str,)},
}


def _check_field_types(message: Any) -> None:
    for name, accepted in FIELD_TYPES.get(type(message), {}).items():
        value = getattr(message, name)
        # bool is an int subclass but never a valid seed
        if isinstance(value, bool) or not isinstance(value, accepted):
            raise ValueError(
                f"Invalid {message.type} message: {name} has type {type(value).__name__}"
            )


def parse_message(data: Dict[str, Any]) -> Any:
    """Parse incoming WebSocket message.

    Args:
        data: JSON message dict

    Returns:
        Parsed message object

    Raises:
        ValueError: If message type is invalid or fields do not match
    """
    if not isinstance(data, dict):
        raise ValueError("Message must be a JSON object")

    msg_type = data.get("type")
    message_classes = {
        MessageType.HELLO: HelloRequest,
        MessageType.RESET: ResetRequest,
        MessageType.INTENT: IntentRequest,
        MessageType.KEY: KeyRequest,
        MessageType.SNAPSHOT: SnapshotRequest,
    }

    for kind, cls in message_classes.items():
        if msg_type == kind:
            try:
                message = cls(**data)
            except TypeError as e:
                raise ValueError(f"Invalid {msg_type} message: {e}")
            _check_field_types(message)
            return message

    raise ValueError(f"Unknown message type: {msg_type}")


def to_dict(obj: Any) -> Dict[str, Any]:
    """Convert dataclass to dict for JSON serialization.

    Args:
        obj: Dataclass instance

    Returns:
        Dictionary representation
    """
    return asdict(obj)
