"""Chess rules engine and adversarial search."""

from .engine import ChessEngine
from .fen import MalformedPositionError, decode, encode
from .move import Move
from .position import Position
from .search import Difficulty, SearchEngine
from .status import GameStatus, game_status

__all__ = [
    "ChessEngine",
    "Difficulty",
    "GameStatus",
    "MalformedPositionError",
    "Move",
    "Position",
    "SearchEngine",
    "decode",
    "encode",
    "game_status",
]
