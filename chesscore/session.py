"""Game sessions and an in-memory store keyed by game id.

A session persists its position purely as notation plus a move log and
rebuilds a :class:`~chesscore.engine.ChessEngine` for every operation.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from itertools import count

from loguru import logger

from .constants import BLACK, PIECE_NONE, PIECE_SYMBOLS, START_FEN, WHITE
from .engine import ChessEngine
from .move import Move
from .search import DEFAULT_DEPTHS
from .status import GameStatus

AI_PLAYER = "ai"


class GameResult(str, Enum):
    WHITE_WINS = "white_wins"
    BLACK_WINS = "black_wins"
    DRAW = "draw"


class IllegalMoveError(ValueError):
    """The engine refused the requested move."""


class GameNotActiveError(RuntimeError):
    """The game has already been completed."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class MoveRecord:
    notation: str
    fen: str
    piece: str
    captured: str | None = None
    promotion: str | None = None
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def from_move(cls, move: Move, fen: str) -> MoveRecord:
        return cls(
            notation=move.notation or move.uci(),
            fen=fen,
            piece=PIECE_SYMBOLS[move.piece],
            captured=None if move.captured == PIECE_NONE else PIECE_SYMBOLS[move.captured],
            promotion=None if move.promotion == PIECE_NONE else PIECE_SYMBOLS[move.promotion],
        )


@dataclass
class GameSession:
    game_id: int
    white_player: str
    black_player: str
    fen: str = START_FEN
    ai_difficulty: str = "medium"
    depths: Mapping[str, int] | None = None
    moves: list[MoveRecord] = field(default_factory=list)
    status: str = "active"
    result: GameResult | None = None
    winner: str | None = None
    created_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None
    # Held across every state change; callers hold it to chain a move and a reply.
    lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False, compare=False)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def move_history(self) -> str:
        return " ".join(record.notation for record in self.moves)

    def engine(self) -> ChessEngine:
        return ChessEngine(self.fen, self.depths)

    def player_to_move(self) -> str:
        return self.white_player if self.engine().position.side_to_move == WHITE else self.black_player

    def ai_to_move(self) -> bool:
        return self.is_active and self.player_to_move() == AI_PLAYER

    def play(self, from_square: str, to_square: str, promotion: int = PIECE_NONE) -> Move:
        """Apply a move request and complete the game if it ends it."""
        with self.lock:
            self._require_active()
            engine = self.engine()
            move = Move(from_square=from_square, to_square=to_square, promotion=promotion)
            if not engine.make_move(move):
                raise IllegalMoveError(f"Illegal move: {from_square}{to_square}")
            self._record(engine, move)
            return move

    def play_ai(self) -> Move | None:
        """Let the engine move for the side to move at the configured difficulty."""
        with self.lock:
            self._require_active()
            engine = self.engine()
            move = engine.ai_move(self.ai_difficulty)
            if move is None:
                return None
            request = Move(from_square=move.from_square, to_square=move.to_square, promotion=move.promotion)
            if not engine.make_move(request):
                raise IllegalMoveError(f"Engine produced an illegal move: {move.uci()}")
            self._record(engine, request)
            return request

    def resign(self, side: int) -> None:
        with self.lock:
            self._require_active()
            if side == WHITE:
                self._complete(GameResult.BLACK_WINS)
            else:
                self._complete(GameResult.WHITE_WINS)

    def resign_player(self, player: str) -> None:
        if player == self.white_player:
            self.resign(WHITE)
        elif player == self.black_player:
            self.resign(BLACK)
        else:
            raise ValueError(f"{player!r} is not a player in game {self.game_id}")

    def _record(self, engine: ChessEngine, move: Move) -> None:
        self.fen = engine.export_fen()
        self.moves.append(MoveRecord.from_move(move, self.fen))

        status = engine.status()
        if status == GameStatus.CHECKMATE:
            loser = engine.position.side_to_move
            self._complete(GameResult.BLACK_WINS if loser == WHITE else GameResult.WHITE_WINS)
        elif status.is_terminal:
            self._complete(GameResult.DRAW)

    def _complete(self, result: GameResult) -> None:
        self.status = "completed"
        self.result = result
        if result == GameResult.WHITE_WINS:
            self.winner = self.white_player
        elif result == GameResult.BLACK_WINS:
            self.winner = self.black_player
        self.completed_at = _now()
        logger.info("Game {} completed: {} after {} moves", self.game_id, result.value, len(self.moves))

    def _require_active(self) -> None:
        if not self.is_active:
            raise GameNotActiveError(f"Game {self.game_id} is not active")


class GameStore:
    """Process-local table of sessions; each session serializes its own state changes."""

    def __init__(self, depths: Mapping[str, int] | None = None) -> None:
        self._games: dict[int, GameSession] = {}
        self._ids = count(1)
        self._lock = threading.Lock()
        self.depths = depths

    def create(
        self,
        white_player: str,
        black_player: str = AI_PLAYER,
        fen: str = START_FEN,
        ai_difficulty: str = "medium",
    ) -> GameSession:
        if ai_difficulty not in {**DEFAULT_DEPTHS, **(self.depths or {})}:
            raise ValueError(f"Unknown difficulty: {ai_difficulty}")
        # Validates the notation before the session is stored.
        fen = ChessEngine(fen).export_fen()
        with self._lock:
            game = GameSession(
                game_id=next(self._ids),
                white_player=white_player,
                black_player=black_player,
                fen=fen,
                ai_difficulty=ai_difficulty,
                depths=self.depths,
            )
            self._games[game.game_id] = game
        logger.info("Created game {}: {} vs {}", game.game_id, white_player, black_player)
        return game

    def get(self, game_id: int) -> GameSession:
        with self._lock:
            try:
                return self._games[game_id]
            except KeyError as exc:
                raise KeyError(f"Game not found: {game_id}") from exc

    def delete(self, game_id: int) -> None:
        with self._lock:
            self._games.pop(game_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
