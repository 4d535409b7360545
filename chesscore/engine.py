"""One-object facade over a position and the rules that act on it."""

from __future__ import annotations

from collections.abc import Mapping

from .attacks import is_check
from .constants import COLOR_NAMES, PIECE_NONE, START_FEN
from .executor import apply_move
from .fen import decode, encode
from .move import Move
from .movegen import generate_legal_moves, legal_targets
from .position import Position
from .search import SearchEngine
from .status import GameStatus, game_status, is_checkmate, is_draw, is_stalemate


class ChessEngine:
    """Rules engine bound to one game position.

    Built from notation for each operation by the session layer; instances
    are not meant to be shared between concurrent callers.
    """

    def __init__(self, fen: str = START_FEN, depths: Mapping[str, int] | None = None) -> None:
        self.position: Position = decode(fen)
        self.searcher = SearchEngine(depths)

    def export_fen(self) -> str:
        return encode(self.position)

    @property
    def turn(self) -> str:
        return COLOR_NAMES[self.position.side_to_move]

    def piece_at(self, square: str) -> int:
        return self.position.piece_at(square)

    def valid_moves(self, square: str) -> list[str]:
        return legal_targets(self.position, square)

    def is_valid_move(self, from_square: str, to_square: str) -> bool:
        return to_square in legal_targets(self.position, from_square)

    def legal_moves(self) -> list[Move]:
        return generate_legal_moves(self.position)

    def make_move(self, move: Move) -> bool:
        return apply_move(self.position, move)

    def play(self, from_square: str, to_square: str, promotion: int = PIECE_NONE) -> Move | None:
        move = Move(from_square=from_square, to_square=to_square, promotion=promotion)
        return move if apply_move(self.position, move) else None

    def is_check(self) -> bool:
        return is_check(self.position)

    def is_checkmate(self) -> bool:
        return is_checkmate(self.position)

    def is_stalemate(self) -> bool:
        return is_stalemate(self.position)

    def is_draw(self) -> bool:
        return is_draw(self.position)

    def status(self) -> GameStatus:
        return game_status(self.position)

    def ai_move(self, difficulty: str = "medium") -> Move | None:
        return self.searcher.choose_move_for(self.position, difficulty)
