"""Static board evaluation."""

from __future__ import annotations

from .constants import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE, piece_color, piece_kind
from .position import Position

# Material values in centipawns.
PIECE_VALUES = {
    PAWN: 100,
    KNIGHT: 320,
    BISHOP: 330,
    ROOK: 500,
    QUEEN: 900,
    KING: 20_000,
}


def evaluate(position: Position) -> int:
    """Return material balance from the side-to-move perspective in centipawns."""
    score = 0
    for _, piece in position.pieces():
        value = PIECE_VALUES[piece_kind(piece)]
        score += value if piece_color(piece) == WHITE else -value
    return score if position.side_to_move == WHITE else -score
