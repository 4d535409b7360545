"""Checked move application."""

from __future__ import annotations

from loguru import logger

from .constants import PIECE_NONE, PROMOTION_KINDS, is_square, piece_kind
from .move import Move
from .movegen import legal_targets
from .position import Position


def apply_move(position: Position, move: Move) -> bool:
    """Play ``move`` if it is legal, mutating ``position`` in place.

    Returns ``False`` and leaves ``position`` untouched when the move is
    not among the legal moves of its origin square. On success the move's
    ``piece``, ``captured``, ``promotion``, ``is_castle``, ``is_en_passant``
    and ``notation`` fields describe what happened.
    """
    if not is_square(move.from_square) or not is_square(move.to_square):
        logger.debug("Rejected move with invalid squares: {} -> {}", move.from_square, move.to_square)
        return False

    if move.promotion != PIECE_NONE and piece_kind(move.promotion) not in PROMOTION_KINDS.values():
        logger.debug("Rejected move {} with invalid promotion piece {}", move.uci(), move.promotion)
        return False

    if move.to_square not in legal_targets(position, move.from_square):
        logger.debug("Rejected illegal move {}{}", move.from_square, move.to_square)
        return False

    position.make_move(move)
    move.notation = move.uci()
    return True
