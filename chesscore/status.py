"""Game status classification."""

from __future__ import annotations

from enum import Enum

from .attacks import is_check
from .constants import BISHOP, KING, KNIGHT, piece_kind
from .movegen import has_legal_moves
from .position import Position

FIFTY_MOVE_HALFMOVES = 100


class GameStatus(str, Enum):
    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE, GameStatus.DRAW)


def is_checkmate(position: Position) -> bool:
    return is_check(position) and not has_legal_moves(position)


def is_stalemate(position: Position) -> bool:
    return not is_check(position) and not has_legal_moves(position)


def is_insufficient_material(position: Position) -> bool:
    """Bare kings, or kings plus a single knight or bishop."""
    others = [piece for _, piece in position.pieces() if piece_kind(piece) != KING]
    if not others:
        return True
    return len(others) == 1 and piece_kind(others[0]) in (KNIGHT, BISHOP)


def is_draw(position: Position) -> bool:
    return (
        is_stalemate(position)
        or position.halfmove_clock >= FIFTY_MOVE_HALFMOVES
        or is_insufficient_material(position)
    )


def game_status(position: Position) -> GameStatus:
    """Classify ``position`` after a half-move.

    Checkmate takes precedence over stalemate, stalemate over the other
    draws, and any draw over a plain check.
    """
    check = is_check(position)
    if not has_legal_moves(position):
        return GameStatus.CHECKMATE if check else GameStatus.STALEMATE
    if position.halfmove_clock >= FIFTY_MOVE_HALFMOVES or is_insufficient_material(position):
        return GameStatus.DRAW
    return GameStatus.CHECK if check else GameStatus.ACTIVE
