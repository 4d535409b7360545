"""Attack and check detection."""

from __future__ import annotations

from loguru import logger

from .constants import (
    BISHOP,
    KING,
    KNIGHT,
    PAWN,
    PIECE_NONE,
    QUEEN,
    ROOK,
    WHITE,
    in_bounds,
    make_piece,
    opposite,
    piece_color,
    piece_kind,
    square_coords,
    square_name,
)
from .position import Position

KNIGHT_OFFSETS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_OFFSETS = ((0, 1), (0, -1), (1, 0), (-1, 0), (1, 1), (1, -1), (-1, 1), (-1, -1))
BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS = ((0, 1), (0, -1), (1, 0), (-1, 0))
QUEEN_DIRS = ROOK_DIRS + BISHOP_DIRS

SLIDER_DIRS = {BISHOP: BISHOP_DIRS, ROOK: ROOK_DIRS, QUEEN: QUEEN_DIRS}


def pawn_direction(side: int) -> int:
    """Row step of a pawn's advance: white moves toward row 0."""
    return -1 if side == WHITE else 1


def attacked_squares(position: Position, square: str) -> list[str]:
    """Squares controlled by the piece on ``square``.

    Pawns control their two forward diagonals only, kings their adjacent
    squares only. Rays stop on the first occupied square, whoever owns it.
    """
    row, col = square_coords(square)
    piece = position.grid[row][col]
    if piece == PIECE_NONE:
        return []

    kind = piece_kind(piece)
    if kind == PAWN:
        step = pawn_direction(piece_color(piece))
        return _leaper_squares(row, col, ((step, -1), (step, 1)))
    if kind == KNIGHT:
        return _leaper_squares(row, col, KNIGHT_OFFSETS)
    if kind == KING:
        return _leaper_squares(row, col, KING_OFFSETS)

    squares = []
    for drow, dcol in SLIDER_DIRS[kind]:
        r, c = row + drow, col + dcol
        while in_bounds(r, c):
            squares.append(square_name(r, c))
            if position.grid[r][c] != PIECE_NONE:
                break
            r += drow
            c += dcol
    return squares


def is_square_attacked(position: Position, square: str, by_side: int) -> bool:
    """Whether any piece of ``by_side`` controls ``square``.

    Works backwards from the target square, so the position is only read.
    """
    row, col = square_coords(square)
    grid = position.grid

    pawn = make_piece(PAWN, by_side)
    pawn_row = row - pawn_direction(by_side)
    for dcol in (-1, 1):
        if in_bounds(pawn_row, col + dcol) and grid[pawn_row][col + dcol] == pawn:
            return True

    knight = make_piece(KNIGHT, by_side)
    for drow, dcol in KNIGHT_OFFSETS:
        r, c = row + drow, col + dcol
        if in_bounds(r, c) and grid[r][c] == knight:
            return True

    king = make_piece(KING, by_side)
    for drow, dcol in KING_OFFSETS:
        r, c = row + drow, col + dcol
        if in_bounds(r, c) and grid[r][c] == king:
            return True

    queen = make_piece(QUEEN, by_side)
    for directions, slider in ((BISHOP_DIRS, make_piece(BISHOP, by_side)), (ROOK_DIRS, make_piece(ROOK, by_side))):
        for drow, dcol in directions:
            r, c = row + drow, col + dcol
            while in_bounds(r, c):
                piece = grid[r][c]
                if piece != PIECE_NONE:
                    if piece in (slider, queen):
                        return True
                    break
                r += drow
                c += dcol

    return False


def in_check(position: Position, side: int) -> bool:
    king_square = position.find_king(side)
    if king_square is None:
        logger.debug("No king for side {} on board; treating as not in check", side)
        return False
    return is_square_attacked(position, king_square, opposite(side))


def is_check(position: Position) -> bool:
    return in_check(position, position.side_to_move)


def _leaper_squares(row: int, col: int, offsets) -> list[str]:
    squares = []
    for drow, dcol in offsets:
        r, c = row + drow, col + dcol
        if in_bounds(r, c):
            squares.append(square_name(r, c))
    return squares
