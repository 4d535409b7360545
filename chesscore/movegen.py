"""Pseudo-legal and legal move generation."""

from __future__ import annotations

from .attacks import attacked_squares, in_check, is_square_attacked, pawn_direction
from .constants import (
    BLACK,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    KING,
    KING_HOMES,
    PAWN,
    PIECE_NONE,
    QUEEN,
    ROOK,
    ROOK_HOMES,
    WHITE,
    in_bounds,
    make_piece,
    opposite,
    piece_color,
    piece_kind,
    square_coords,
    square_name,
)
from .move import Move
from .position import Position

# (right, squares that must be empty, squares the king stands on or crosses, king destination)
CASTLING_PATHS = {
    WHITE: (
        (CASTLE_WHITE_KING, ("f1", "g1"), ("e1", "f1", "g1"), "g1"),
        (CASTLE_WHITE_QUEEN, ("b1", "c1", "d1"), ("e1", "d1", "c1"), "c1"),
    ),
    BLACK: (
        (CASTLE_BLACK_KING, ("f8", "g8"), ("e8", "f8", "g8"), "g8"),
        (CASTLE_BLACK_QUEEN, ("b8", "c8", "d8"), ("e8", "d8", "c8"), "c8"),
    ),
}


def pseudo_legal_targets(position: Position, square: str) -> list[str]:
    """Destinations the piece on ``square`` may reach by its movement rules.

    Does not consider whether the mover's king is left in check.
    """
    row, col = square_coords(square)
    piece = position.grid[row][col]
    if piece == PIECE_NONE:
        return []

    side = piece_color(piece)
    kind = piece_kind(piece)
    if kind == PAWN:
        return _pawn_targets(position, row, col, side)

    targets = [
        target
        for target in attacked_squares(position, square)
        if position.piece_at(target) == PIECE_NONE or piece_color(position.piece_at(target)) != side
    ]
    if kind == KING:
        targets.extend(_castling_targets(position, square, side))
    return targets


def legal_targets(position: Position, square: str) -> list[str]:
    """Pseudo-legal destinations that do not leave the mover's king attacked.

    Only pieces of the side to move have legal targets. Each candidate is
    played on ``position`` and rolled back from a snapshot.
    """
    piece = position.piece_at(square)
    side = position.side_to_move
    if piece == PIECE_NONE or piece_color(piece) != side:
        return []

    legal = []
    for target in pseudo_legal_targets(position, square):
        snapshot = position.snapshot()
        position.make_move(Move(from_square=square, to_square=target))
        illegal = in_check(position, side)
        position.restore(snapshot)
        if not illegal:
            legal.append(target)
    return legal


def generate_legal_moves(position: Position) -> list[Move]:
    """Every legal move for the side to move, in board order.

    Promotions are generated once per destination, as a queen.
    """
    side = position.side_to_move
    moves: list[Move] = []
    for square, piece in list(position.pieces(side)):
        for target in legal_targets(position, square):
            moves.append(_describe(position, square, target, piece))
    return moves


def has_legal_moves(position: Position) -> bool:
    side = position.side_to_move
    return any(legal_targets(position, square) for square, _ in list(position.pieces(side)))


def _describe(position: Position, square: str, target: str, piece: int) -> Move:
    move = Move(from_square=square, to_square=target, piece=piece, captured=position.piece_at(target))
    kind = piece_kind(piece)
    if kind == PAWN:
        if square[0] != target[0] and move.captured == PIECE_NONE:
            move.is_en_passant = True
            move.captured = position.piece_at(target[0] + square[1])
        if target[1] in "18":
            move.promotion = make_piece(QUEEN, piece_color(piece))
    elif kind == KING and abs(ord(target[0]) - ord(square[0])) == 2:
        move.is_castle = True
    return move


def _pawn_targets(position: Position, row: int, col: int, side: int) -> list[str]:
    grid = position.grid
    step = pawn_direction(side)
    start_row = 6 if side == WHITE else 1
    targets = []

    forward = row + step
    if not in_bounds(forward, col):
        return targets

    if grid[forward][col] == PIECE_NONE:
        targets.append(square_name(forward, col))
        double = row + 2 * step
        if row == start_row and grid[double][col] == PIECE_NONE:
            targets.append(square_name(double, col))

    enemy_pawn = make_piece(PAWN, opposite(side))
    ep_row = 2 if side == WHITE else 5
    for dcol in (-1, 1):
        c = col + dcol
        if not in_bounds(forward, c):
            continue
        target = grid[forward][c]
        if target != PIECE_NONE:
            if piece_color(target) != side:
                targets.append(square_name(forward, c))
        elif (
            forward == ep_row
            and square_name(forward, c) == position.en_passant
            and grid[row][c] == enemy_pawn
        ):
            targets.append(square_name(forward, c))
    return targets


def _castling_targets(position: Position, square: str, side: int) -> list[str]:
    if square != KING_HOMES[side]:
        return []

    enemy = opposite(side)
    rook = make_piece(ROOK, side)
    targets = []
    for right, empty, crossed, destination in CASTLING_PATHS[side]:
        if not position.castling_rights & right:
            continue
        if position.piece_at(ROOK_HOMES[right]) != rook:
            continue
        if any(position.piece_at(sq) != PIECE_NONE for sq in empty):
            continue
        if any(is_square_attacked(position, sq, enemy) for sq in crossed):
            continue
        targets.append(destination)
    return targets
