"""Board state: an 8x8 grid plus side to move, castling, en passant and clocks."""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from .constants import (
    BLACK,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    KING,
    PAWN,
    PIECE_NONE,
    PIECE_SYMBOLS,
    QUEEN,
    ROOK_HOMES,
    SQUARES,
    WHITE,
    make_piece,
    opposite,
    piece_color,
    piece_kind,
    square_coords,
    square_name,
)
from .move import Move


class PositionSnapshot(NamedTuple):
    grid: tuple[tuple[int, ...], ...]
    side_to_move: int
    castling_rights: int
    en_passant: str | None
    halfmove_clock: int
    fullmove_number: int


class Position:
    """Mutable chess position.

    ``grid[row][col]`` holds a piece code or ``PIECE_NONE``; row 0 is rank 8.
    The position is exclusively owned by its caller: nothing here is
    synchronized.
    """

    __slots__ = (
        "grid",
        "side_to_move",
        "castling_rights",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(self) -> None:
        self.grid: list[list[int]] = [[PIECE_NONE] * 8 for _ in range(8)]
        self.side_to_move = WHITE
        self.castling_rights = 0
        self.en_passant: str | None = None
        self.halfmove_clock = 0
        self.fullmove_number = 1

    def piece_at(self, square: str) -> int:
        row, col = square_coords(square)
        return self.grid[row][col]

    def pieces(self, side: int | None = None) -> Iterator[tuple[str, int]]:
        """Yield ``(square, piece)`` for occupied squares, optionally of one side."""
        for row in range(8):
            for col in range(8):
                piece = self.grid[row][col]
                if piece == PIECE_NONE:
                    continue
                if side is not None and piece_color(piece) != side:
                    continue
                yield SQUARES[row * 8 + col], piece

    def find_king(self, side: int) -> str | None:
        king = make_piece(KING, side)
        for square, piece in self.pieces(side):
            if piece == king:
                return square
        return None

    def snapshot(self) -> PositionSnapshot:
        return PositionSnapshot(
            grid=tuple(tuple(row) for row in self.grid),
            side_to_move=self.side_to_move,
            castling_rights=self.castling_rights,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def restore(self, snapshot: PositionSnapshot) -> None:
        self.grid = [list(row) for row in snapshot.grid]
        self.side_to_move = snapshot.side_to_move
        self.castling_rights = snapshot.castling_rights
        self.en_passant = snapshot.en_passant
        self.halfmove_clock = snapshot.halfmove_clock
        self.fullmove_number = snapshot.fullmove_number

    def copy(self) -> Position:
        clone = Position()
        clone.restore(self.snapshot())
        return clone

    def make_move(self, move: Move) -> bool:
        """Apply ``move`` without checking legality.

        Only the ownership of the origin and destination squares is checked.
        Fills ``piece``, ``captured``, ``promotion``, ``is_castle`` and
        ``is_en_passant`` on ``move``. Callers that need legality go through
        :func:`chesscore.executor.apply_move`.
        """
        from_row, from_col = square_coords(move.from_square)
        to_row, to_col = square_coords(move.to_square)

        side = self.side_to_move
        piece = self.grid[from_row][from_col]
        if piece == PIECE_NONE or piece_color(piece) != side:
            return False

        target = self.grid[to_row][to_col]
        if target != PIECE_NONE and piece_color(target) == side:
            return False

        kind = piece_kind(piece)
        move.piece = piece
        move.captured = target
        move.is_castle = False
        move.is_en_passant = False

        self.grid[to_row][to_col] = piece
        self.grid[from_row][from_col] = PIECE_NONE

        en_passant = None
        if kind == PAWN:
            if abs(to_row - from_row) == 2:
                en_passant = square_name((from_row + to_row) // 2, to_col)
            elif from_col != to_col and target == PIECE_NONE and move.to_square == self.en_passant:
                # The passed pawn stands beside the origin, not on the destination.
                move.is_en_passant = True
                move.captured = self.grid[from_row][to_col]
                self.grid[from_row][to_col] = PIECE_NONE

            if to_row in (0, 7):
                promoted = QUEEN if move.promotion == PIECE_NONE else piece_kind(move.promotion)
                move.promotion = make_piece(promoted, side)
                self.grid[to_row][to_col] = move.promotion
            else:
                move.promotion = PIECE_NONE
        else:
            move.promotion = PIECE_NONE

        if kind == KING:
            if abs(to_col - from_col) == 2:
                move.is_castle = True
                rook_from, rook_to = (7, 5) if to_col > from_col else (0, 3)
                self.grid[from_row][rook_to] = self.grid[from_row][rook_from]
                self.grid[from_row][rook_from] = PIECE_NONE
            if side == WHITE:
                self.castling_rights &= ~(CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN)
            else:
                self.castling_rights &= ~(CASTLE_BLACK_KING | CASTLE_BLACK_QUEEN)

        # A rook leaving its corner, or captured on it, takes its right along.
        for right, home in ROOK_HOMES.items():
            if move.from_square == home or move.to_square == home:
                self.castling_rights &= ~right

        self.en_passant = en_passant

        if kind == PAWN or move.captured != PIECE_NONE:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if side == BLACK:
            self.fullmove_number += 1

        self.side_to_move = opposite(side)
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __str__(self) -> str:
        rows = []
        for row in self.grid:
            rows.append(" ".join("." if piece == PIECE_NONE else PIECE_SYMBOLS[piece] for piece in row))
        ep = "-" if self.en_passant is None else self.en_passant
        side = "w" if self.side_to_move == WHITE else "b"
        return "\n".join(rows) + f"\nside={side} castle={self.castling_rights} ep={ep}"
