"""Engine-wide constants and square helpers."""

from __future__ import annotations

WHITE = 0
BLACK = 1

COLOR_NAMES = {WHITE: "white", BLACK: "black"}

PIECE_NONE = -1

PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = range(6)

WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK = range(12)

PIECE_SYMBOLS = {
    WP: "P",
    WN: "N",
    WB: "B",
    WR: "R",
    WQ: "Q",
    WK: "K",
    BP: "p",
    BN: "n",
    BB: "b",
    BR: "r",
    BQ: "q",
    BK: "k",
}

SYMBOL_TO_PIECE = {v: k for k, v in PIECE_SYMBOLS.items()}

# Pieces a pawn may become, by lowercase letter.
PROMOTION_KINDS = {"n": KNIGHT, "b": BISHOP, "r": ROOK, "q": QUEEN}

CASTLE_WHITE_KING = 1
CASTLE_WHITE_QUEEN = 2
CASTLE_BLACK_KING = 4
CASTLE_BLACK_QUEEN = 8

CASTLING_SYMBOLS = (
    (CASTLE_WHITE_KING, "K"),
    (CASTLE_WHITE_QUEEN, "Q"),
    (CASTLE_BLACK_KING, "k"),
    (CASTLE_BLACK_QUEEN, "q"),
)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILES = "abcdefgh"
RANKS = "87654321"

# Row 0 is rank 8, row 7 is rank 1, matching the notation's rank order.
SQUARES = [f"{f}{r}" for r in RANKS for f in FILES]

# Home corners of the castling rooks, keyed by the right they carry.
ROOK_HOMES = {
    CASTLE_WHITE_KING: "h1",
    CASTLE_WHITE_QUEEN: "a1",
    CASTLE_BLACK_KING: "h8",
    CASTLE_BLACK_QUEEN: "a8",
}

KING_HOMES = {WHITE: "e1", BLACK: "e8"}


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def square_name(row: int, col: int) -> str:
    if not in_bounds(row, col):
        raise ValueError(f"Square coordinates out of range: {(row, col)}")
    return f"{FILES[col]}{8 - row}"


def square_coords(square: str) -> tuple[int, int]:
    if len(square) != 2 or square[0] not in FILES or square[1] not in RANKS:
        raise ValueError(f"Invalid square: {square}")
    return 8 - int(square[1]), FILES.index(square[0])


def is_square(text: str) -> bool:
    return len(text) == 2 and text[0] in FILES and text[1] in RANKS


def opposite(side: int) -> int:
    return side ^ 1


def piece_color(piece: int) -> int:
    return WHITE if piece < BP else BLACK


def piece_kind(piece: int) -> int:
    return piece % 6


def make_piece(kind: int, color: int) -> int:
    return kind + 6 * color
