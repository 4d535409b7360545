"""Position notation codec (FEN).

``decode`` fills in documented defaults for *missing* trailing fields
(turn ``w``, castling ``-``, en passant ``-``, clocks ``0`` and ``1``) but
rejects fields that are present and malformed with
:class:`MalformedPositionError`.
"""

from __future__ import annotations

from loguru import logger

from .constants import (
    BLACK,
    CASTLING_SYMBOLS,
    PIECE_NONE,
    PIECE_SYMBOLS,
    START_FEN,
    SYMBOL_TO_PIECE,
    WHITE,
    is_square,
)
from .position import Position

DEFAULT_FIELDS = ("", "w", "-", "-", "0", "1")


class MalformedPositionError(ValueError):
    """Raised when position notation cannot describe a board."""


def decode(text: str) -> Position:
    fields = text.split()
    if not fields:
        raise MalformedPositionError("Empty position notation")
    if len(fields) > len(DEFAULT_FIELDS):
        raise MalformedPositionError(f"Too many fields in position notation: {text}")
    if len(fields) < len(DEFAULT_FIELDS):
        logger.debug("Defaulting {} missing notation field(s) in {!r}", len(DEFAULT_FIELDS) - len(fields), text)
        fields = fields + list(DEFAULT_FIELDS[len(fields):])

    placement, side, castling, ep, halfmove, fullmove = fields

    position = Position()
    _decode_placement(position, placement)

    if side not in ("w", "b"):
        raise MalformedPositionError(f"Invalid side to move: {side}")
    position.side_to_move = WHITE if side == "w" else BLACK

    position.castling_rights = _decode_castling(castling)

    if ep == "-":
        position.en_passant = None
    elif is_square(ep) and ep[1] in "36":
        position.en_passant = ep
    else:
        raise MalformedPositionError(f"Invalid en passant target: {ep}")

    position.halfmove_clock = _decode_counter(halfmove, "half-move clock")
    position.fullmove_number = _decode_counter(fullmove, "full-move number")
    return position


def encode(position: Position) -> str:
    ep = "-" if position.en_passant is None else position.en_passant
    side = "w" if position.side_to_move == WHITE else "b"
    return " ".join(
        (
            _encode_placement(position),
            side,
            _encode_castling(position.castling_rights),
            ep,
            str(position.halfmove_clock),
            str(position.fullmove_number),
        )
    )


def initial_position() -> Position:
    return decode(START_FEN)


def _decode_placement(position: Position, placement: str) -> None:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedPositionError(f"Invalid board placement: {placement}")

    for row, rank in enumerate(ranks):
        col = 0
        for ch in rank:
            if ch in "12345678":
                col += int(ch)
                continue
            if ch not in SYMBOL_TO_PIECE:
                raise MalformedPositionError(f"Invalid piece symbol: {ch}")
            if col >= 8:
                raise MalformedPositionError(f"Invalid rank: {rank}")
            position.grid[row][col] = SYMBOL_TO_PIECE[ch]
            col += 1
        if col != 8:
            raise MalformedPositionError(f"Invalid rank: {rank}")


def _encode_placement(position: Position) -> str:
    rows = []
    for row in position.grid:
        text = ""
        empty = 0
        for piece in row:
            if piece == PIECE_NONE:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += PIECE_SYMBOLS[piece]
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def _decode_castling(castling: str) -> int:
    if castling == "-":
        return 0
    rights = 0
    symbols = dict((symbol, flag) for flag, symbol in CASTLING_SYMBOLS)
    for ch in castling:
        if ch not in symbols:
            raise MalformedPositionError(f"Invalid castling rights: {castling}")
        rights |= symbols[ch]
    return rights


def _encode_castling(rights: int) -> str:
    text = "".join(symbol for flag, symbol in CASTLING_SYMBOLS if rights & flag)
    return text or "-"


def _decode_counter(value: str, name: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise MalformedPositionError(f"Invalid {name}: {value}") from exc
    if number < 0:
        raise MalformedPositionError(f"Invalid {name}: {value}")
    return number
