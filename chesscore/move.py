"""Move record shared by the generator, executor and search."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    PIECE_NONE,
    PIECE_SYMBOLS,
    PROMOTION_KINDS,
    WHITE,
    is_square,
    make_piece,
)


@dataclass(slots=True)
class Move:
    """A half-move request and, once applied, its observed side effects.

    ``piece``, ``captured``, ``promotion``, ``is_castle``, ``is_en_passant``
    and ``notation`` are filled in when the move is executed.
    """

    from_square: str
    to_square: str
    piece: int = PIECE_NONE
    captured: int = PIECE_NONE
    promotion: int = PIECE_NONE
    is_castle: bool = False
    is_en_passant: bool = False
    notation: str | None = None

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse ``e2e4`` / ``e7e8n`` into an unapplied move.

        The promotion piece is recorded as white; the executor recolours it
        for the side that moves.
        """
        text = text.strip().lower()
        if len(text) not in (4, 5) or not is_square(text[:2]) or not is_square(text[2:4]):
            raise ValueError(f"Invalid move: {text}")
        promotion = PIECE_NONE
        if len(text) == 5:
            if text[4] not in PROMOTION_KINDS:
                raise ValueError(f"Invalid promotion piece: {text[4]}")
            promotion = make_piece(PROMOTION_KINDS[text[4]], WHITE)
        return cls(from_square=text[:2], to_square=text[2:4], promotion=promotion)

    def uci(self) -> str:
        promo = ""
        if self.promotion != PIECE_NONE:
            promo = PIECE_SYMBOLS[self.promotion].lower()
        return f"{self.from_square}{self.to_square}{promo}"

    def __str__(self) -> str:
        return self.uci()
