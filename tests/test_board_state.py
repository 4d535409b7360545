from chesscore.constants import (
    BN,
    BP,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    PIECE_NONE,
    WK,
    WN,
    WP,
    WQ,
    WR,
)
from chesscore.fen import decode
from chesscore.move import Move


def test_make_restore_simple_pawn_push_roundtrip() -> None:
    position = decode("8/8/8/8/8/8/4P3/4K3 w - - 0 1")
    initial = position.snapshot()

    move = Move(from_square="e2", to_square="e4")
    assert position.make_move(move)

    assert move.piece == WP
    assert position.en_passant == "e3"
    assert position.halfmove_clock == 0
    position.restore(initial)
    assert position.snapshot() == initial


def test_en_passant_removes_passed_pawn() -> None:
    position = decode("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")

    move = Move(from_square="e5", to_square="d6")
    assert position.make_move(move)

    assert move.is_en_passant
    assert move.captured == BP
    assert position.piece_at("d5") == PIECE_NONE
    assert position.piece_at("d6") == WP
    assert position.en_passant is None


def test_promotion_defaults_to_queen() -> None:
    position = decode("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")

    move = Move(from_square="e7", to_square="e8")
    assert position.make_move(move)
    assert position.piece_at("e8") == WQ
    assert move.promotion == WQ


def test_promotion_piece_is_recoloured_for_mover() -> None:
    white = decode("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    assert white.make_move(Move(from_square="e7", to_square="e8", promotion=WN))
    assert white.piece_at("e8") == WN

    black = decode("4k3/8/8/8/8/8/3p4/K7 b - - 0 1")
    move = Move.from_uci("d2d1n")
    assert black.make_move(move)
    assert black.piece_at("d1") == BN
    assert move.promotion == BN


def test_castle_relocates_rook_and_clears_rights() -> None:
    kingside = decode("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    move = Move(from_square="e1", to_square="g1")
    assert kingside.make_move(move)
    assert move.is_castle
    assert kingside.piece_at("g1") == WK
    assert kingside.piece_at("f1") == WR
    assert kingside.piece_at("h1") == PIECE_NONE
    assert kingside.castling_rights == 0

    queenside = decode("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert queenside.make_move(Move(from_square="e1", to_square="c1"))
    assert queenside.piece_at("c1") == WK
    assert queenside.piece_at("d1") == WR
    assert queenside.piece_at("a1") == PIECE_NONE


def test_rook_move_revokes_single_right() -> None:
    position = decode("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert position.make_move(Move(from_square="h1", to_square="h2"))
    assert position.castling_rights == CASTLE_WHITE_QUEEN


def test_rook_capture_on_corner_revokes_right() -> None:
    position = decode("r3k2r/8/8/8/8/8/8/R3K3 w Qkq - 0 1")
    assert position.make_move(Move(from_square="a1", to_square="a8"))
    assert position.castling_rights == CASTLE_BLACK_KING


def test_clocks_update() -> None:
    position = decode("4k3/8/8/8/8/8/8/4K1N1 b - - 5 10")
    assert position.make_move(Move(from_square="e8", to_square="e7"))
    assert position.halfmove_clock == 6
    assert position.fullmove_number == 11

    assert position.make_move(Move(from_square="g1", to_square="f3"))
    assert position.halfmove_clock == 7
    assert position.fullmove_number == 11


def test_reject_move_for_wrong_side_to_move() -> None:
    position = decode("8/8/8/8/8/8/4P3/4K3 b - - 0 1")
    initial = position.snapshot()

    assert not position.make_move(Move(from_square="e2", to_square="e4"))
    assert position.snapshot() == initial


def test_reject_capture_of_own_piece() -> None:
    position = decode("4k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
    initial = position.snapshot()

    assert not position.make_move(Move(from_square="a1", to_square="e1"))
    assert position.snapshot() == initial


def test_copy_is_independent() -> None:
    position = decode("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    clone = position.copy()
    assert clone == position

    assert clone.make_move(Move(from_square="e1", to_square="f1"))
    assert clone != position
    assert position.castling_rights == CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN | CASTLE_BLACK_KING | CASTLE_BLACK_QUEEN
    assert position.piece_at("e1") == WK
