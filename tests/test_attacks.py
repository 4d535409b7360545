from chesscore.attacks import attacked_squares, in_check, is_check, is_square_attacked
from chesscore.constants import BLACK, WHITE
from chesscore.fen import decode


def test_pawn_attacks_diagonals_only() -> None:
    position = decode("4k3/8/8/8/4P3/8/8/4K3 w - - 0 1")
    assert is_square_attacked(position, "d5", WHITE)
    assert is_square_attacked(position, "f5", WHITE)
    assert not is_square_attacked(position, "e5", WHITE)
    assert not is_square_attacked(position, "d3", WHITE)


def test_black_pawn_attacks_downward() -> None:
    position = decode("4k3/8/8/4p3/8/8/8/4K3 w - - 0 1")
    assert is_square_attacked(position, "d4", BLACK)
    assert not is_square_attacked(position, "d6", BLACK)


def test_slider_attack_is_blocked() -> None:
    position = decode("4k3/8/8/8/P7/8/8/R3K3 w - - 0 1")
    assert is_square_attacked(position, "a3", WHITE)
    assert not is_square_attacked(position, "a5", WHITE)


def test_king_attacks_adjacent_squares() -> None:
    position = decode("4k3/8/8/8/8/8/8/K7 w - - 0 1")
    assert set(attacked_squares(position, "a1")) == {"a2", "b1", "b2"}
    assert is_square_attacked(position, "b2", WHITE)
    assert not is_square_attacked(position, "c3", WHITE)


def test_attack_queries_leave_position_untouched() -> None:
    position = decode("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    before = position.snapshot()
    is_square_attacked(position, "e8", WHITE)
    is_check(position)
    assert position.snapshot() == before


def test_in_check() -> None:
    position = decode("4k3/8/8/8/8/8/4R3/4K3 b - - 0 1")
    assert is_check(position)
    assert not in_check(position, WHITE)


def test_missing_king_is_not_in_check() -> None:
    position = decode("8/8/8/8/8/8/4r3/8 w - - 0 1")
    assert not in_check(position, WHITE)
