from chesscore.attacks import is_check
from chesscore.executor import apply_move
from chesscore.fen import decode
from chesscore.move import Move
from chesscore.movegen import generate_legal_moves
from chesscore.status import (
    GameStatus,
    game_status,
    is_checkmate,
    is_draw,
    is_insufficient_material,
    is_stalemate,
)


def test_back_rank_mate() -> None:
    position = decode("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
    assert game_status(position) == GameStatus.ACTIVE

    assert apply_move(position, Move(from_square="a1", to_square="a8"))

    assert game_status(position) == GameStatus.CHECKMATE
    assert is_checkmate(position)
    assert generate_legal_moves(position) == []


def test_stalemate_is_not_checkmate() -> None:
    position = decode("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    assert game_status(position) == GameStatus.STALEMATE
    assert is_stalemate(position)
    assert not is_checkmate(position)
    assert not is_check(position)
    assert is_draw(position)


def test_check_is_informational() -> None:
    position = decode("4k3/8/8/8/8/8/4R3/4K3 b - - 0 1")
    status = game_status(position)
    assert status == GameStatus.CHECK
    assert not status.is_terminal


def test_fifty_move_rule_after_quiet_half_moves() -> None:
    position = decode("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    shuffle = ("a1a2", "e8d8", "a2a1", "d8e8")

    for index in range(100):
        if index == 99:
            assert game_status(position) == GameStatus.ACTIVE
        assert apply_move(position, Move.from_uci(shuffle[index % 4]))

    assert position.halfmove_clock == 100
    assert game_status(position) == GameStatus.DRAW


def test_fifty_move_rule_from_notation() -> None:
    assert game_status(decode("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")) == GameStatus.DRAW
    assert game_status(decode("4k3/8/8/8/8/8/8/R3K3 w - - 99 80")) == GameStatus.ACTIVE


def test_checkmate_takes_precedence_over_fifty_moves() -> None:
    assert game_status(decode("R5k1/5ppp/8/8/8/8/8/6K1 b - - 120 90")) == GameStatus.CHECKMATE


def test_insufficient_material() -> None:
    assert is_insufficient_material(decode("4k3/8/8/8/8/8/8/4K3 w - - 0 1"))
    assert is_insufficient_material(decode("4k3/8/8/8/8/8/8/2B1K3 w - - 0 1"))
    assert is_insufficient_material(decode("4k3/8/8/3n4/8/8/8/4K3 w - - 0 1"))
    assert not is_insufficient_material(decode("4k3/8/8/8/8/8/8/1NN1K3 w - - 0 1"))
    assert not is_insufficient_material(decode("4k3/8/8/8/8/8/8/R3K3 w - - 0 1"))


def test_capture_down_to_bare_kings_is_draw() -> None:
    position = decode("4k3/8/8/8/8/8/3q4/4K3 w - - 0 1")
    assert game_status(position) == GameStatus.CHECK

    assert apply_move(position, Move(from_square="e1", to_square="d2"))
    assert game_status(position) == GameStatus.DRAW
