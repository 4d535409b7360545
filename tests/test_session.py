import sys
import threading

import pytest

from chesscore.constants import START_FEN, WHITE
from chesscore.fen import MalformedPositionError
from chesscore.session import (
    AI_PLAYER,
    GameNotActiveError,
    GameResult,
    GameStore,
    IllegalMoveError,
)


def test_store_assigns_ids_and_looks_up_games() -> None:
    store = GameStore()
    first = store.create("alice", "bob")
    second = store.create("carol")

    assert (first.game_id, second.game_id) == (1, 2)
    assert len(store) == 2
    assert store.get(2) is second
    assert second.black_player == AI_PLAYER
    assert first.fen == START_FEN

    store.delete(1)
    with pytest.raises(KeyError):
        store.get(1)


def test_store_rejects_bad_input() -> None:
    store = GameStore()
    with pytest.raises(MalformedPositionError):
        store.create("alice", fen="not a position")
    with pytest.raises(ValueError):
        store.create("alice", ai_difficulty="grandmaster")
    assert len(store) == 0


def test_play_records_moves() -> None:
    game = GameStore().create("alice", "bob")

    move = game.play("e2", "e4")
    assert move.notation == "e2e4"
    game.play("e7", "e5")

    assert game.move_history == "e2e4 e7e5"
    assert [record.piece for record in game.moves] == ["P", "p"]
    assert game.moves[-1].fen == game.fen
    assert game.fen == "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2"
    assert game.is_active


def test_illegal_move_raises_and_keeps_state() -> None:
    game = GameStore().create("alice", "bob")
    with pytest.raises(IllegalMoveError):
        game.play("e2", "e5")
    assert game.fen == START_FEN
    assert game.moves == []


def test_checkmate_completes_game() -> None:
    game = GameStore().create("alice", "bob")
    for from_square, to_square in (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")):
        game.play(from_square, to_square)

    assert game.status == "completed"
    assert game.result == GameResult.BLACK_WINS
    assert game.winner == "bob"
    assert game.completed_at is not None

    with pytest.raises(GameNotActiveError):
        game.play("a2", "a3")


def test_stalemate_completes_game_as_draw() -> None:
    game = GameStore().create("alice", "bob", fen="7k/4Q3/6K1/8/8/8/8/8 w - - 0 1")
    game.play("e7", "f7")

    assert game.result == GameResult.DRAW
    assert game.winner is None


def test_ai_replies_for_its_side() -> None:
    game = GameStore().create("alice", AI_PLAYER, ai_difficulty="easy")
    assert not game.ai_to_move()

    game.play("e2", "e4")
    assert game.ai_to_move()

    reply = game.play_ai()
    assert reply is not None
    assert reply.piece != -1
    assert len(game.moves) == 2
    assert game.engine().position.side_to_move == WHITE


def test_ai_delivers_mate() -> None:
    game = GameStore().create(AI_PLAYER, "bob", fen="6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
    assert game.ai_to_move()

    move = game.play_ai()
    assert move is not None
    assert move.notation == "a1a8"
    assert game.result == GameResult.WHITE_WINS
    assert game.winner == AI_PLAYER


def test_resignation() -> None:
    game = GameStore().create("alice", "bob")
    with pytest.raises(ValueError):
        game.resign_player("mallory")

    game.resign_player("alice")
    assert game.result == GameResult.BLACK_WINS
    assert game.winner == "bob"

    with pytest.raises(GameNotActiveError):
        game.resign_player("bob")


def test_concurrent_moves_on_one_game_apply_only_one() -> None:
    previous = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        for _ in range(50):
            game = GameStore().create("alice", "bob")
            barrier = threading.Barrier(2)
            played: list[str] = []
            refused: list[str] = []

            def attempt(from_square: str, to_square: str) -> None:
                barrier.wait()
                try:
                    played.append(game.play(from_square, to_square).uci())
                except IllegalMoveError:
                    refused.append(from_square + to_square)

            threads = [
                threading.Thread(target=attempt, args=("e2", "e4")),
                threading.Thread(target=attempt, args=("d2", "d4")),
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            assert len(played) == 1
            assert len(refused) == 1
            assert game.move_history == played[0]
            assert game.fen == game.moves[0].fen
            assert game.engine().turn == "black"
    finally:
        sys.setswitchinterval(previous)
