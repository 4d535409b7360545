"""Perft utilities for move generation correctness checks."""

from __future__ import annotations

from .movegen import generate_legal_moves
from .position import Position


def perft(position: Position, depth: int) -> int:
    if depth < 0:
        raise ValueError("Depth must be >= 0")
    if depth == 0:
        return 1

    moves = generate_legal_moves(position)
    if depth == 1:
        return len(moves)

    nodes = 0
    for move in moves:
        snapshot = position.snapshot()
        position.make_move(move)
        nodes += perft(position, depth - 1)
        position.restore(snapshot)
    return nodes


def perft_divide(position: Position, depth: int) -> dict[str, int]:
    if depth < 1:
        raise ValueError("Depth must be >= 1 for perft divide")

    result: dict[str, int] = {}
    for move in generate_legal_moves(position):
        snapshot = position.snapshot()
        position.make_move(move)
        count = perft(position, depth - 1)
        position.restore(snapshot)
        result[move.uci()] = count
    return dict(sorted(result.items()))
