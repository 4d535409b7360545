"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter

from loguru import logger

from .attacks import is_check
from .evaluation import evaluate
from .move import Move
from .movegen import generate_legal_moves
from .position import Position

MATE_SCORE = 10_000
INFINITY = 1_000_000


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DEFAULT_DEPTHS = {
    Difficulty.EASY.value: 1,
    Difficulty.MEDIUM.value: 2,
    Difficulty.HARD.value: 3,
}


@dataclass(slots=True)
class CandidateScore:
    move: str
    score: int


@dataclass(slots=True)
class SearchResult:
    best_move: Move | None
    score: int
    depth: int
    nodes: int
    cutoffs: int
    elapsed_ms: float
    candidates: list[CandidateScore] = field(default_factory=list)


class SearchEngine:
    """Chooses a move for the side to move.

    Every branch is played on the caller's position and rolled back from a
    snapshot, so the position must not be touched by anyone else while a
    search runs.
    """

    def __init__(self, depths: Mapping[str, int] | None = None) -> None:
        self.depths = dict(DEFAULT_DEPTHS)
        if depths:
            self.depths.update(depths)
        self.nodes = 0
        self.cutoffs = 0

    def depth_for(self, difficulty: str | Difficulty) -> int:
        name = difficulty.value if isinstance(difficulty, Difficulty) else difficulty
        try:
            return self.depths[name]
        except KeyError as exc:
            raise ValueError(f"Unknown difficulty: {name}") from exc

    def choose_move(self, position: Position, depth: int) -> Move | None:
        return self.search(position, depth).best_move

    def choose_move_for(self, position: Position, difficulty: str | Difficulty) -> Move | None:
        return self.choose_move(position, self.depth_for(difficulty))

    def search(self, position: Position, depth: int) -> SearchResult:
        if depth < 1:
            raise ValueError("depth must be >= 1")

        self.nodes = 0
        self.cutoffs = 0
        start = perf_counter()

        best_move: Move | None = None
        best_score = -INFINITY
        candidates: list[CandidateScore] = []

        for move in generate_legal_moves(position):
            snapshot = position.snapshot()
            position.make_move(move)
            score = -self.minimax(position, depth - 1, -INFINITY, INFINITY, False)
            position.restore(snapshot)

            candidates.append(CandidateScore(move=move.uci(), score=score))
            if best_move is None or score > best_score:
                best_score = score
                best_move = move

        elapsed_ms = (perf_counter() - start) * 1000.0
        if best_move is None:
            best_score = -MATE_SCORE if is_check(position) else 0

        logger.debug(
            "depth {} best {} score {} nodes {} cutoffs {} in {:.1f} ms",
            depth,
            best_move,
            best_score,
            self.nodes,
            self.cutoffs,
            elapsed_ms,
        )
        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=depth,
            nodes=self.nodes,
            cutoffs=self.cutoffs,
            elapsed_ms=elapsed_ms,
            candidates=sorted(candidates, key=lambda item: item.score, reverse=True),
        )

    def minimax(self, position: Position, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
        """Score ``position`` for its side to move (negamax form).

        ``maximizing`` tells whether the side to move is the one the search
        was started for; scores are mover-relative either way.
        """
        self.nodes += 1

        if depth == 0:
            return evaluate(position)

        moves = generate_legal_moves(position)
        if not moves:
            return -MATE_SCORE if is_check(position) else 0

        best_score = -INFINITY
        for move in moves:
            snapshot = position.snapshot()
            position.make_move(move)
            score = -self.minimax(position, depth - 1, -beta, -alpha, not maximizing)
            position.restore(snapshot)

            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                self.cutoffs += 1
                break

        return best_score
