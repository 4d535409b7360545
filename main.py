"""Command-line utilities for the chess engine."""

from __future__ import annotations

import argparse

from chesscore.config import load_config
from chesscore.constants import START_FEN
from chesscore.engine import ChessEngine
from chesscore.logs import setup_logging
from chesscore.perft import perft, perft_divide


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chess engine utilities")
    parser.add_argument("--fen", default=START_FEN, help="Position notation")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", required=False)

    perft_parser = subparsers.add_parser("perft", help="Run perft")
    perft_parser.add_argument("depth", type=int, help="Perft depth")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")

    search_parser = subparsers.add_parser("search", help="Choose a move with minimax search")
    group = search_parser.add_mutually_exclusive_group()
    group.add_argument("--depth", type=int, default=None, help="Search depth")
    group.add_argument("--difficulty", default=None, help="Difficulty tier (easy, medium, hard)")

    subparsers.add_parser("status", help="Classify the position")

    legal_parser = subparsers.add_parser("legal", help="List legal moves")
    legal_parser.add_argument("square", nargs="?", default=None, help="Only moves from this square")

    return parser


def run() -> None:
    parser = build_parser()
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(args.log_level or config.log_level, config.log_file)

    try:
        engine = ChessEngine(args.fen, config.difficulty_depths)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "perft":
        if args.divide:
            for move, count in perft_divide(engine.position, args.depth).items():
                print(f"{move}: {count}")
        else:
            print(perft(engine.position, args.depth))
        return

    if args.command == "search":
        try:
            depth = args.depth
            if depth is None:
                depth = engine.searcher.depth_for(args.difficulty or config.default_difficulty)
            result = engine.searcher.search(engine.position, depth)
        except ValueError as exc:
            parser.error(str(exc))
        print(f"bestmove {result.best_move.uci() if result.best_move else '0000'}")
        print(f"depth {result.depth} score {result.score} nodes {result.nodes} cutoffs {result.cutoffs}")
        return

    if args.command == "status":
        print(engine.status().value)
        return

    if args.command == "legal":
        if args.square:
            try:
                targets = engine.valid_moves(args.square)
            except ValueError as exc:
                parser.error(str(exc))
            print(" ".join(targets))
        else:
            print(" ".join(move.uci() for move in engine.legal_moves()))
        return

    print(engine.position)


if __name__ == "__main__":
    run()
