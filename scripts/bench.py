#!/usr/bin/env python3
"""Generate reproducible perft and search benchmark CSVs."""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chesscore.constants import START_FEN
from chesscore.fen import decode
from chesscore.perft import perft
from chesscore.search import DEFAULT_DEPTHS, SearchEngine


KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@dataclass(frozen=True)
class PositionCase:
    name: str
    fen: str


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def run_perft_bench(depths_by_case: dict[PositionCase, list[int]]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case, depths in depths_by_case.items():
        for depth in depths:
            position = decode(case.fen)
            start = perf_counter()
            nodes = perft(position, depth)
            elapsed_ms = (perf_counter() - start) * 1000.0
            nps = int(nodes / max(elapsed_ms / 1000.0, 1e-9))
            rows.append(
                {
                    "position": case.name,
                    "depth": depth,
                    "nodes": nodes,
                    "elapsed_ms": round(elapsed_ms, 3),
                    "nps": nps,
                }
            )
    return rows


def run_search_bench(cases: list[PositionCase], difficulties: dict[str, int]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    engine = SearchEngine(difficulties)
    for case in cases:
        for difficulty, depth in difficulties.items():
            position = decode(case.fen)
            result = engine.search(position, depth)
            nps = int(result.nodes / max(result.elapsed_ms / 1000.0, 1e-9))
            rows.append(
                {
                    "position": case.name,
                    "difficulty": difficulty,
                    "depth": depth,
                    "nodes": result.nodes,
                    "cutoffs": result.cutoffs,
                    "elapsed_ms": round(result.elapsed_ms, 3),
                    "nps": nps,
                    "best_move": result.best_move.uci() if result.best_move else "0000",
                    "eval_cp": result.score,
                }
            )
    return rows


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate chesscore benchmark CSV files")
    parser.add_argument(
        "--metrics-dir",
        default=str(ROOT / "docs" / "metrics"),
        help="Output directory for CSV metrics",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    metrics_dir = Path(args.metrics_dir)

    perft_cases = [
        PositionCase("start", START_FEN),
        PositionCase("kiwipete", KIWIPETE_FEN),
    ]
    search_cases = [
        PositionCase("start", START_FEN),
        PositionCase("open_after_e4", "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"),
    ]

    perft_rows = run_perft_bench(
        {
            perft_cases[0]: [1, 2, 3],
            perft_cases[1]: [1, 2],
        }
    )
    search_rows = run_search_bench(search_cases, DEFAULT_DEPTHS)

    perft_path = metrics_dir / "perft_metrics.csv"
    search_path = metrics_dir / "search_metrics.csv"

    _write_csv(
        perft_path,
        fieldnames=["position", "depth", "nodes", "elapsed_ms", "nps"],
        rows=perft_rows,
    )
    _write_csv(
        search_path,
        fieldnames=[
            "position",
            "difficulty",
            "depth",
            "nodes",
            "cutoffs",
            "elapsed_ms",
            "nps",
            "best_move",
            "eval_cp",
        ],
        rows=search_rows,
    )

    print(f"wrote {perft_path}")
    print(f"wrote {search_path}")


if __name__ == "__main__":
    main()
