#!/usr/bin/env python3
"""Generate Zero Rush puzzles for every difficulty and sort metadata by quality."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from zerorush import DEFAULT_CARD_RANGES, EXTENDED_CARD_RANGES, Difficulty, ZeroRushGenerator


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--per-difficulty",
        type=int,
        default=10,
        help="Number of puzzles to generate for each difficulty",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("data/zerorush"),
        help="Directory to write puzzle metadata",
    )
    parser.add_argument(
        "--metadata",
        type=Path,
        default=None,
        help="Optional path for the sorted metadata JSON",
    )
    parser.add_argument(
        "--extended-ranges",
        action="store_true",
        help="Draw from the wider 1-18 / 2-12 card ranges",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed shared by every difficulty",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    if args.per_difficulty < 1:
        raise ValueError("--per-difficulty must be at least 1")
    ranges = EXTENDED_CARD_RANGES if args.extended_ranges else DEFAULT_CARD_RANGES

    metadata_path = args.metadata or (args.output_dir / "puzzles.json")
    metadata_path.parent.mkdir(parents=True, exist_ok=True)

    records: List[dict] = []
    levels = list(Difficulty)
    for level_index, level in enumerate(levels):
        generator = ZeroRushGenerator(
            output_dir=args.output_dir,
            difficulty=level,
            ranges=ranges,
            seed=None if args.seed is None else args.seed + level_index,
        )
        for index in range(1, args.per_difficulty + 1):
            record = generator.create_random_puzzle()
            record_dict = record.to_dict()
            record_dict["quality_ratio"] = record.result.quality_ratio
            records.append(record_dict)
            print(
                f"[{level.value} {index}/{args.per_difficulty}] {record.signature} "
                f"dusk={record.result.dusk.result} dawn={record.result.dawn.result} "
                f"attempts={record.attempts_used}{' (relaxed)' if record.was_relaxed else ''}"
            )

    order = {level.value: position for position, level in enumerate(levels)}
    records.sort(key=lambda item: (order[item["difficulty"]], item["quality_ratio"], item["signature"]))

    metadata_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    print(f"Wrote {len(records)} puzzles to {metadata_path}")


if __name__ == "__main__":
    main()
