"""Zero Rush puzzle generator.

Hands are drawn without replacement from a deck synthesized from per-operator
value ranges, analysed, and redrawn until one meets the quality bar. After
``max_attempts`` draws the ratio threshold is loosened and a unique Dawn is no
longer required; after ``2 * max_attempts`` one last hand is returned as is.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .analyzer import PuzzleResult, generate_answers
from .base import AbstractPuzzleGenerator, PathLike
from .cards import (
    DEFAULT_CARD_RANGES,
    EXTENDED_CARD_RANGES,
    MAX_GENERATION_ATTEMPTS,
    OPERATORS,
    QUALITY_THRESHOLD,
    RELAXED_QUALITY_THRESHOLD,
    Card,
    CardRanges,
    Difficulty,
    Hand,
    cards_to_strings,
)
from .sharing import encode_puzzle_path, puzzle_token
from .signature import signature_short_hash, to_canonical_signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOptions:
    card_count: int = 6
    require_zero: bool = True
    require_good: bool = True
    max_attempts: int = MAX_GENERATION_ATTEMPTS
    ranges: CardRanges = DEFAULT_CARD_RANGES

    def __post_init__(self) -> None:
        if self.card_count < 1:
            raise ValueError("card_count must be at least 1")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def for_difficulty(
        cls,
        difficulty: Union[Difficulty, str],
        *,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
        ranges: CardRanges = DEFAULT_CARD_RANGES,
    ) -> "GenerationOptions":
        config = Difficulty(difficulty).config
        return cls(
            card_count=config.cards,
            require_zero=config.zero_guarantee,
            require_good=True,
            max_attempts=max_attempts,
            ranges=ranges,
        )


@dataclass(frozen=True)
class GenerationResult:
    hand: Hand
    result: PuzzleResult
    attempts_used: int
    was_relaxed: bool


def build_deck(ranges: CardRanges = DEFAULT_CARD_RANGES) -> List[Card]:
    """Every operator paired with every value in that operator's range."""
    return [
        Card(operator=operator, value=value)
        for operator in OPERATORS
        for value in ranges.for_operator(operator).values()
    ]


def draw_hand(
    card_count: int = 6,
    ranges: CardRanges = DEFAULT_CARD_RANGES,
    *,
    rng: Optional[random.Random] = None,
) -> Hand:
    """Draw without replacement; the hand is shorter if the deck runs out."""

    rng = rng or random.Random()
    deck = build_deck(ranges)
    hand: List[Card] = []
    while len(hand) < card_count and deck:
        hand.append(deck.pop(rng.randrange(len(deck))))
    return tuple(hand)


def _rejection_reason(
    result: PuzzleResult,
    options: GenerationOptions,
    threshold: float,
    relaxed: bool,
) -> Optional[str]:
    if not result.has_valid_answers:
        return "no valid spread"
    if result.quality_ratio > threshold:
        return f"quality ratio {result.quality_ratio:.2f} > {threshold}"
    if options.require_zero and not result.has_zero:
        return "dusk is not zero"
    if options.require_good and not result.is_good and not relaxed:
        return "dawn is not unique"
    return None


def find_good_puzzle(
    options: Optional[GenerationOptions] = None,
    *,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """Draw and analyse hands until one is acceptable; never raises."""

    options = options or GenerationOptions()
    rng = rng or random.Random()
    threshold = QUALITY_THRESHOLD
    relaxed = False
    attempts = 0

    while attempts < options.max_attempts * 2:
        attempts += 1
        if attempts > options.max_attempts and not relaxed:
            threshold = RELAXED_QUALITY_THRESHOLD
            relaxed = True
            logger.info(
                "No puzzle found in %d attempts; relaxing threshold to %d",
                options.max_attempts,
                threshold,
            )

        hand = draw_hand(options.card_count, options.ranges, rng=rng)
        result = generate_answers(hand, rng=rng)
        reason = _rejection_reason(result, options, threshold, relaxed)
        if reason is not None:
            logger.debug("Attempt %d rejected %s: %s", attempts, cards_to_strings(hand), reason)
            continue

        logger.debug("Attempt %d accepted %s", attempts, to_canonical_signature(hand))
        return GenerationResult(hand=hand, result=result, attempts_used=attempts, was_relaxed=relaxed)

    logger.warning(
        "Exhausted %d attempts for a %d-card puzzle; returning an unchecked hand",
        attempts,
        options.card_count,
    )
    hand = draw_hand(options.card_count, options.ranges, rng=rng)
    return GenerationResult(
        hand=hand,
        result=generate_answers(hand, rng=rng),
        attempts_used=attempts,
        was_relaxed=True,
    )


def find_good_puzzle_for_difficulty(
    difficulty: Union[Difficulty, str],
    *,
    rng: Optional[random.Random] = None,
    ranges: CardRanges = DEFAULT_CARD_RANGES,
    max_attempts: int = MAX_GENERATION_ATTEMPTS,
) -> GenerationResult:
    options = GenerationOptions.for_difficulty(difficulty, max_attempts=max_attempts, ranges=ranges)
    return find_good_puzzle(options, rng=rng)


@dataclass
class ZeroRushPuzzleRecord:
    id: str
    difficulty: Difficulty
    cards: List[Card]
    signature: str
    token: str
    share_path: str
    short_hash: str
    result: PuzzleResult
    attempts_used: int = 0
    was_relaxed: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "difficulty": self.difficulty.value,
            "cards": cards_to_strings(self.cards),
            "signature": self.signature,
            "token": self.token,
            "share_path": self.share_path,
            "short_hash": self.short_hash,
            "dusk": self.result.dusk.result,
            "dawn": self.result.dawn.result,
            "analysis": self.result.to_dict(),
            "attempts_used": self.attempts_used,
            "was_relaxed": self.was_relaxed,
        }


class ZeroRushGenerator(AbstractPuzzleGenerator[ZeroRushPuzzleRecord]):
    """Generate Zero Rush puzzles for one difficulty and store them as JSON records."""

    def __init__(
        self,
        output_dir: PathLike = "data/zerorush",
        *,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        ranges: CardRanges = DEFAULT_CARD_RANGES,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(output_dir, seed=seed)
        self.difficulty = Difficulty(difficulty)
        self.options = GenerationOptions.for_difficulty(
            self.difficulty, max_attempts=max_attempts, ranges=ranges
        )

    def create_puzzle(
        self,
        *,
        cards: Optional[Sequence[Card]] = None,
        difficulty: Union[Difficulty, str, None] = None,
        puzzle_id: Optional[str] = None,
    ) -> ZeroRushPuzzleRecord:
        """Build a record from ``cards``, or search for a new hand when none are given."""

        level = Difficulty(difficulty) if difficulty is not None else self.difficulty
        if cards is None:
            options = self.options
            if level != self.difficulty:
                options = GenerationOptions.for_difficulty(
                    level, max_attempts=self.options.max_attempts, ranges=self.options.ranges
                )
            generated = find_good_puzzle(options, rng=self._rng)
            hand, result = list(generated.hand), generated.result
            attempts, relaxed = generated.attempts_used, generated.was_relaxed
        else:
            hand = list(cards)
            result = generate_answers(hand, rng=self._rng)
            attempts, relaxed = 0, False

        signature = to_canonical_signature(hand)
        return ZeroRushPuzzleRecord(
            id=puzzle_id or str(uuid.uuid4()),
            difficulty=level,
            cards=hand,
            signature=signature,
            token=puzzle_token(hand),
            share_path=encode_puzzle_path(hand, level),
            short_hash=signature_short_hash(signature),
            result=result,
            attempts_used=attempts,
            was_relaxed=relaxed,
        )

    def create_random_puzzle(self) -> ZeroRushPuzzleRecord:
        return self.create_puzzle()


__all__ = [
    "GenerationOptions",
    "GenerationResult",
    "ZeroRushGenerator",
    "ZeroRushPuzzleRecord",
    "build_deck",
    "draw_hand",
    "find_good_puzzle",
    "find_good_puzzle_for_difficulty",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate Zero Rush puzzles")
    parser.add_argument("count", type=int, help="Number of puzzles to generate")
    parser.add_argument(
        "--difficulty",
        choices=[level.value for level in Difficulty],
        default=Difficulty.MEDIUM.value,
    )
    parser.add_argument("--output-dir", type=Path, default=Path("data/zerorush"), help="Where to save metadata")
    parser.add_argument("--extended-ranges", action="store_true", help="Use the wider 1-18 / 2-12 card ranges")
    parser.add_argument("--max-attempts", type=int, default=MAX_GENERATION_ATTEMPTS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log every generation attempt")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    generator = ZeroRushGenerator(
        output_dir=args.output_dir,
        difficulty=args.difficulty,
        ranges=EXTENDED_CARD_RANGES if args.extended_ranges else DEFAULT_CARD_RANGES,
        max_attempts=args.max_attempts,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    records = generator.generate_dataset(args.count, metadata_path=metadata_path)
    summary = [
        {"id": record.id, "signature": record.signature, "dusk": record.result.dusk.result, "dawn": record.result.dawn.result}
        for record in records
    ]
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
