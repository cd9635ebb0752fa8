"""Puzzle analysis: find the Dusk (lowest) and Dawn (highest) targets of a hand."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from .arithmetic import evaluate_many
from .cards import Card
from .search import arrangements_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """One extremum of a puzzle and the first arrangement found to reach it."""

    result: int
    arrangement: Tuple[Card, ...] = ()
    permutation_count: int = 0
    float_detected: bool = False

    def to_dict(self) -> dict:
        return {
            "result": self.result,
            "arrangement": [card.to_dict() for card in self.arrangement],
            "permutation_count": self.permutation_count,
            "float_detected": self.float_detected,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Target":
        return cls(
            result=int(payload["result"]),
            arrangement=tuple(Card.from_dict(card) for card in payload.get("arrangement", [])),
            permutation_count=int(payload.get("permutation_count", 0)),
            float_detected=bool(payload.get("float_detected", False)),
        )


class PuzzleQuality(str, Enum):
    INVALID = "invalid"
    PERFECT = "perfect"
    HAS_ZERO = "has_zero"
    IS_GOOD = "is_good"
    PLAYABLE = "playable"


@dataclass(frozen=True)
class PuzzleResult:
    has_valid_answers: bool
    is_good: bool
    has_zero: bool
    total_permutations: int
    unique_answers: int
    dusk: Target = field(default_factory=lambda: Target(result=0))
    dawn: Target = field(default_factory=lambda: Target(result=0))

    @classmethod
    def invalid(cls) -> "PuzzleResult":
        return cls(
            has_valid_answers=False,
            is_good=False,
            has_zero=False,
            total_permutations=0,
            unique_answers=0,
        )

    @property
    def quality_ratio(self) -> float:
        """Arrangements examined per distinct valid answer; lower is more interesting."""
        if self.unique_answers == 0:
            return math.inf
        return self.total_permutations / self.unique_answers

    @property
    def quality(self) -> PuzzleQuality:
        if not self.has_valid_answers:
            return PuzzleQuality.INVALID
        if self.has_zero and self.is_good:
            return PuzzleQuality.PERFECT
        if self.has_zero:
            return PuzzleQuality.HAS_ZERO
        if self.is_good:
            return PuzzleQuality.IS_GOOD
        return PuzzleQuality.PLAYABLE

    def to_dict(self) -> dict:
        return {
            "has_valid_answers": self.has_valid_answers,
            "is_good": self.is_good,
            "has_zero": self.has_zero,
            "total_permutations": self.total_permutations,
            "unique_answers": self.unique_answers,
            "quality": self.quality.value,
            "dusk": self.dusk.to_dict(),
            "dawn": self.dawn.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "PuzzleResult":
        return cls(
            has_valid_answers=bool(payload["has_valid_answers"]),
            is_good=bool(payload["is_good"]),
            has_zero=bool(payload["has_zero"]),
            total_permutations=int(payload["total_permutations"]),
            unique_answers=int(payload["unique_answers"]),
            dusk=Target.from_dict(payload["dusk"]),
            dawn=Target.from_dict(payload["dawn"]),
        )


def generate_answers(
    hand: Sequence[Card],
    *,
    rng: Optional[random.Random] = None,
) -> PuzzleResult:
    """Evaluate every arrangement of ``hand`` and summarise the valid answers.

    Exhaustive search is used for hands of up to six cards, sampling above
    that. Under sampling a unique Dawn cannot be confirmed, so ``is_good`` is
    reported as ``True``.
    """

    if not hand:
        return PuzzleResult.invalid()

    arrangements, exhaustive = arrangements_for(hand, rng=rng)
    batch = evaluate_many(arrangements)
    valid_rows = np.flatnonzero(batch.valid_mask())

    # Values come back sorted; first_seen indexes the first row reaching each value.
    values, first_seen, counts = np.unique(
        batch.answers[valid_rows], return_index=True, return_counts=True
    )
    if values.size < 2:
        logger.debug(
            "Hand %s has %d distinct valid answer(s); invalid puzzle",
            [str(card) for card in hand],
            values.size,
        )
        return PuzzleResult.invalid()

    def target_at(position: int) -> Target:
        row = int(valid_rows[first_seen[position]])
        return Target(
            result=int(values[position]),
            arrangement=tuple(arrangements[row]),
            permutation_count=int(counts[position]),
            float_detected=bool(batch.float_detected[row]),
        )

    dusk = target_at(0)
    dawn = target_at(values.size - 1)
    return PuzzleResult(
        has_valid_answers=True,
        is_good=dawn.permutation_count == 1 if exhaustive else True,
        has_zero=dusk.result == 0,
        total_permutations=len(arrangements),
        unique_answers=int(values.size),
        dusk=dusk,
        dawn=dawn,
    )


__all__ = ["PuzzleQuality", "PuzzleResult", "Target", "generate_answers"]
