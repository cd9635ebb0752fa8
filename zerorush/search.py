"""Arrangement search: which orderings of a hand get evaluated.

Hands of up to ``EXHAUSTIVE_THRESHOLD`` cards (720 orderings at 6 cards) are
enumerated completely. Larger hands are sampled, since 10 cards would mean
3,628,800 orderings.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Set, Tuple, TypeVar

from .cards import EXHAUSTIVE_THRESHOLD, SAMPLE_SIZE, Card, card_to_string

T = TypeVar("T")

Arrangement = Tuple[Card, ...]


def permute(items: Sequence[T]) -> List[Tuple[T, ...]]:
    """All orderings of ``items`` via Heap's algorithm.

    The working list is swapped in place; each emitted ordering is a tuple
    snapshot, so later swaps never alter earlier results.
    """

    working = list(items)
    if not working:
        return []
    result: List[Tuple[T, ...]] = []

    def heap_permute(n: int) -> None:
        if n == 1:
            result.append(tuple(working))
            return
        for i in range(n):
            heap_permute(n - 1)
            if n % 2 == 0:
                working[i], working[n - 1] = working[n - 1], working[i]
            else:
                working[0], working[n - 1] = working[n - 1], working[0]

    heap_permute(len(working))
    return result


def _ordering_key(arrangement: Sequence[Card]) -> Tuple[str, ...]:
    return tuple(card_to_string(card) for card in arrangement)


def sample_arrangements(
    hand: Sequence[Card],
    sample_size: int = SAMPLE_SIZE,
    *,
    rng: Optional[random.Random] = None,
) -> List[Arrangement]:
    """Up to ``sample_size`` distinct orderings drawn by Fisher-Yates shuffles.

    At most ``2 * sample_size`` shuffles are tried, so fewer samples may come back.
    """

    if not hand or sample_size <= 0:
        return []
    rng = rng or random.Random()
    samples: List[Arrangement] = []
    seen: Set[Tuple[str, ...]] = set()
    working = list(hand)
    for _ in range(sample_size * 2):
        if len(samples) >= sample_size:
            break
        rng.shuffle(working)
        key = _ordering_key(working)
        if key in seen:
            continue
        seen.add(key)
        samples.append(tuple(working))
    return samples


def is_exhaustive(hand_size: int) -> bool:
    return hand_size <= EXHAUSTIVE_THRESHOLD


def arrangements_for(
    hand: Sequence[Card],
    *,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Arrangement], bool]:
    """Return the orderings to evaluate and whether they are exhaustive."""

    if not hand:
        return [], True
    if is_exhaustive(len(hand)):
        return permute(hand), True
    return sample_arrangements(hand, SAMPLE_SIZE, rng=rng), False


__all__ = [
    "Arrangement",
    "arrangements_for",
    "is_exhaustive",
    "permute",
    "sample_arrangements",
]
