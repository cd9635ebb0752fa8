"""Left-to-right arithmetic evaluation of card arrangements.

Rules:

* evaluation is strictly left to right, with no operator precedence;
* the first card's operator is ignored and only its number seeds the total;
* only non-negative whole numbers count as answers (0 included).

``evaluate`` handles one arrangement. ``evaluate_many`` applies the same rule
to a whole batch of equal-length arrangements with numpy, which is how the
analyzer scores hundreds or thousands of orderings per hand.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .cards import (
    DIVIDE,
    MINUS,
    MULTIPLY,
    OPERATOR_ORDER,
    PLUS,
    Card,
    format_card,
    parse_cards,
)

Number = Union[int, float]

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class EvaluationResult:
    answer: float
    raw_answer: Number
    float_detected: bool
    arrangement: Tuple[Card, ...]

    @property
    def is_valid(self) -> bool:
        return is_valid_answer(self.answer)

    def to_dict(self) -> dict:
        return {
            "answer": self.answer,
            "raw_answer": self.raw_answer,
            "float_detected": self.float_detected,
            "arrangement": [card.to_dict() for card in self.arrangement],
        }


@dataclass(frozen=True)
class BatchEvaluation:
    """Column-wise results of ``evaluate_many``; row ``i`` matches arrangement ``i``."""

    answers: np.ndarray
    raw_answers: np.ndarray
    float_detected: np.ndarray

    def __len__(self) -> int:
        return int(self.answers.shape[0])

    def valid_mask(self) -> np.ndarray:
        return valid_answer_mask(self.answers)


def round_answer(value: Number) -> float:
    """Round to 2 decimals, nudged by epsilon to absorb binary float error."""
    return math.floor((value + EPSILON) * 100 + 0.5) / 100


def _apply(total: Number, card: Card) -> Number:
    if card.operator == PLUS:
        return total + card.value
    if card.operator == MINUS:
        return total - card.value
    if card.operator == MULTIPLY:
        return total * card.value
    return total / card.value


def _is_integral(value: Number) -> bool:
    return float(value).is_integer()


def evaluate(arrangement: Sequence[Card]) -> EvaluationResult:
    """Evaluate one arrangement.

    >>> evaluate(parse_cards(["+9", "+1", "/2", "-5"])).answer
    0.0
    """

    cards = tuple(arrangement)
    if not cards:
        return EvaluationResult(answer=0.0, raw_answer=0, float_detected=False, arrangement=())

    total: Number = cards[0].value
    float_detected = False
    for card in cards[1:]:
        total = _apply(total, card)
        # Sticky: a later step landing back on an integer does not clear it.
        if not _is_integral(total):
            float_detected = True

    return EvaluationResult(
        answer=round_answer(total),
        raw_answer=total,
        float_detected=float_detected,
        arrangement=cards,
    )


def evaluate_strings(tokens: Iterable[str]) -> EvaluationResult:
    return evaluate(parse_cards(tokens))


def is_valid_answer(answer: Number) -> bool:
    """True for 0 and positive whole numbers."""
    if not math.isfinite(answer):
        return False
    return answer >= 0 and float(answer).is_integer()


def valid_answer_mask(answers: np.ndarray) -> np.ndarray:
    answers = np.asarray(answers, dtype=np.float64)
    return np.isfinite(answers) & (answers >= 0) & (answers == np.floor(answers))


def _as_matrices(arrangements: Sequence[Sequence[Card]]) -> Tuple[np.ndarray, np.ndarray]:
    rows = [tuple(arrangement) for arrangement in arrangements]
    widths = {len(row) for row in rows}
    if len(widths) > 1:
        raise ValueError("All arrangements in a batch must have the same length")
    width = widths.pop() if widths else 0
    values = np.empty((len(rows), width), dtype=np.float64)
    codes = np.empty((len(rows), width), dtype=np.int8)
    for index, row in enumerate(rows):
        values[index] = [card.value for card in row]
        codes[index] = [OPERATOR_ORDER[card.operator] for card in row]
    return values, codes


def evaluate_many(arrangements: Sequence[Sequence[Card]]) -> BatchEvaluation:
    """Vectorised ``evaluate`` over equal-length arrangements."""

    values, codes = _as_matrices(arrangements)
    count, width = values.shape
    if width == 0:
        zeros = np.zeros(count, dtype=np.float64)
        return BatchEvaluation(answers=zeros, raw_answers=zeros.copy(), float_detected=np.zeros(count, dtype=bool))

    totals = values[:, 0].copy()
    float_detected = np.zeros(count, dtype=bool)
    add, sub, mul, div = (OPERATOR_ORDER[op] for op in (PLUS, MINUS, MULTIPLY, DIVIDE))
    # np.select computes every branch, including division by non-divide card values.
    with np.errstate(divide="ignore", invalid="ignore"):
        for column in range(1, width):
            operand = values[:, column]
            op = codes[:, column]
            totals = np.select(
                [op == add, op == sub, op == mul, op == div],
                [totals + operand, totals - operand, totals * operand, totals / operand],
            )
            float_detected |= totals != np.floor(totals)

    answers = np.floor((totals + EPSILON) * 100 + 0.5) / 100
    return BatchEvaluation(answers=answers, raw_answers=totals, float_detected=float_detected)


def evaluation_steps(arrangement: Sequence[Card]) -> str:
    """Step-by-step trace, e.g. ``"9 → +1 = 10 → ÷2 = 5 → −5 = 0"``."""

    cards = list(arrangement)
    if not cards:
        return ""
    parts: List[str] = [format_card(cards[0], is_first=True)]
    total: Number = cards[0].value
    for card in cards[1:]:
        total = _apply(total, card)
        parts.append(f"{format_card(card)} = {_format_number(round_answer(total))}")
    return " → ".join(parts)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "BatchEvaluation",
    "EPSILON",
    "EvaluationResult",
    "evaluate",
    "evaluate_many",
    "evaluate_strings",
    "evaluation_steps",
    "is_valid_answer",
    "round_answer",
    "valid_answer_mask",
]
