"""Check player arrangements against stored Zero Rush puzzles."""

from __future__ import annotations

import argparse
import json
import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .analyzer import generate_answers
from .arithmetic import evaluate, evaluation_steps
from .base import AbstractPuzzleEvaluator, PathLike
from .cards import Card, card_to_string, parse_card
from .signature import SignatureError, from_signature

logger = logging.getLogger(__name__)


@dataclass
class SubmissionEvaluation:
    puzzle_id: str
    answer: float
    is_valid: bool
    matches_dusk: bool
    matches_dawn: bool
    float_detected: bool
    steps: str
    message: str

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "answer": self.answer,
            "is_valid": self.is_valid,
            "matches_dusk": self.matches_dusk,
            "matches_dawn": self.matches_dawn,
            "float_detected": self.float_detected,
            "steps": self.steps,
            "message": self.message,
        }


class ZeroRushEvaluator(AbstractPuzzleEvaluator):
    """Evaluate a submitted ordering of a puzzle's cards against its Dusk and Dawn."""

    def __init__(self, metadata_path: PathLike) -> None:
        super().__init__(metadata_path)
        self._targets: Dict[str, Tuple[int, int]] = {}

    def evaluate(
        self,
        puzzle_id: str,
        arrangement: Union[str, Sequence[Card], Sequence[str]],
    ) -> SubmissionEvaluation:
        record = self.get_record(puzzle_id)
        hand = self._hand(record)
        cards = self._coerce_arrangement(arrangement)
        if Counter(map(card_to_string, cards)) != Counter(map(card_to_string, hand)):
            raise ValueError(
                f"Arrangement {[card_to_string(c) for c in cards]} does not use the cards of puzzle '{puzzle_id}'"
            )

        dusk, dawn = self.targets(puzzle_id)
        result = evaluate(cards)
        is_valid = result.is_valid
        matches_dusk = is_valid and result.answer == dusk
        matches_dawn = is_valid and result.answer == dawn

        if not is_valid:
            message = "Result is not a whole number of zero or more."
        elif matches_dusk:
            message = "Dusk found."
        elif matches_dawn:
            message = "Dawn found."
        else:
            message = f"Valid result, but Dusk is {dusk} and Dawn is {dawn}."

        return SubmissionEvaluation(
            puzzle_id=puzzle_id,
            answer=result.answer,
            is_valid=is_valid,
            matches_dusk=matches_dusk,
            matches_dawn=matches_dawn,
            float_detected=result.float_detected,
            steps=evaluation_steps(cards),
            message=message,
        )

    def targets(self, puzzle_id: str) -> Tuple[int, int]:
        """Dusk and Dawn values, recomputed from the hand when the record lacks them."""

        if puzzle_id not in self._targets:
            record = self.get_record(puzzle_id)
            if "dusk" in record and "dawn" in record:
                self._targets[puzzle_id] = (int(record["dusk"]), int(record["dawn"]))
            else:
                logger.debug("Record %s has no stored targets; analysing hand", puzzle_id)
                result = generate_answers(self._hand(record))
                self._targets[puzzle_id] = (result.dusk.result, result.dawn.result)
        return self._targets[puzzle_id]

    @staticmethod
    def _hand(record: Dict[str, Any]) -> List[Card]:
        if "cards" in record:
            return [parse_card(token) for token in record["cards"]]
        try:
            return from_signature(record["signature"])
        except KeyError as exc:
            raise ValueError(f"Puzzle '{record.get('id')}' has neither cards nor a signature") from exc

    @staticmethod
    def _coerce_arrangement(arrangement: Union[str, Sequence[Card], Sequence[str]]) -> List[Card]:
        if isinstance(arrangement, str):
            return from_signature(arrangement)
        return [item if isinstance(item, Card) else parse_card(item) for item in arrangement]


__all__ = ["ZeroRushEvaluator", "SubmissionEvaluation"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a Zero Rush submission")
    parser.add_argument("metadata", type=Path, help="Path to puzzles metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the puzzle to evaluate")
    parser.add_argument("arrangement", type=str, help='Cards in play order, e.g. "+9,+1,/2,-5"')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    evaluator = ZeroRushEvaluator(args.metadata)
    try:
        result = evaluator.evaluate(args.puzzle_id, args.arrangement)
    except SignatureError as exc:
        raise SystemExit(f"Invalid arrangement: {exc}") from exc
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
