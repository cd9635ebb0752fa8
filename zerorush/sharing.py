"""Share links of the form ``/play/<difficulty>/<token>``.

The token is the URL-safe form of the hand's canonical signature. Decoding
recomputes Dusk and Dawn from the cards instead of trusting the link, and
returns ``None`` for anything that does not round-trip cleanly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .analyzer import generate_answers
from .cards import Card, Difficulty
from .signature import (
    SignatureError,
    decode_signature_from_url,
    encode_signature_for_url,
    from_signature,
    is_valid_signature,
    to_canonical_signature,
)

_PATH_RE = re.compile(r"^/play/([^/]+)/([^/]+)$")


@dataclass(frozen=True)
class DecodedPuzzle:
    cards: List[Card]
    difficulty: Difficulty
    signature: str
    dusk_value: int
    dawn_value: int

    def to_dict(self) -> dict:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "difficulty": self.difficulty.value,
            "signature": self.signature,
            "dusk_value": self.dusk_value,
            "dawn_value": self.dawn_value,
        }


def puzzle_token(cards: Sequence[Card]) -> str:
    return encode_signature_for_url(to_canonical_signature(cards))


def encode_puzzle_path(cards: Sequence[Card], difficulty: Union[Difficulty, str]) -> str:
    """e.g. ``/play/medium/a3_s5_m2_d4``"""
    return f"/play/{Difficulty(difficulty).value}/{puzzle_token(cards)}"


def decode_puzzle(difficulty: str, token: str) -> Optional[DecodedPuzzle]:
    try:
        level = Difficulty(difficulty)
    except ValueError:
        return None

    signature = decode_signature_from_url(token)
    if not is_valid_signature(signature):
        return None
    try:
        cards = from_signature(signature)
    except SignatureError:
        return None

    result = generate_answers(cards)
    if not result.has_valid_answers:
        return None
    return DecodedPuzzle(
        cards=cards,
        difficulty=level,
        signature=signature,
        dusk_value=result.dusk.result,
        dawn_value=result.dawn.result,
    )


def decode_puzzle_path(path: str) -> Optional[DecodedPuzzle]:
    match = _PATH_RE.match(path)
    if not match:
        return None
    return decode_puzzle(match.group(1), match.group(2))


def is_puzzle_path(path: str) -> bool:
    return decode_puzzle_path(path) is not None


__all__ = [
    "DecodedPuzzle",
    "decode_puzzle",
    "decode_puzzle_path",
    "encode_puzzle_path",
    "is_puzzle_path",
    "puzzle_token",
]
