"""Cards, card ranges and difficulty settings shared by the Zero Rush engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple

PLUS = "+"
MINUS = "-"
MULTIPLY = "*"
DIVIDE = "/"

OPERATORS: Tuple[str, ...] = (PLUS, MINUS, MULTIPLY, DIVIDE)

# Canonical sort rank: + < - < * < /
OPERATOR_ORDER: Dict[str, int] = {op: rank for rank, op in enumerate(OPERATORS)}

# Glyphs accepted on input and normalised to the canonical operator.
OPERATOR_ALIASES: Dict[str, str] = {
    "÷": DIVIDE,
    "×": MULTIPLY,
    "−": MINUS,
}

OPERATOR_DISPLAY: Dict[str, str] = {
    PLUS: "+",
    MINUS: "−",
    MULTIPLY: "×",
    DIVIDE: "÷",
}

QUALITY_THRESHOLD = 5
RELAXED_QUALITY_THRESHOLD = 10
MAX_GENERATION_ATTEMPTS = 100

EXHAUSTIVE_THRESHOLD = 6
SAMPLE_SIZE = 5000

# Largest card value a float64 holds exactly.
MAX_CARD_VALUE = 2 ** 53


class InvalidCardError(ValueError):
    """Raised when a card token cannot be parsed."""


@dataclass(frozen=True)
class Card:
    operator: str
    value: int

    def __post_init__(self) -> None:
        if self.operator not in OPERATOR_ORDER:
            raise InvalidCardError(f"Invalid operator: {self.operator!r}")
        if self.value > MAX_CARD_VALUE:
            raise InvalidCardError(f"Card value too large: {self.value}")
        if self.operator == DIVIDE and self.value == 0:
            raise InvalidCardError("Division cards must not have the value 0")

    def __str__(self) -> str:
        return card_to_string(self)

    def sort_key(self) -> Tuple[int, int]:
        return OPERATOR_ORDER[self.operator], self.value

    def to_dict(self) -> dict:
        return {"operator": self.operator, "value": self.value}

    @classmethod
    def from_dict(cls, payload: dict) -> "Card":
        operator = OPERATOR_ALIASES.get(payload["operator"], payload["operator"])
        return cls(operator=operator, value=int(payload["value"]))


Hand = Tuple[Card, ...]


def card_to_string(card: Card) -> str:
    """Return the hashable ``operator+numeral`` form, e.g. ``"/4"``."""
    return f"{card.operator}{card.value}"


def parse_card(token: str) -> Card:
    """Parse a card token such as ``"+3"`` or ``"÷4"``."""

    token = token.strip()
    if not token:
        raise InvalidCardError("Empty card token")
    operator = OPERATOR_ALIASES.get(token[0], token[0])
    if operator not in OPERATOR_ORDER:
        raise InvalidCardError(f"Invalid operator: {token[0]!r} in {token!r}")
    digits = token[1:]
    if not digits.isdigit() or not digits.isascii():
        raise InvalidCardError(f"Invalid card value: {token!r}")
    return Card(operator=operator, value=int(digits))


def parse_cards(tokens: Iterable[str]) -> List[Card]:
    return [parse_card(token) for token in tokens]


def cards_to_strings(cards: Iterable[Card]) -> List[str]:
    return [card_to_string(card) for card in cards]


def format_card(card: Card, *, is_first: bool = False) -> str:
    """Display form of a card; the first card of an arrangement shows its number only."""

    if is_first:
        return str(card.value)
    return f"{OPERATOR_DISPLAY[card.operator]}{card.value}"


@dataclass(frozen=True)
class CardRange:
    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"Card range min ({self.min}) exceeds max ({self.max})")

    def values(self) -> range:
        return range(self.min, self.max + 1)


@dataclass(frozen=True)
class CardRanges:
    """Value ranges used to synthesize the deck, one per operator."""

    plus: CardRange
    minus: CardRange
    multiply: CardRange
    divide: CardRange

    def __post_init__(self) -> None:
        if self.divide.min <= 0 <= self.divide.max:
            raise ValueError("Division cards must not include the value 0")

    def for_operator(self, operator: str) -> CardRange:
        return {
            PLUS: self.plus,
            MINUS: self.minus,
            MULTIPLY: self.multiply,
            DIVIDE: self.divide,
        }[operator]


DEFAULT_CARD_RANGES = CardRanges(
    plus=CardRange(1, 9),
    minus=CardRange(1, 9),
    multiply=CardRange(2, 9),
    divide=CardRange(2, 9),
)

EXTENDED_CARD_RANGES = CardRanges(
    plus=CardRange(1, 18),
    minus=CardRange(1, 18),
    multiply=CardRange(2, 12),
    divide=CardRange(2, 12),
)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    CHALLENGER = "challenger"

    @property
    def config(self) -> "DifficultyConfig":
        return DIFFICULTY_CONFIG[self]


@dataclass(frozen=True)
class DifficultyConfig:
    cards: int
    zero_guarantee: bool
    hints_available: bool
    description: str


DIFFICULTY_CONFIG: Dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(4, True, True, "For newcomers, casual play"),
    Difficulty.MEDIUM: DifficultyConfig(6, True, True, "Balanced challenge"),
    Difficulty.HARD: DifficultyConfig(8, False, True, "For experienced players"),
    Difficulty.CHALLENGER: DifficultyConfig(10, False, False, "Must be unlocked; brutal"),
}


__all__ = [
    "Card",
    "CardRange",
    "CardRanges",
    "DEFAULT_CARD_RANGES",
    "DIFFICULTY_CONFIG",
    "DIVIDE",
    "Difficulty",
    "DifficultyConfig",
    "EXHAUSTIVE_THRESHOLD",
    "EXTENDED_CARD_RANGES",
    "Hand",
    "InvalidCardError",
    "MAX_CARD_VALUE",
    "MAX_GENERATION_ATTEMPTS",
    "MINUS",
    "MULTIPLY",
    "OPERATORS",
    "OPERATOR_ALIASES",
    "OPERATOR_DISPLAY",
    "OPERATOR_ORDER",
    "PLUS",
    "QUALITY_THRESHOLD",
    "RELAXED_QUALITY_THRESHOLD",
    "SAMPLE_SIZE",
    "card_to_string",
    "cards_to_strings",
    "format_card",
    "parse_card",
    "parse_cards",
]
