"""Zero Rush puzzle analysis and generation toolkit."""

__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "Card",
    "CardRange",
    "CardRanges",
    "DEFAULT_CARD_RANGES",
    "EXTENDED_CARD_RANGES",
    "Difficulty",
    "InvalidCardError",
    "parse_card",
    "EvaluationResult",
    "evaluate",
    "evaluate_many",
    "is_valid_answer",
    "SignatureError",
    "to_canonical_signature",
    "from_signature",
    "is_valid_signature",
    "puzzles_are_equivalent",
    "encode_signature_for_url",
    "decode_signature_from_url",
    "permute",
    "sample_arrangements",
    "arrangements_for",
    "PuzzleQuality",
    "PuzzleResult",
    "Target",
    "generate_answers",
    "GenerationOptions",
    "GenerationResult",
    "find_good_puzzle",
    "find_good_puzzle_for_difficulty",
    "ZeroRushGenerator",
    "ZeroRushPuzzleRecord",
    "ZeroRushEvaluator",
    "SubmissionEvaluation",
    "DecodedPuzzle",
    "decode_puzzle",
    "decode_puzzle_path",
    "encode_puzzle_path",
]

from .base import AbstractPuzzleGenerator, AbstractPuzzleEvaluator
from .cards import (
    Card,
    CardRange,
    CardRanges,
    DEFAULT_CARD_RANGES,
    EXTENDED_CARD_RANGES,
    Difficulty,
    InvalidCardError,
    parse_card,
)
from .arithmetic import EvaluationResult, evaluate, evaluate_many, is_valid_answer
from .signature import (
    SignatureError,
    to_canonical_signature,
    from_signature,
    is_valid_signature,
    puzzles_are_equivalent,
    encode_signature_for_url,
    decode_signature_from_url,
)
from .search import permute, sample_arrangements, arrangements_for
from .analyzer import PuzzleQuality, PuzzleResult, Target, generate_answers
from .generator import (
    GenerationOptions,
    GenerationResult,
    find_good_puzzle,
    find_good_puzzle_for_difficulty,
    ZeroRushGenerator,
    ZeroRushPuzzleRecord,
)
from .evaluator import ZeroRushEvaluator, SubmissionEvaluation
from .sharing import DecodedPuzzle, decode_puzzle, decode_puzzle_path, encode_puzzle_path
