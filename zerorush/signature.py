"""Canonical signatures for Zero Rush hands.

A signature is the comma-joined list of card tokens in canonical order:
operators ``+ < - < * < /``, then numeric value (``/9`` sorts before ``/10``).
The same multiset of cards always yields the same signature, so signatures
serve as dedup keys and as the payload of share links.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .cards import Card, InvalidCardError, card_to_string, parse_card

SEPARATOR = ","

URL_ENCODING: Dict[str, str] = {
    "+": "a",
    "-": "s",
    "*": "m",
    "/": "d",
    SEPARATOR: "_",
}
URL_DECODING: Dict[str, str] = {encoded: raw for raw, encoded in URL_ENCODING.items()}


class SignatureError(ValueError):
    """Raised when a signature contains a malformed card token."""


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    return sorted(cards, key=Card.sort_key)


def to_canonical_signature(cards: Iterable[Card]) -> str:
    return SEPARATOR.join(card_to_string(card) for card in sort_cards(cards))


def signature_from_strings(tokens: Iterable[str]) -> str:
    try:
        cards = [parse_card(token) for token in tokens]
    except InvalidCardError as exc:
        raise SignatureError(str(exc)) from exc
    return to_canonical_signature(cards)


def from_signature(signature: str) -> List[Card]:
    """Parse a signature into cards, in the order they appear."""

    if not signature or not signature.strip():
        return []
    tokens = [token.strip() for token in signature.split(SEPARATOR)]
    try:
        return [parse_card(token) for token in tokens if token]
    except InvalidCardError as exc:
        raise SignatureError(f"Malformed signature {signature!r}: {exc}") from exc


def is_valid_signature(signature: str) -> bool:
    """True when ``signature`` parses to at least one card and is already canonical."""

    try:
        cards = from_signature(signature)
    except SignatureError:
        return False
    if not cards:
        return False
    return to_canonical_signature(cards) == signature


def normalize_signature(signature: str) -> str:
    return to_canonical_signature(from_signature(signature))


def puzzles_are_equivalent(first: Sequence[Card], second: Sequence[Card]) -> bool:
    if len(first) != len(second):
        return False
    return to_canonical_signature(first) == to_canonical_signature(second)


def encode_signature_for_url(signature: str) -> str:
    return "".join(URL_ENCODING.get(char, char) for char in signature)


def decode_signature_from_url(encoded: str) -> str:
    return "".join(URL_DECODING.get(char, char) for char in encoded)


def signature_short_hash(signature: str) -> str:
    """Six-character display id for a signature. Not a security hash."""

    value = 0
    for char in signature:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return _to_base36(abs(value))[:6].upper()


def _to_base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return "".join(reversed(out))


__all__ = [
    "SEPARATOR",
    "SignatureError",
    "decode_signature_from_url",
    "encode_signature_for_url",
    "from_signature",
    "is_valid_signature",
    "normalize_signature",
    "puzzles_are_equivalent",
    "signature_from_strings",
    "signature_short_hash",
    "sort_cards",
    "to_canonical_signature",
]
