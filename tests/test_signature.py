import random
import unittest

from zerorush.cards import MAX_CARD_VALUE, Card, InvalidCardError, parse_card, parse_cards
from zerorush.signature import (
    SignatureError,
    decode_signature_from_url,
    encode_signature_for_url,
    from_signature,
    is_valid_signature,
    normalize_signature,
    puzzles_are_equivalent,
    signature_from_strings,
    signature_short_hash,
    to_canonical_signature,
)


class CanonicalSignatureTests(unittest.TestCase):
    def test_sorts_by_operator_then_value(self) -> None:
        cards = parse_cards(["/4", "*2", "+3", "-5"])
        self.assertEqual(to_canonical_signature(cards), "+3,-5,*2,/4")

    def test_values_sort_numerically(self) -> None:
        cards = parse_cards(["+10", "+9", "+1", "/12", "/2"])
        self.assertEqual(to_canonical_signature(cards), "+1,+9,+10,/2,/12")

    def test_order_independent(self) -> None:
        rng = random.Random(5)
        hand = parse_cards(["+3", "-3", "*7", "/2", "+3", "-8", "*2", "/9"])
        expected = to_canonical_signature(hand)
        for _ in range(20):
            shuffled = list(hand)
            rng.shuffle(shuffled)
            self.assertEqual(to_canonical_signature(shuffled), expected)

    def test_round_trip_is_idempotent(self) -> None:
        hand = parse_cards(["*9", "+12", "-1", "/3", "+2", "*9"])
        signature = to_canonical_signature(hand)
        self.assertEqual(to_canonical_signature(from_signature(signature)), signature)
        self.assertEqual(sorted(from_signature(signature), key=Card.sort_key), sorted(hand, key=Card.sort_key))

    def test_divide_glyph_is_normalised(self) -> None:
        self.assertEqual(signature_from_strings(["÷4", "+3"]), "+3,/4")
        self.assertEqual(parse_card("÷4"), Card("/", 4))


class SignatureParsingTests(unittest.TestCase):
    def test_empty_signature_parses_to_no_cards(self) -> None:
        self.assertEqual(from_signature(""), [])
        self.assertEqual(from_signature("   "), [])

    def test_malformed_tokens_raise(self) -> None:
        for signature in ("+3,x5", "+3,+a", "+3,-", "+3,+-2"):
            with self.subTest(signature=signature):
                with self.assertRaises(SignatureError) as ctx:
                    from_signature(signature)
                self.assertIsInstance(ctx.exception.__cause__, InvalidCardError)

    def test_oversized_and_zero_divide_cards_are_rejected(self) -> None:
        huge = "1" + "0" * 400
        for signature in ("+1,+" + huge, "+1,/0", "+1,+2,*3,/0"):
            with self.subTest(signature=signature[:12]):
                with self.assertRaises(SignatureError):
                    from_signature(signature)
                self.assertFalse(is_valid_signature(signature))
        with self.assertRaises(InvalidCardError):
            Card("/", 0)
        with self.assertRaises(InvalidCardError):
            parse_card("+" + str(MAX_CARD_VALUE + 1))
        self.assertEqual(parse_card("+" + str(MAX_CARD_VALUE)).value, MAX_CARD_VALUE)
        self.assertEqual(parse_card("*0"), Card("*", 0))

    def test_validity_requires_canonical_order(self) -> None:
        self.assertTrue(is_valid_signature("+3,-5,*2,/4"))
        self.assertFalse(is_valid_signature("-5,+3,*2,/4"))
        self.assertFalse(is_valid_signature("+10,+9"))
        self.assertFalse(is_valid_signature(""))
        self.assertFalse(is_valid_signature("+3,?4"))
        self.assertFalse(is_valid_signature("+3,-5,"))

    def test_normalize(self) -> None:
        self.assertEqual(normalize_signature("/4,+3,-5,*2"), "+3,-5,*2,/4")

    def test_equivalence(self) -> None:
        first = parse_cards(["+1", "*3", "-2"])
        second = parse_cards(["-2", "+1", "*3"])
        self.assertTrue(puzzles_are_equivalent(first, second))
        self.assertFalse(puzzles_are_equivalent(first, second[:2]))
        self.assertFalse(puzzles_are_equivalent(first, parse_cards(["-2", "+1", "*4"])))


class UrlEncodingTests(unittest.TestCase):
    def test_known_encoding(self) -> None:
        self.assertEqual(encode_signature_for_url("+3,-5,*2,/4"), "a3_s5_m2_d4")
        self.assertEqual(decode_signature_from_url("a3_s5_m2_d4"), "+3,-5,*2,/4")

    def test_encoding_is_invertible(self) -> None:
        rng = random.Random(11)
        for _ in range(50):
            hand = [
                Card(rng.choice("+-*/"), rng.randint(1, 18))
                for _ in range(rng.choice((4, 6, 8, 10)))
            ]
            signature = to_canonical_signature(hand)
            encoded = encode_signature_for_url(signature)
            self.assertTrue(encoded.replace("_", "").isalnum())
            self.assertEqual(decode_signature_from_url(encoded), signature)

    def test_short_hash_is_stable(self) -> None:
        digest = signature_short_hash("+3,-5,*2,/4")
        self.assertEqual(digest, signature_short_hash("+3,-5,*2,/4"))
        self.assertTrue(1 <= len(digest) <= 6)
        self.assertTrue(digest.isalnum())
        self.assertEqual(digest, digest.upper())


if __name__ == "__main__":
    unittest.main()
