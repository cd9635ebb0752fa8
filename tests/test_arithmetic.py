import unittest

from zerorush.arithmetic import (
    evaluate,
    evaluate_many,
    evaluate_strings,
    evaluation_steps,
    is_valid_answer,
    valid_answer_mask,
)
from zerorush.cards import Card, parse_cards
from zerorush.search import permute


class EvaluateTests(unittest.TestCase):
    def test_left_to_right_without_precedence(self) -> None:
        result = evaluate(parse_cards(["+9", "+1", "/2", "-5"]))
        self.assertEqual(result.answer, 0)
        self.assertEqual(result.raw_answer, 0)
        self.assertFalse(result.float_detected)
        self.assertTrue(is_valid_answer(result.answer))

    def test_first_operator_is_ignored(self) -> None:
        tail = parse_cards(["*3", "-4", "+2"])
        answers = {evaluate([Card(op, 7)] + tail).answer for op in ("+", "-", "*", "/")}
        self.assertEqual(answers, {19})

    def test_evaluation_is_deterministic(self) -> None:
        cards = parse_cards(["+8", "/3", "*6", "-1"])
        self.assertEqual(evaluate(cards), evaluate(cards))

    def test_float_detection_is_sticky(self) -> None:
        result = evaluate(parse_cards(["+3", "/2", "*2"]))
        self.assertEqual(result.answer, 3)
        self.assertTrue(result.float_detected)
        self.assertTrue(result.is_valid)

    def test_fractional_and_negative_results_are_invalid(self) -> None:
        fractional = evaluate_strings(["+7", "/2"])
        self.assertEqual(fractional.answer, 3.5)
        self.assertFalse(fractional.is_valid)

        negative = evaluate_strings(["+1", "-5"])
        self.assertEqual(negative.answer, -4)
        self.assertFalse(negative.is_valid)

    def test_empty_arrangement_is_zero(self) -> None:
        result = evaluate([])
        self.assertEqual(result.answer, 0)
        self.assertEqual(result.raw_answer, 0)
        self.assertFalse(result.float_detected)
        self.assertEqual(result.arrangement, ())

    def test_rounding_absorbs_binary_error(self) -> None:
        # 1/3 * 3 stays within float error of 1
        result = evaluate_strings(["+1", "/3", "*3"])
        self.assertEqual(result.answer, 1)
        self.assertTrue(result.float_detected)

    def test_is_valid_answer(self) -> None:
        self.assertTrue(is_valid_answer(0))
        self.assertTrue(is_valid_answer(12.0))
        self.assertFalse(is_valid_answer(-1))
        self.assertFalse(is_valid_answer(2.5))
        self.assertFalse(is_valid_answer(float("inf")))


class EvaluateManyTests(unittest.TestCase):
    def test_batch_matches_scalar_evaluation(self) -> None:
        hand = parse_cards(["+7", "-3", "*4", "/3", "/2"])
        arrangements = permute(hand)
        batch = evaluate_many(arrangements)
        self.assertEqual(len(batch), 120)
        for index, arrangement in enumerate(arrangements):
            scalar = evaluate(arrangement)
            self.assertEqual(float(batch.answers[index]), scalar.answer)
            self.assertEqual(bool(batch.float_detected[index]), scalar.float_detected)
            self.assertEqual(bool(batch.valid_mask()[index]), scalar.is_valid)

    def test_mismatched_lengths_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            evaluate_many([parse_cards(["+1", "+2"]), parse_cards(["+1"])])

    def test_empty_batch(self) -> None:
        batch = evaluate_many([])
        self.assertEqual(len(batch), 0)

    def test_valid_answer_mask(self) -> None:
        mask = valid_answer_mask([0.0, 3.0, -2.0, 1.5])
        self.assertEqual(mask.tolist(), [True, True, False, False])


class EvaluationStepsTests(unittest.TestCase):
    def test_step_trace(self) -> None:
        trace = evaluation_steps(parse_cards(["+9", "+1", "/2", "-5"]))
        self.assertEqual(trace, "9 → +1 = 10 → ÷2 = 5 → −5 = 0")

    def test_fractional_steps_keep_decimals(self) -> None:
        trace = evaluation_steps(parse_cards(["+7", "/2"]))
        self.assertEqual(trace, "7 → ÷2 = 3.5")

    def test_empty_trace(self) -> None:
        self.assertEqual(evaluation_steps([]), "")


if __name__ == "__main__":
    unittest.main()
