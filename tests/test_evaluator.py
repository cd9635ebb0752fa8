import json
import tempfile
import unittest
from pathlib import Path

from zerorush.cards import Difficulty, parse_cards
from zerorush.evaluator import ZeroRushEvaluator
from zerorush.generator import ZeroRushGenerator


class ZeroRushEvaluatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.tmp.name) / "zerorush"
        self.generator = ZeroRushGenerator(output_dir=self.output_dir, difficulty="easy", seed=123)
        self.record = self.generator.create_puzzle(
            cards=parse_cards(["+9", "+1", "/2", "-5"]),
            puzzle_id="zerorush-test",
        )

        metadata_path = self.output_dir / "puzzles.json"
        bare = {"id": "bare", "signature": "+3,-3"}
        metadata_path.write_text(json.dumps([self.record.to_dict(), bare]), encoding="utf-8")
        self.metadata_path = metadata_path
        self.evaluator = ZeroRushEvaluator(metadata_path)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_record_fields(self) -> None:
        payload = self.record.to_dict()
        self.assertEqual(payload["signature"], "+1,+9,-5,/2")
        self.assertEqual(payload["token"], "a1_a9_s5_d2")
        self.assertEqual(payload["share_path"], "/play/easy/a1_a9_s5_d2")
        self.assertEqual(payload["dusk"], 0)
        self.assertEqual(payload["difficulty"], "easy")
        self.assertEqual(payload["analysis"]["total_permutations"], 24)

    def test_dusk_submission(self) -> None:
        result = self.evaluator.evaluate("zerorush-test", "+9,+1,/2,-5")
        self.assertEqual(result.answer, 0)
        self.assertTrue(result.is_valid)
        self.assertTrue(result.matches_dusk)
        self.assertFalse(result.matches_dawn)
        self.assertEqual(result.steps, "9 → +1 = 10 → ÷2 = 5 → −5 = 0")

    def test_dawn_submission(self) -> None:
        result = self.evaluator.evaluate("zerorush-test", self.record.result.dawn.arrangement)
        self.assertTrue(result.matches_dawn)
        self.assertEqual(result.answer, self.record.result.dawn.result)

    def test_invalid_submission(self) -> None:
        result = self.evaluator.evaluate("zerorush-test", ["+1", "-5", "+9", "/2"])
        # 1 - 5 + 9 = 5, 5 / 2 = 2.5
        self.assertFalse(result.is_valid)
        self.assertFalse(result.matches_dusk)
        self.assertFalse(result.matches_dawn)
        self.assertTrue(result.float_detected)

    def test_targets_recomputed_when_missing(self) -> None:
        self.assertEqual(self.evaluator.targets("bare"), (0, 6))
        result = self.evaluator.evaluate("bare", "-3,+3")
        self.assertTrue(result.matches_dawn)

    def test_foreign_cards_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.evaluator.evaluate("zerorush-test", "+9,+1,/2,-6")
        with self.assertRaises(ValueError):
            self.evaluator.evaluate("zerorush-test", "+9,+1,/2")

    def test_unknown_puzzle(self) -> None:
        with self.assertRaises(KeyError):
            self.evaluator.evaluate("missing", "+1")

    def test_missing_metadata_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            ZeroRushEvaluator(Path(self.tmp.name) / "nope.json")


class ZeroRushDatasetTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.tmp.name) / "dataset"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_generate_dataset_writes_and_appends(self) -> None:
        generator = ZeroRushGenerator(output_dir=self.output_dir, difficulty=Difficulty.EASY, seed=7)
        metadata_path = self.output_dir / "puzzles.json"

        records = generator.generate_dataset(2, metadata_path=metadata_path)
        self.assertEqual(len(records), 2)
        generator.generate_dataset(1, metadata_path=metadata_path)

        payload = json.loads(metadata_path.read_text(encoding="utf-8"))
        self.assertEqual(len(payload), 3)
        for entry in payload:
            self.assertEqual(entry["difficulty"], "easy")
            self.assertEqual(len(entry["cards"]), 4)
            self.assertTrue(entry["share_path"].startswith("/play/easy/"))

        evaluator = ZeroRushEvaluator(metadata_path)
        first = records[0]
        if first.result.has_valid_answers:
            outcome = evaluator.evaluate(first.id, first.result.dusk.arrangement)
            self.assertTrue(outcome.matches_dusk)

    def test_seeded_generators_agree(self) -> None:
        first = ZeroRushGenerator(output_dir=self.output_dir, difficulty="easy", seed=31)
        second = ZeroRushGenerator(output_dir=self.output_dir, difficulty="easy", seed=31)
        self.assertEqual(first.create_random_puzzle().signature, second.create_random_puzzle().signature)

    def test_difficulty_override(self) -> None:
        generator = ZeroRushGenerator(output_dir=self.output_dir, difficulty="easy", seed=3, max_attempts=2)
        record = generator.create_puzzle(difficulty="hard")
        self.assertEqual(record.difficulty, Difficulty.HARD)
        self.assertEqual(len(record.cards), 8)

    def test_negative_count_is_rejected(self) -> None:
        generator = ZeroRushGenerator(output_dir=self.output_dir, seed=1)
        with self.assertRaises(ValueError):
            generator.generate_dataset(-1)


if __name__ == "__main__":
    unittest.main()
