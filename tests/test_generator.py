import unittest

from wordgrid.core.constants import PuzzleKind
from wordgrid.core.exceptions import EmptyPoolError
from wordgrid.core.models import FailureReason, GenerationFailure, PuzzleResult
from wordgrid.engine.generator import (
    GeneratorConfig,
    PuzzleGenerator,
    generate_crossword,
    generate_word_search,
)
from wordgrid.engine.validator import GridValidator, ValidationResult


LARGE_POOL = [
    "ARENA", "BANANA", "CANETA", "DENTE", "ESTRELA", "FOLHA", "GARRAFA", "HORTA",
    "ILHA", "JANELA", "LARANJA", "MESA", "NAVIO", "OVELHA", "PANELA", "QUEIJO",
    "RATO", "SAPATO", "TOMATE", "UVA", "VELA", "ABACATE", "BOLACHA", "CAMELO",
    "DOCE", "ESCOLA", "FARINHA", "GATO", "LIVRO", "MALA", "NUVEM", "OLIVEIRA",
    "PORTA", "RODA", "SALADA", "TERRA", "VACA", "AREIA", "CASA", "PEDRA",
    "MARTELO", "CENOURA", "TESOURA", "CADEIRA", "PLANETA", "CORRIDA", "PALAVRA", "ESPADA",
]


class GeneratorConfigTests(unittest.TestCase):
    def test_length_window_defaults_per_kind(self) -> None:
        crossword = GeneratorConfig()
        word_search = GeneratorConfig(kind=PuzzleKind.WORD_SEARCH)
        self.assertEqual((crossword.min_length, crossword.max_length), (3, 10))
        self.assertEqual((word_search.min_length, word_search.max_length), (6, 10))

    def test_explicit_window_is_kept(self) -> None:
        config = GeneratorConfig(min_length=4, max_length=5)
        self.assertEqual(config.to_crossword_config().min_length, 4)

    def test_fleet_kind_rejected(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(kind=PuzzleKind.FLEET)

    def test_target_below_quality_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(target_words=5)
        with self.assertRaises(ValueError):
            generate_crossword(LARGE_POOL, target_words=3, min_quality=4)

    def test_target_equal_to_quality_is_accepted(self) -> None:
        config = GeneratorConfig(target_words=5, min_quality=5)
        self.assertEqual(config.to_crossword_config().target_words, 5)


class PuzzleGeneratorTests(unittest.TestCase):
    def test_empty_pool_is_reported(self) -> None:
        outcome = generate_crossword(["AB", "OK", "42"], seed=1)
        self.assertIsInstance(outcome, GenerationFailure)
        self.assertEqual(outcome.reason, FailureReason.EMPTY_POOL)
        self.assertEqual(outcome.attempts, 0)
        self.assertIsInstance(outcome.to_exception(), EmptyPoolError)

    def test_small_pool_cannot_meet_quality(self) -> None:
        outcome = generate_crossword(["GATO", "CASA", "RATO", "MESA", "LIVRO"], seed=1)
        self.assertIsInstance(outcome, GenerationFailure)
        self.assertIn(outcome.reason, (FailureReason.EMPTY_POOL, FailureReason.QUALITY_NOT_MET))

    def test_word_search_respects_its_length_window(self) -> None:
        outcome = generate_word_search(["GATO", "CASA", "RATO"], seed=1)
        self.assertIsInstance(outcome, GenerationFailure)
        self.assertEqual(outcome.reason, FailureReason.EMPTY_POOL)

    def test_crossword_from_large_pool(self) -> None:
        outcome = generate_crossword(LARGE_POOL, target_words=10, seed=2024, max_attempts=10)
        self.assertIsInstance(outcome, PuzzleResult)
        self.assertGreaterEqual(outcome.quality_score, 6)
        self.assertLessEqual(outcome.quality_score, 10)
        self.assertIsNotNone(outcome.seed)
        self.assertTrue(GridValidator().validate(outcome).ok)
        for word in outcome.placed:
            self.assertEqual(outcome.grid.read(word.cells), word.word)

    def test_word_search_from_large_pool(self) -> None:
        outcome = generate_word_search(LARGE_POOL, target_words=8, seed=7)
        self.assertIsInstance(outcome, PuzzleResult)
        self.assertEqual(outcome.kind, PuzzleKind.WORD_SEARCH)
        self.assertGreaterEqual(outcome.quality_score, 6)
        for word in outcome.placed:
            self.assertGreaterEqual(word.length, 6)
            self.assertEqual(outcome.grid.read(word.cells), word.word)

    def test_crossword_succeeds_across_seeds(self) -> None:
        outcomes = [generate_crossword(LARGE_POOL, seed=seed, max_attempts=10) for seed in range(20)]
        successes = [outcome for outcome in outcomes if isinstance(outcome, PuzzleResult)]
        self.assertGreaterEqual(len(successes), 19)
        for result in successes:
            self.assertGreaterEqual(result.quality_score, 6)
            self.assertTrue(GridValidator().validate(result).ok)

    def test_word_search_succeeds_across_seeds(self) -> None:
        for seed in range(20):
            outcome = generate_word_search(LARGE_POOL, target_words=8, seed=seed)
            self.assertIsInstance(outcome, PuzzleResult, f"seed {seed}")
            self.assertGreaterEqual(len(outcome.placed), 6)
            self.assertLessEqual(len(outcome.placed), 8)

    def test_seeded_generation_is_reproducible(self) -> None:
        first = generate_crossword(LARGE_POOL, seed=5, max_attempts=10)
        second = generate_crossword(LARGE_POOL, seed=5, max_attempts=10)
        self.assertIsInstance(first, PuzzleResult)
        self.assertIsInstance(second, PuzzleResult)
        self.assertEqual(first.to_jsonable(), second.to_jsonable())

    def test_failed_validation_consumes_attempts(self) -> None:
        class RejectingValidator(GridValidator):
            def validate(self, result):
                return ValidationResult(ok=False, messages=["rejected"])

        config = GeneratorConfig(seed=1, max_attempts=2, min_quality=1)
        outcome = PuzzleGenerator(config, validator=RejectingValidator()).generate(LARGE_POOL)
        self.assertIsInstance(outcome, GenerationFailure)
        self.assertEqual(outcome.reason, FailureReason.QUALITY_NOT_MET)
        self.assertEqual(outcome.attempts, 2)


if __name__ == "__main__":
    unittest.main()
