import random
import unittest

from wordgrid.core.constants import Direction, PuzzleKind
from wordgrid.core.models import PlacedWord
from wordgrid.data.word_pool import make_entry, normalize_pool
from wordgrid.engine.crossword import (
    CrosswordConfig,
    CrosswordPlacer,
    number_clues,
    read_run,
    run_starts,
    trim_grid,
)
from wordgrid.engine.grid import GridBuffer
from wordgrid.engine.validator import GridValidator


SCENARIO_WORDS = ["GATO", "CASA", "RATO", "MESA", "LIVRO", "PORTA"]


def _place(grid, words):
    for word in words:
        grid.write_word(word.cells, word.word)
    return grid


class CrosswordPlacerTests(unittest.TestCase):
    def test_scenario_places_intersecting_words(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        for seed in range(10):
            placer = CrosswordPlacer(CrosswordConfig(grid_size=15), rng=random.Random(seed))
            result = placer.generate(words, target_word_count=5)
            self.assertEqual(result.kind, PuzzleKind.CROSSWORD)
            self.assertGreaterEqual(len(result.placed), 3)
            self.assertLessEqual(len(result.placed), 5)
            self.assertGreaterEqual(result.stats["intersections"], 1)
            self.assertEqual(result.quality_score, len(result.placed))

    def test_seed_is_longest_word_across_centre(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        config = CrosswordConfig(trim=False)
        result = CrosswordPlacer(config, rng=random.Random(0)).generate(words, 5)
        seed = result.placed[0]
        self.assertEqual(seed.word, "LIVRO")
        self.assertEqual(seed.direction, Direction.ACROSS)
        self.assertEqual(seed.start, (7, 5))

    def test_placed_words_read_back(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        result = CrosswordPlacer(rng=random.Random(3)).generate(words, 5)
        for word in result.placed:
            self.assertEqual(result.grid.read(word.cells), word.word)
        self.assertTrue(GridValidator().validate(result).ok)

    def test_same_seed_same_layout(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        first = CrosswordPlacer(rng=random.Random(11)).generate(words, 5)
        second = CrosswordPlacer(rng=random.Random(11)).generate(words, 5)
        self.assertEqual(first.to_jsonable(), second.to_jsonable())

    def test_empty_word_list_yields_empty_grid(self) -> None:
        result = CrosswordPlacer().generate([], 5)
        self.assertEqual(result.placed, ())
        self.assertEqual(result.quality_score, 0)
        self.assertEqual(result.grid.occupied_count, 0)

    def test_words_longer_than_grid_are_not_seeded(self) -> None:
        words = normalize_pool(["ABACAXIZAL", "SOL"])
        result = CrosswordPlacer(CrosswordConfig(grid_size=5), rng=random.Random(0)).generate(words, 2)
        self.assertEqual([w.word for w in result.placed], ["SOL"])
        self.assertEqual(result.placed[0].start, (1, 1))
        self.assertEqual((result.grid.rows, result.grid.cols), (3, 5))


class PlacementRuleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.placer = CrosswordPlacer(rng=random.Random(0))
        self.grid = GridBuffer(9)
        self.occupancy = {}
        self.placed = []
        self.placer._commit(
            self.grid, self.occupancy, self.placed, make_entry("CASA"), 4, 2, Direction.ACROSS
        )

    def score(self, word, row, col, direction):
        return self.placer._score_placement(self.grid, self.occupancy, word, row, col, direction)

    def test_perpendicular_crossing_is_valid(self) -> None:
        self.assertEqual(self.score("SAL", 3, 3, Direction.DOWN), 1)

    def test_letter_mismatch_is_rejected(self) -> None:
        self.assertIsNone(self.score("SAL", 4, 2, Direction.DOWN))

    def test_placement_without_intersection_is_rejected(self) -> None:
        self.assertIsNone(self.score("ROLO", 0, 0, Direction.DOWN))

    def test_same_direction_overlap_is_rejected(self) -> None:
        self.assertIsNone(self.score("CASA", 4, 2, Direction.ACROSS))

    def test_out_of_bounds_is_rejected(self) -> None:
        self.assertIsNone(self.score("ASSADO", 4, 3, Direction.DOWN))

    def test_touching_parallel_word_is_rejected(self) -> None:
        self.assertEqual(self.score("ASA", 3, 4, Direction.DOWN), 1)
        self.placer._commit(
            self.grid, self.occupancy, self.placed, make_entry("SAL"), 3, 3, Direction.DOWN
        )
        self.assertIsNone(self.score("ASA", 3, 4, Direction.DOWN))

    def test_span_touching_existing_letter_is_rejected(self) -> None:
        # Ends directly above the C of CASA, which would extend the run.
        self.assertIsNone(self.score("SA", 2, 2, Direction.DOWN))
        self.assertEqual(self.score("AC", 3, 2, Direction.DOWN), 1)


class ClueNumberingTests(unittest.TestCase):
    def test_numbers_follow_scan_order(self) -> None:
        words = [
            PlacedWord("CASA", 0, 0, Direction.ACROSS, clue="Lar"),
            PlacedWord("AMO", 0, 1, Direction.DOWN, clue="Dono"),
            PlacedWord("ARO", 0, 3, Direction.DOWN),
        ]
        grid = _place(GridBuffer(5), words)
        clues = number_clues(grid, words)
        self.assertEqual([(c.number, c.answer, c.text) for c in clues.across], [(1, "CASA", "Lar")])
        self.assertEqual(
            [(c.number, c.answer, c.text) for c in clues.down],
            [(2, "AMO", "Dono"), (3, "ARO", None)],
        )

    def test_shared_start_cell_shares_number(self) -> None:
        words = [
            PlacedWord("SOL", 0, 0, Direction.ACROSS),
            PlacedWord("SAL", 0, 0, Direction.DOWN),
        ]
        grid = _place(GridBuffer(4), words)
        clues = number_clues(grid, words)
        self.assertEqual([c.number for c in clues.all()], [1, 1])
        self.assertEqual(len(run_starts(grid)), 1)

    def test_read_run_stops_at_gap(self) -> None:
        grid = _place(GridBuffer(6), [PlacedWord("MAR", 1, 0, Direction.ACROSS)])
        self.assertEqual(read_run(grid, 1, 0, Direction.ACROSS), "MAR")
        self.assertEqual(read_run(grid, 1, 4, Direction.ACROSS), "")

    def test_generated_clues_match_rescan(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        result = CrosswordPlacer(rng=random.Random(5)).generate(words, 5)
        self.assertEqual(result.clues, number_clues(result.grid, result.placed))
        numbers = [clue.number for clue in result.clues.all()]
        self.assertEqual(numbers, sorted(numbers))
        self.assertEqual(len(result.clues.all()), len(result.placed))


class TrimTests(unittest.TestCase):
    def test_trim_crops_to_letters_with_margin(self) -> None:
        words = [
            PlacedWord("MAR", 5, 5, Direction.ACROSS),
            PlacedWord("ASA", 5, 6, Direction.DOWN),
        ]
        grid = _place(GridBuffer(12), words)
        trimmed, shifted = trim_grid(grid, words)
        self.assertEqual((trimmed.rows, trimmed.cols), (5, 5))
        self.assertEqual([w.start for w in shifted], [(1, 1), (1, 2)])
        for word in shifted:
            self.assertEqual(trimmed.read(word.cells), word.word)
        self.assertEqual(trimmed.occupied_count, grid.occupied_count)

    def test_margin_is_clipped_at_grid_edge(self) -> None:
        words = [PlacedWord("SOL", 0, 0, Direction.ACROSS)]
        grid = _place(GridBuffer(8), words)
        trimmed, shifted = trim_grid(grid, words)
        self.assertEqual((trimmed.rows, trimmed.cols), (2, 4))
        self.assertEqual(shifted[0].start, (0, 0))

    def test_empty_grid_is_left_alone(self) -> None:
        grid = GridBuffer(6)
        trimmed, shifted = trim_grid(grid, [])
        self.assertIs(trimmed, grid)
        self.assertEqual(shifted, [])

    def test_generated_crosswords_read_back_after_trimming(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        for seed in range(20):
            result = CrosswordPlacer(rng=random.Random(seed)).generate(words, 5)
            grid = result.grid
            self.assertLessEqual(grid.rows, 15)
            self.assertLessEqual(grid.cols, 15)
            min_row, min_col, max_row, max_col = grid.occupied_bounds()
            self.assertLessEqual(min_row, 1)
            self.assertLessEqual(min_col, 1)
            self.assertGreaterEqual(max_row, grid.rows - 2)
            self.assertGreaterEqual(max_col, grid.cols - 2)
            for word in result.placed:
                self.assertEqual(grid.read(word.cells), word.word)
            self.assertEqual(result.clues, number_clues(grid, result.placed))
            self.assertTrue(GridValidator().validate(result).ok)

    def test_trimmed_and_untrimmed_layouts_match(self) -> None:
        words = normalize_pool(SCENARIO_WORDS)
        full = CrosswordPlacer(CrosswordConfig(trim=False), rng=random.Random(8)).generate(words, 5)
        cropped = CrosswordPlacer(rng=random.Random(8)).generate(words, 5)
        self.assertEqual([w.word for w in full.placed], [w.word for w in cropped.placed])
        self.assertEqual(full.grid.occupied_count, cropped.grid.occupied_count)
        self.assertEqual([c.answer for c in full.clues.all()], [c.answer for c in cropped.clues.all()])


if __name__ == "__main__":
    unittest.main()
