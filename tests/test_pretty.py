import unittest
from io import StringIO

from wordgrid.core.constants import Direction, PuzzleKind
from wordgrid.core.models import PlacedWord, PuzzleResult
from wordgrid.engine.crossword import number_clues
from wordgrid.engine.generator import generate_fleet
from wordgrid.engine.grid import GridBuffer
from wordgrid.utils.pretty import format_rows, pretty_print_grid, print_puzzle_stats, print_stored_puzzle


def _small_crossword() -> PuzzleResult:
    grid = GridBuffer(3, 4)
    placed = (
        PlacedWord("MAR", 0, 0, Direction.ACROSS, clue="Agua salgada", display="Mar"),
        PlacedWord("MEL", 0, 0, Direction.DOWN, display="Mel"),
    )
    for word in placed:
        grid.write_word(word.cells, word.word)
    return PuzzleResult(
        kind=PuzzleKind.CROSSWORD,
        grid=grid,
        placed=placed,
        quality_score=2,
        clues=number_clues(grid, placed),
        seed=11,
    )


class FormatRowsTests(unittest.TestCase):
    def test_header_and_blank_cells(self) -> None:
        lines = format_rows([["A", None], [None, "B"]], blank="#").splitlines()
        self.assertEqual(lines[0], "     0  1")
        self.assertEqual(lines[2], " 0 |  A  #")
        self.assertEqual(lines[3], " 1 |  #  B")

    def test_empty_matrix(self) -> None:
        self.assertEqual(format_rows([]).splitlines()[0].strip(), "")

    def test_pretty_print_grid_with_label(self) -> None:
        grid = GridBuffer(2)
        grid.write_word([(0, 0), (0, 1)], "OI")
        stream = StringIO()
        pretty_print_grid(grid, label="Board", stream=stream)
        lines = stream.getvalue().splitlines()
        self.assertEqual(lines[0], "Board")
        self.assertEqual(lines[3], " 0 |  O  I")
        self.assertEqual(lines[4], " 1 |  .  .")


class PuzzlePrintTests(unittest.TestCase):
    def test_puzzle_stats_list_size_and_clues(self) -> None:
        stream = StringIO()
        print_puzzle_stats(_small_crossword(), stream=stream)
        text = stream.getvalue()
        self.assertIn("3 x 4 (12 cells)", text)
        self.assertIn("--- Across ---", text)
        self.assertIn("1. Agua salgada (3)", text)
        self.assertIn("1. MEL (3)", text)
        self.assertIn("Seed: 11", text)

    def test_stored_crossword_matches_live_grid(self) -> None:
        result = _small_crossword()
        stream = StringIO()
        print_stored_puzzle(result.to_jsonable(), stream=stream)
        text = stream.getvalue()
        self.assertTrue(text.startswith(format_rows(result.grid.to_rows())))
        self.assertIn("Mar          at (0, 0) across", text)
        self.assertIn("--- Down ---", text)

    def test_stored_fleet_lists_ships(self) -> None:
        layout = generate_fleet(seed=4)
        stream = StringIO()
        print_stored_puzzle(layout.to_jsonable(), stream=stream)
        text = stream.getvalue()
        self.assertIn(" ~", text)
        for ship in layout.ships:
            self.assertIn(ship.name, text)
        self.assertNotIn("--- Words ---", text)


if __name__ == "__main__":
    unittest.main()
