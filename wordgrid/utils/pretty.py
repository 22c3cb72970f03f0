"""Pretty-print helpers for puzzle grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from ..core.constants import WATER, PuzzleKind

if TYPE_CHECKING:
    from ..core.models import FleetLayout, PuzzleResult
    from ..engine.grid import GridBuffer


def format_rows(rows: Sequence[Sequence[Optional[str]]], blank: str = ".") -> str:
    """Render a matrix of cell values with row and column indices."""

    width = len(rows[0]) if rows else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(rows):
        row_render = " ".join(f"{value or blank:>2}" for value in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_grid(grid: GridBuffer, blank: str = ".") -> str:
    return format_rows(grid.to_rows(), blank)


def pretty_print_grid(grid: GridBuffer, *, label: str | None = None, blank: str = ".", stream=None) -> None:
    """Print a grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid, blank), file=stream)


def print_puzzle_stats(result: PuzzleResult, *, stream=None) -> None:
    """Print grid, word list and stats for an accepted puzzle."""

    stream = stream or sys.stdout
    pretty_print_grid(result.grid, stream=stream)

    grid = result.grid
    total_cells = grid.rows * grid.cols
    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Kind:          {result.kind.value}", file=stream)
    print(f"  Size:          {grid.rows} x {grid.cols} ({total_cells} cells)", file=stream)
    for key, value in sorted(result.stats.items()):
        print(f"  {key + ':':<15}{value}", file=stream)

    lengths = [word.length for word in result.placed]
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(lengths)} (quality {result.quality_score})", file=stream)
    if lengths:
        length_dist = Counter(lengths)
        print(f"  Length range:  {min(lengths)}-{max(lengths)} (avg {sum(lengths) / len(lengths):.1f})", file=stream)
        dist_parts = [f"{l}:{c}" for l, c in sorted(length_dist.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    if result.clues is not None:
        _print_clues(result.clues.to_jsonable(), stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed} (attempt {result.attempts})", file=stream)


def print_fleet(layout: FleetLayout, *, stream=None) -> None:
    stream = stream or sys.stdout
    pretty_print_grid(layout.grid, blank=WATER, stream=stream)
    print(file=stream)
    _print_ships([ship.to_jsonable() for ship in layout.ships], stream)
    if layout.unplaced:
        print(f"  Unplaced: {', '.join(spec.name for spec in layout.unplaced)}", file=stream)


def print_stored_puzzle(payload: Dict[str, Any], *, stream=None) -> None:
    """Print a puzzle from its stored JSON form (``to_jsonable`` output)."""

    stream = stream or sys.stdout
    kind = PuzzleKind(payload["kind"])
    blank = WATER if kind == PuzzleKind.FLEET else "."
    print(format_rows(payload["grid"], blank), file=stream)
    print(file=stream)
    if kind == PuzzleKind.FLEET:
        _print_ships(payload["ships"], stream)
        return

    print("--- Words ---", file=stream)
    for word in payload["words"]:
        row, col = word["start"]
        print(f"  {word['display']:<12} at ({row}, {col}) {word['direction']}", file=stream)
    if "clues" in payload:
        _print_clues(payload["clues"], stream)


def _print_clues(clues: Dict[str, List[Dict[str, Any]]], stream) -> None:
    for title in ("across", "down"):
        if not clues[title]:
            continue
        print(file=stream)
        print(f"--- {title.capitalize()} ---", file=stream)
        for clue in clues[title]:
            print(f"  {clue['number']:>3}. {clue['text'] or clue['answer']} ({len(clue['answer'])})", file=stream)


def _print_ships(ships: List[Dict[str, Any]], stream) -> None:
    for ship in ships:
        row, col = ship["cells"][0]
        print(
            f"  {ship['code']} {ship['name']:<12} size {ship['size']} at ({row}, {col}) {ship['orientation']}",
            file=stream,
        )
