"""CLI entrypoint for the word puzzle and fleet board generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from wordgrid.core.constants import (
    DEFAULT_FLEET_GRID_SIZE,
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MIN_QUALITY,
    DEFAULT_TARGET_WORDS,
    PuzzleKind,
)
from wordgrid.core.exceptions import PuzzleError
from wordgrid.core.models import GenerationFailure, WordEntry
from wordgrid.engine.fleet import FleetConfig
from wordgrid.engine.generator import GeneratorConfig, PuzzleGenerator, generate_fleet
from wordgrid.io.puzzle_store import JsonPuzzleStore
from wordgrid.io.word_list import load_word_list, parse_word_spec
from wordgrid.utils.logger import configure_logging, get_logger
from wordgrid.utils.pretty import print_fleet, print_puzzle_stats, print_stored_puzzle


LOGGER = get_logger("wordgrid.cli")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--size", type=int, help="Grid edge length in cells")
    common.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    common.add_argument("--output", type=Path, help="Optional path to JSON output")
    common.add_argument(
        "--store-dir",
        type=Path,
        help="Save the puzzle as a JSON document in this directory",
    )
    common.add_argument(
        "--daily",
        type=date.fromisoformat,
        metavar="YYYY-MM-DD",
        help="Serve the stored daily puzzle for this date, generating it on first use (requires --store-dir)",
    )
    common.add_argument("--pretty", action="store_true", help="Print a human-readable grid instead of JSON")
    common.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR); defaults to $WORDGRID_LOG_LEVEL or INFO",
    )

    words = argparse.ArgumentParser(add_help=False)
    words.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit words (format: WORD or WORD:Clue)",
    )
    words.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD, WORD:Clue or WORD<TAB>Clue entry per line",
    )
    words.add_argument("--target", type=int, default=DEFAULT_TARGET_WORDS, help="Number of words to place")
    words.add_argument("--attempts", type=int, default=DEFAULT_MAX_ATTEMPTS, help="Maximum placement attempts")
    words.add_argument(
        "--min-quality",
        type=int,
        default=DEFAULT_MIN_QUALITY,
        help="Minimum number of placed words for a puzzle to be accepted",
    )

    parser = argparse.ArgumentParser(description="Generate crosswords, word searches and fleet boards")
    subparsers = parser.add_subparsers(dest="kind", required=True)
    subparsers.add_parser(
        PuzzleKind.CROSSWORD.value, parents=[common, words], help="Intersecting-word crossword"
    )
    word_search = subparsers.add_parser(
        PuzzleKind.WORD_SEARCH.value, parents=[common, words], help="Eight-direction word search"
    )
    word_search.add_argument(
        "--no-fill",
        action="store_true",
        help="Leave cells not covered by a word empty",
    )
    subparsers.add_parser(PuzzleKind.FLEET.value, parents=[common], help="Random fleet board")
    return parser


def collect_words(args: argparse.Namespace) -> List[WordEntry]:
    entries: List[WordEntry] = []
    if args.words:
        entries.extend(parse_word_spec(raw) for raw in args.words)
    if args.words_file:
        entries.extend(load_word_list(args.words_file))
    return entries


def build_config(args: argparse.Namespace) -> Union[FleetConfig, GeneratorConfig]:
    """Map parsed arguments onto the generator configuration for their kind."""

    kind = PuzzleKind(args.kind)
    if kind == PuzzleKind.FLEET:
        return FleetConfig(grid_size=args.size or DEFAULT_FLEET_GRID_SIZE)
    return GeneratorConfig(
        kind=kind,
        grid_size=args.size or DEFAULT_GRID_SIZE,
        target_words=args.target,
        min_quality=args.min_quality,
        max_attempts=args.attempts,
        seed=args.seed,
        fill_empty=not getattr(args, "no_fill", False),
    )


def build_puzzle(args: argparse.Namespace, config: Union[FleetConfig, GeneratorConfig]) -> Any:
    """Generate one puzzle for the parsed arguments, raising on failure."""

    if isinstance(config, FleetConfig):
        return generate_fleet(config=config, seed=args.seed)

    outcome = PuzzleGenerator(config).generate(collect_words(args))
    if isinstance(outcome, GenerationFailure):
        raise outcome.to_exception()
    return outcome


def emit(payload: Dict[str, Any], args: argparse.Namespace, puzzle: Optional[Any] = None) -> None:
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    if args.pretty:
        if puzzle is None:
            print_stored_puzzle(payload)
        elif PuzzleKind(args.kind) == PuzzleKind.FLEET:
            print_fleet(puzzle)
        else:
            print_puzzle_stats(puzzle)
    elif not args.output:
        print(output_text)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO) if args.log_level else None
    configure_logging(level)

    if args.daily and not args.store_dir:
        parser.error("--daily requires --store-dir")
    if args.kind != PuzzleKind.FLEET.value and not (args.words or args.words_file):
        parser.error("provide --words and/or --words-file")
    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    kind = PuzzleKind(args.kind)
    try:
        store = JsonPuzzleStore(args.store_dir) if args.store_dir else None
        if store and args.daily:
            cached = store.load_daily(kind, args.daily)
            if cached is not None:
                LOGGER.info("Serving stored daily %s for %s", kind.value, args.daily.isoformat())
                emit(cached["puzzle"], args)
                return 0

        puzzle = build_puzzle(args, config)
        if store and args.daily:
            store.save_daily(kind, args.daily, puzzle)
        elif store:
            store.save(puzzle)
    except PuzzleError as exc:
        LOGGER.error("%s generation failed: %s", kind.value, exc)
        return 1

    emit(puzzle.to_jsonable(), args, puzzle)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
