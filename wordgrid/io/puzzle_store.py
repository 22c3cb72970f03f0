"""Persistent puzzle document store.

Puzzles are saved as JSON documents under ``local_db/collections/puzzles/``.
Daily puzzles are keyed by kind and ISO date so the same board is served all
day; random puzzles get a timestamped id and are only written on request.
The documents are frontend-ready and contain the grid, placements and stats.
"""

from __future__ import annotations

import json
import uuid
from collections import Counter
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.constants import PuzzleKind
from ..core.exceptions import StoreError
from ..core.models import FleetLayout, GenerationFailure, PuzzleResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/puzzles")

Storable = Union[PuzzleResult, FleetLayout]


class JsonPuzzleStore:
    """Save puzzle generation results as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(self, puzzle: Storable, doc_id: Optional[str] = None) -> str:
        """Persist a puzzle and return its document ID."""
        doc_id = doc_id or self._new_id()
        doc = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "success",
            "puzzle": puzzle.to_jsonable(),
            "stats": self._compute_stats(puzzle),
        }
        self._write(doc_id, doc)
        LOGGER.info("Puzzle saved: %s", doc_id)
        return doc_id

    def save_failure(self, kind: PuzzleKind, failure: GenerationFailure) -> str:
        """Persist a failed generation run and return its document ID."""
        doc_id = self._new_id()
        doc = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "failed",
            "kind": kind.value,
            "reason": failure.reason.value,
            "error": failure.message,
            "attempts": failure.attempts,
            "best_score": failure.best_score,
        }
        self._write(doc_id, doc)
        LOGGER.info("Puzzle failure saved: %s", doc_id)
        return doc_id

    def save_daily(self, kind: PuzzleKind, day: date, puzzle: Storable) -> str:
        return self.save(puzzle, doc_id=self.daily_id(kind, day))

    def load(self, doc_id: str) -> Dict[str, Any]:
        path = self._path(doc_id)
        if not path.exists():
            raise StoreError(f"No stored puzzle with id {doc_id}")
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Unreadable puzzle document {path}: {exc}") from exc

    def load_daily(self, kind: PuzzleKind, day: date) -> Optional[Dict[str, Any]]:
        doc_id = self.daily_id(kind, day)
        if not self._path(doc_id).exists():
            return None
        return self.load(doc_id)

    @staticmethod
    def daily_id(kind: PuzzleKind, day: date) -> str:
        return f"daily_{kind.value}_{day.isoformat()}"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _compute_stats(self, puzzle: Storable) -> dict:
        grid = puzzle.grid
        stats: dict = {
            "grid": {
                "rows": grid.rows,
                "cols": grid.cols,
                "total_cells": grid.rows * grid.cols,
                "occupied_cells": grid.occupied_count,
            },
        }
        if isinstance(puzzle, FleetLayout):
            stats["ships"] = {
                "placed": len(puzzle.ships),
                "unplaced": len(puzzle.unplaced),
                "cells": puzzle.occupied_count,
            }
            return stats

        lengths = [word.length for word in puzzle.placed]
        length_dist = Counter(lengths)
        stats["words"] = {
            "placed": len(lengths),
            "length_min": min(lengths) if lengths else 0,
            "length_max": max(lengths) if lengths else 0,
            "length_avg": round(sum(lengths) / len(lengths), 1) if lengths else 0.0,
            "length_distribution": {str(k): v for k, v in sorted(length_dist.items())},
        }
        if puzzle.clues is not None:
            stats["clues"] = {"across": len(puzzle.clues.across), "down": len(puzzle.clues.down)}
        return stats

    def _write(self, doc_id: str, doc: dict) -> None:
        self._path(doc_id).write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")

    def _path(self, doc_id: str) -> Path:
        return self.store_dir / f"{doc_id}.json"

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
