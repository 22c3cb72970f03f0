"""Ship placement for fleet boards.

Ships may touch each other but never share a cell. Automatic placement
tries a bounded number of random spots per ship; ships left over are handed
to the CP-SAT solver so the returned board is complete whenever one exists.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from ..core.constants import (
    DEFAULT_FLEET_GRID_SIZE,
    FLEET_PLACEMENT_ATTEMPTS,
    WATER,
    CellKind,
    Orientation,
)
from ..core.exceptions import FleetPlacementError
from ..core.models import DEFAULT_FLEET, Cell, Coord, FleetLayout, Ship, ShipSpec
from ..utils.logger import get_logger
from .grid import GridBuffer
from .solver import solve_fleet


LOGGER = get_logger(__name__)


class ShotResult(str, Enum):
    HIT = "hit"
    MISS = "miss"


@dataclass
class FleetConfig:
    grid_size: int = DEFAULT_FLEET_GRID_SIZE
    placement_attempts: int = FLEET_PLACEMENT_ATTEMPTS
    complete: bool = True
    solver_timeout: float = 10.0


def ship_cells(row: int, col: int, size: int, orientation: Orientation) -> List[Coord]:
    dr, dc = orientation.step
    return [(row + dr * i, col + dc * i) for i in range(size)]


def can_place_ship(grid: GridBuffer, size: int, row: int, col: int, orientation: Orientation) -> bool:
    """True when every cell of the span is on the board and empty."""

    return all(
        grid.in_bounds(r, c) and grid.is_empty(r, c)
        for r, c in ship_cells(row, col, size, orientation)
    )


class FleetPlacer:
    """Automatic and manual ship placement on a square board."""

    def __init__(self, config: Optional[FleetConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or FleetConfig()
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Automatic placement
    # ------------------------------------------------------------------
    def auto_place(
        self,
        fleet: Sequence[ShipSpec] = DEFAULT_FLEET,
        grid_size: Optional[int] = None,
    ) -> FleetLayout:
        size = grid_size or self.config.grid_size
        grid = GridBuffer(size)
        layout = FleetLayout(grid=grid)

        for spec in fleet:
            ship = self._random_place(grid, spec)
            if ship is None:
                LOGGER.debug(
                    "No spot for %s after %d attempts", spec.name, self.config.placement_attempts
                )
                layout.unplaced.append(spec)
            else:
                layout.ships.append(ship)

        if layout.unplaced and self.config.complete:
            return self._complete(layout, fleet)
        if layout.unplaced:
            LOGGER.warning(
                "Fleet incomplete: %s unplaced", ", ".join(spec.name for spec in layout.unplaced)
            )
        return layout

    def _random_place(self, grid: GridBuffer, spec: ShipSpec) -> Optional[Ship]:
        for _ in range(self.config.placement_attempts):
            orientation = Orientation.HORIZONTAL if self.rng.random() > 0.5 else Orientation.VERTICAL
            dr, dc = orientation.step
            max_row = grid.size - dr * (spec.size - 1)
            max_col = grid.size - dc * (spec.size - 1)
            if max_row <= 0 or max_col <= 0:
                return None
            row = self.rng.randrange(max_row)
            col = self.rng.randrange(max_col)
            if can_place_ship(grid, spec.size, row, col, orientation):
                return self._commit(grid, spec, ship_cells(row, col, spec.size, orientation))
        return None

    def _complete(self, layout: FleetLayout, fleet: Sequence[ShipSpec]) -> FleetLayout:
        grid = layout.grid
        occupied = {cell for ship in layout.ships for cell in ship.cells}
        LOGGER.info("Completing fleet with CP-SAT: %d ship(s) left", len(layout.unplaced))

        solved = solve_fleet(
            grid.size, layout.unplaced, occupied,
            seed=self.rng.randint(0, 1_000_000), timeout=self.config.solver_timeout,
        )
        if solved is not None:
            for spec, cells in solved:
                layout.ships.append(self._commit(grid, spec, cells))
            layout.unplaced = []
            return layout

        # Committed ships block every completion; lay out the whole fleet again.
        solved = solve_fleet(
            grid.size, fleet, seed=self.rng.randint(0, 1_000_000), timeout=self.config.solver_timeout,
        )
        if solved is None:
            raise FleetPlacementError(
                f"Fleet of {len(fleet)} ships does not fit a {grid.size}x{grid.size} board"
            )
        fresh = FleetLayout(grid=GridBuffer(grid.size))
        for spec, cells in solved:
            fresh.ships.append(self._commit(fresh.grid, spec, cells))
        return fresh

    # ------------------------------------------------------------------
    # Manual placement
    # ------------------------------------------------------------------
    def place_ship(
        self,
        grid: GridBuffer,
        spec: ShipSpec,
        row: int,
        col: int,
        orientation: Orientation,
    ) -> Ship:
        if not can_place_ship(grid, spec.size, row, col, orientation):
            raise FleetPlacementError(
                f"{spec.name} cannot be placed at {(row, col)} {orientation.value}"
            )
        return self._commit(grid, spec, ship_cells(row, col, spec.size, orientation))

    def remove_ship(self, grid: GridBuffer, ship: Ship) -> None:
        for row, col in ship.cells:
            if grid.cell(row, col) == Cell.ship(ship.code):
                grid.clear(row, col)

    def move_ship(
        self,
        grid: GridBuffer,
        ship: Ship,
        row: int,
        col: int,
        orientation: Orientation,
    ) -> Ship:
        """Replace ``ship`` with a new placement, keeping the old one if invalid."""
        self.remove_ship(grid, ship)
        spec = ShipSpec(name=ship.name, code=ship.code, size=ship.size)
        try:
            return self.place_ship(grid, spec, row, col, orientation)
        except FleetPlacementError:
            self._commit(grid, spec, list(ship.cells))
            raise

    @staticmethod
    def _commit(grid: GridBuffer, spec: ShipSpec, cells: List[Coord]) -> Ship:
        grid.write(cells, [Cell.ship(spec.code)] * len(cells))
        return Ship(name=spec.name, code=spec.code, cells=tuple(cells))


# ----------------------------------------------------------------------
# Board queries
# ----------------------------------------------------------------------
def check_shot(grid: GridBuffer, row: int, col: int) -> ShotResult:
    if not grid.in_bounds(row, col):
        return ShotResult.MISS
    return ShotResult.HIT if grid.cell(row, col).kind == CellKind.SHIP else ShotResult.MISS


def all_ships_sunk(grid: GridBuffer, hits: Iterable[Coord]) -> bool:
    ship_coords = {(r, c) for r, c, cell in grid.iter_cells() if cell.kind == CellKind.SHIP}
    return bool(ship_coords) and ship_coords <= set(hits)


def fleet_hash(grid: GridBuffer) -> str:
    """Stable digest of ship positions, shareable without revealing them."""

    rows = ("".join(cell.symbol(WATER) for cell in row) for row in grid.cells)
    return hashlib.sha256("|".join(rows).encode("utf-8")).hexdigest()[:16]


__all__ = [
    "FleetConfig",
    "FleetPlacer",
    "ShotResult",
    "all_ships_sunk",
    "can_place_ship",
    "check_shot",
    "fleet_hash",
    "ship_cells",
]
