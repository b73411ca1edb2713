# board.py
from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .events import GameEvent

logger = logging.getLogger(__name__)

Observer = Callable[[GameEvent], None]


class InvalidDimensions(ValueError):
    """Raised when a board is built with fewer than one row or column."""


class CellType(Enum):
    EMPTY = 0
    SNAKE = 1
    FOOD = 2
    SNAKE_HEAD = 3


class Cell:
    __slots__ = ("_col", "_row", "cell_type")

    def __init__(self, col: int, row: int, cell_type: CellType = CellType.EMPTY):
        self._col = col
        self._row = row
        self.cell_type = cell_type

    @property
    def col(self) -> int:
        return self._col

    @property
    def row(self) -> int:
        return self._row

    def __repr__(self) -> str:
        return f"Cell({self._col}, {self._row}, {self.cell_type.name})"


class Board:
    """
    Fixed-size grid of tagged cells, stored row-major.

    Coordinates are reduced modulo the cell count, so an out-of-range
    (col, row) silently lands somewhere on the board; movement code always
    passes coordinates already wrapped to the grid.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        observer: Optional[Observer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if rows < 1 or columns < 1:
            raise InvalidDimensions(f"board must be at least 1x1, got {rows}x{columns}")

        self._rows = rows
        self._columns = columns
        self._cells: List[Cell] = [
            Cell(col, row) for row in range(rows) for col in range(columns)
        ]
        self._game_over = False
        self._paused = False
        self._won = False
        self._observer = observer
        self._rng = rng if rng is not None else random.Random()

    # ---------- Accessors ----------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return tuple(self._cells)

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def won(self) -> bool:
        """True when the game ended because no empty cell was left for food."""
        return self._won

    # ---------- Cells ----------
    def _index(self, col: int, row: int) -> int:
        return (col + row * self._columns) % len(self._cells)

    def set_cell(self, col: int, row: int, cell_type: CellType) -> None:
        self._cells[self._index(col, row)].cell_type = cell_type

    def get_cell(self, col: int, row: int) -> CellType:
        return self._cells[self._index(col, row)].cell_type

    def is_food(self, col: int, row: int) -> bool:
        return self.get_cell(col, row) is CellType.FOOD

    def is_empty(self, col: int, row: int) -> bool:
        return self.get_cell(col, row) is CellType.EMPTY

    def is_snake(self, col: int, row: int) -> bool:
        # SNAKE_HEAD is not a collision
        return self.get_cell(col, row) is CellType.SNAKE

    def empty_count(self) -> int:
        return sum(1 for c in self._cells if c.cell_type is CellType.EMPTY)

    def food_count(self) -> int:
        return sum(1 for c in self._cells if c.cell_type is CellType.FOOD)

    # ---------- Lifecycle ----------
    def reset(self) -> None:
        """Clear the grid and drop fresh food. Pause state is left alone."""
        for cell in self._cells:
            cell.cell_type = CellType.EMPTY
        self._game_over = False
        self._won = False
        self.generate_food()

    def generate_food(self) -> None:
        """Place one food item on a uniformly random empty cell."""
        if self.empty_count() == 0:
            logger.info("board is full, no room for food")
            self._won = True
            self._game_over = True
            return

        col = self._rng.randrange(self._columns)
        row = self._rng.randrange(self._rows)
        while not self.is_empty(col, row):
            col = self._rng.randrange(self._columns)
            row = self._rng.randrange(self._rows)

        self.set_cell(col, row, CellType.FOOD)
        logger.debug("food placed at (%d, %d)", col, row)

    def toggle_pause(self) -> None:
        self._paused = not self._paused

    def end_game(self) -> None:
        if self._game_over:
            return
        self._game_over = True
        logger.info("game over")
        self._emit(GameEvent.SNAKE_DIED)

    # ---------- Events ----------
    def food_eaten_event(self) -> None:
        self._emit(GameEvent.FOOD_EATEN)

    def direction_changed_event(self) -> None:
        self._emit(GameEvent.DIRECTION_CHANGED)

    def _emit(self, event: GameEvent) -> None:
        if self._observer is not None:
            self._observer(event)
