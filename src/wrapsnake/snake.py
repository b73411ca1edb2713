# snake.py
from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, NamedTuple, Optional, Tuple

from .board import Board, CellType
from .config import START_BODY

logger = logging.getLogger(__name__)


class Direction(Enum):
    # (dx, dy)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.dx == -b.dx and a.dy == -b.dy


class Segment(NamedTuple):
    col: int
    row: int


class Snake:
    """
    Body segments stored head-first in a deque.

    The snake paints itself onto a Board in `update` and moves in `advance`;
    growth happens in `update` by duplicating the tail, so the extra segment
    only shows up once the tail moves on.
    """

    def __init__(self) -> None:
        self._body: Deque[Segment] = deque()
        self._direction = Direction.RIGHT
        self.reset()

    def reset(self) -> None:
        self._body.clear()
        self._body.extend(Segment(col, row) for col, row in START_BODY)
        self._direction = Direction.RIGHT

    # ---------- State ----------
    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def head(self) -> Segment:
        return self._body[0]

    @property
    def body(self) -> Tuple[Segment, ...]:
        return tuple(self._body)

    @property
    def score(self) -> int:
        return len(self._body) - len(START_BODY)

    def __len__(self) -> int:
        return len(self._body)

    # ---------- Input ----------
    def change_direction(self, requested: Direction, board: Optional[Board] = None) -> bool:
        """Turn unless `requested` is a 180° reversal. Returns True if accepted."""
        if is_opposite(requested, self._direction):
            return False
        self._direction = requested
        if board is not None:
            board.direction_changed_event()
        return True

    # ---------- Tick ----------
    def update(self, board: Board) -> None:
        head = self._body[0]
        if board.is_food(head.col, head.row):
            self._grow(board)
            board.generate_food()
            board.food_eaten_event()
            logger.debug("food eaten, length now %d", len(self._body))
        self.paint(board)

    def paint(self, board: Board) -> None:
        """Tag occupied cells: head SNAKE_HEAD, everything else SNAKE."""
        # Tail first so a stacked duplicate never hides the head.
        for i in range(len(self._body) - 1, -1, -1):
            seg = self._body[i]
            board.set_cell(seg.col, seg.row, CellType.SNAKE_HEAD if i == 0 else CellType.SNAKE)

    def advance(self, board: Board) -> None:
        new_head = self._next_head(board)

        if board.is_snake(new_head.col, new_head.row):
            board.end_game()
            return

        self._body.appendleft(new_head)
        self._pop_tail(board)

    # ---------- Helpers ----------
    def _next_head(self, board: Board) -> Segment:
        head = self._body[0]
        return Segment(
            (head.col + self._direction.dx) % board.columns,
            (head.row + self._direction.dy) % board.rows,
        )

    def _grow(self, board: Board) -> None:
        tail = self._body[-1]
        board.set_cell(tail.col, tail.row, CellType.SNAKE)
        self._body.append(Segment(tail.col, tail.row))

    def _pop_tail(self, board: Board) -> None:
        tail = self._body.pop()
        board.set_cell(tail.col, tail.row, CellType.EMPTY)
