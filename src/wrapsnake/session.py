# session.py
from __future__ import annotations

import logging
import random
import time
from typing import Optional

from .board import Board, Observer
from .snake import Direction, Snake

logger = logging.getLogger(__name__)


class Session:
    """One game: a board, a snake, and the per-frame rules both front ends share."""

    def __init__(
        self,
        rows: int,
        columns: int,
        observer: Optional[Observer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.board = Board(rows, columns, observer=observer, rng=rng)
        self.snake = Snake()
        self.snake.paint(self.board)
        self.board.generate_food()
        self.started = time.monotonic()
        logger.info("new session on a %dx%d board", columns, rows)

    @property
    def active(self) -> bool:
        return not (self.board.game_over or self.board.paused)

    def steer(self, direction: Direction) -> bool:
        if not self.active:
            return False
        return self.snake.change_direction(direction, self.board)

    def toggle_pause(self) -> None:
        if self.board.game_over:
            return
        self.board.toggle_pause()
        logger.debug("paused=%s", self.board.paused)

    def restart(self) -> None:
        self.board.reset()
        self.snake.reset()
        self.snake.paint(self.board)
        if self.board.food_count() == 0:
            # fresh food landed under the starting body
            self.board.generate_food()
        self.started = time.monotonic()
        logger.info("session restarted")

    def tick(self) -> bool:
        """Paint and move once. Returns False when paused or over."""
        if not self.active:
            return False
        self.snake.update(self.board)
        self.snake.advance(self.board)
        if self.board.game_over:
            logger.info("final score %d", self.snake.score)
        return True

    def elapsed_seconds(self, now: Optional[float] = None) -> int:
        if now is None:
            now = time.monotonic()
        return int(now - self.started)
