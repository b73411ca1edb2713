# console.py
"""
Terminal front end built on curses.

The board is sized to the terminal with a fixed margin on every side;
header lines above it change with the game state and a stats block below
it shows score, measured frame rate and play time.
"""
from __future__ import annotations

import curses
import logging
import random
import time
from collections import deque
from typing import Deque, Optional, Tuple

from .audio import SoundPlayer, load_sounds
from .board import CellType
from .config import CONSOLE_OFFSET, Config, CFG, make_rng
from .events import EventChannel
from .session import Session
from .snake import Direction

logger = logging.getLogger(__name__)

KEY_ESC = 27

KEY_DIRECTIONS = {
    curses.KEY_UP: Direction.UP,       ord("w"): Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,   ord("s"): Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,   ord("a"): Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT, ord("d"): Direction.RIGHT,
}

GLYPHS = {
    CellType.EMPTY: "·",
    CellType.SNAKE: " ",
    CellType.SNAKE_HEAD: " ",
    CellType.FOOD: " ",
}

# color pair ids
PAIR_SNAKE, PAIR_HEAD, PAIR_FOOD, PAIR_EMPTY = 1, 2, 3, 4
PAIR_TITLE, PAIR_PAUSED, PAIR_OVER = 5, 6, 7


class TerminalTooSmall(RuntimeError):
    pass


def board_size(term_rows: int, term_cols: int, offset: int = CONSOLE_OFFSET) -> Tuple[int, int]:
    """(rows, columns) of the board that fits inside the margins."""
    rows = term_rows - 2 * offset
    cols = term_cols - 2 * offset
    if rows < 1 or cols < 1:
        raise TerminalTooSmall(
            f"terminal is {term_cols}x{term_rows}, need more than {2 * offset}x{2 * offset}"
        )
    return rows, cols


def handle_key(session: Session, key: int) -> bool:
    """Apply one key press. Return False to quit."""
    if key in (ord("q"), ord("Q")):
        return False
    if session.board.game_over:
        if key == ord(" "):
            session.restart()
        return True
    if key == KEY_ESC:
        session.toggle_pause()
        return True
    if 0 <= key < 256:
        key = ord(chr(key).lower())
    direction = KEY_DIRECTIONS.get(key)
    if direction is not None:
        session.steer(direction)
    return True


class FPSCounter:
    """Frames seen during the last second."""

    def __init__(self) -> None:
        self._frames: Deque[float] = deque()

    def update(self, now: Optional[float] = None) -> None:
        if now is None:
            now = time.monotonic()
        self._frames.append(now)
        while self._frames and now - self._frames[0] > 1.0:
            self._frames.popleft()

    def count(self) -> int:
        return len(self._frames)


class ConsoleGame:
    def __init__(self, stdscr, session: Session, offset: int = CONSOLE_OFFSET) -> None:
        self.stdscr = stdscr
        self.session = session
        self.offset = offset
        self.center = session.board.columns // 2 + offset
        self.fps_counter = FPSCounter()

    # ---------- Draw ----------
    def _text(self, y: int, x: int, text: str, attr: int = 0) -> None:
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # writing into the last screen cell raises after drawing
            pass

    def _center_text(self, y: int, text: str, attr: int = 0) -> None:
        self._text(y, max(self.center - len(text) // 2, 0), text, attr)

    def draw_header(self) -> None:
        board = self.session.board
        if board.game_over:
            self._center_text(1, "YOU WIN" if board.won else "GAME OVER", curses.color_pair(PAIR_OVER))
            self._center_text(2, "Press <space> to restart the game")
            self._center_text(3, "Press <q> to quit the game")
        elif board.paused:
            self._center_text(1, "PAUSED", curses.color_pair(PAIR_PAUSED))
            self._center_text(2, "Press <q> to quit the game")
            self._center_text(3, "Press <ESC> to play the game")
        else:
            self._center_text(1, "SNAKE", curses.color_pair(PAIR_TITLE))
            self._center_text(2, "Press <q> to quit the game")
            self._center_text(3, "Press <ESC> to pause the game")
            self._center_text(4, "Use arrow keys or <wasd> for movement")

    def draw_stats(self) -> None:
        y = self.session.board.rows + self.offset + 1
        self._text(y, self.offset, f"Score: {self.session.snake.score}")
        self._text(y + 1, self.offset, f"FPS: {self.fps_counter.count()}")
        self._text(y + 2, self.offset, f"{self.session.elapsed_seconds()} seconds")

    def draw_board(self) -> None:
        pairs = {
            CellType.EMPTY: PAIR_EMPTY,
            CellType.SNAKE: PAIR_SNAKE,
            CellType.SNAKE_HEAD: PAIR_HEAD,
            CellType.FOOD: PAIR_FOOD,
        }
        for cell in self.session.board.cells:
            self._text(
                cell.row + self.offset,
                cell.col + self.offset,
                GLYPHS[cell.cell_type],
                curses.color_pair(pairs[cell.cell_type]),
            )

    def draw(self) -> None:
        self.stdscr.erase()
        self.draw_header()
        self.draw_stats()
        self.draw_board()
        self.stdscr.refresh()

    # ---------- Loop ----------
    def frame(self) -> bool:
        """Read input, step, draw. Return False to quit."""
        self.fps_counter.update()
        while True:
            key = self.stdscr.getch()
            if key == -1:
                break
            if not handle_key(self.session, key):
                return False
        self.session.tick()
        self.draw()
        return True


def init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(PAIR_SNAKE, curses.COLOR_WHITE, curses.COLOR_GREEN)
    curses.init_pair(PAIR_HEAD, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(PAIR_FOOD, curses.COLOR_WHITE, curses.COLOR_RED)
    curses.init_pair(PAIR_EMPTY, curses.COLOR_WHITE, curses.COLOR_BLACK)
    curses.init_pair(PAIR_TITLE, curses.COLOR_GREEN, -1)
    curses.init_pair(PAIR_PAUSED, curses.COLOR_BLUE, -1)
    curses.init_pair(PAIR_OVER, curses.COLOR_RED, -1)


def _play(stdscr, cfg: Config, rng: random.Random, channel: Optional[EventChannel]) -> int:
    curses.curs_set(0)
    curses.set_escdelay(25)
    stdscr.nodelay(True)
    stdscr.keypad(True)
    init_colors()

    term_rows, term_cols = stdscr.getmaxyx()
    rows, cols = board_size(term_rows, term_cols)
    session = Session(rows, cols, observer=channel, rng=rng)
    game = ConsoleGame(stdscr, session)

    frame_s = 1.0 / max(cfg.console_fps, 1)
    while True:
        start = time.monotonic()
        if not game.frame():
            break
        spare = frame_s - (time.monotonic() - start)
        if spare > 0:
            time.sleep(spare)
    return session.snake.score


def run(cfg: Config = CFG, sound: bool = False, rng: Optional[random.Random] = None) -> int:
    """Play in the current terminal. Returns the last score."""
    channel: Optional[EventChannel] = None
    player: Optional[SoundPlayer] = None
    if sound:
        sounds = load_sounds(cfg.sound_volume)
        if sounds:
            channel = EventChannel(cfg.event_queue_size)
            player = SoundPlayer(channel, sounds)
            player.start()

    try:
        return curses.wrapper(_play, cfg, rng or make_rng(cfg.seed), channel)
    finally:
        if player is not None:
            player.stop()
            logger.info("sound player stopped, %d events dropped", channel.dropped if channel else 0)
