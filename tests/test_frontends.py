"""
Tests for the input and layout helpers of the pygame and curses front ends.
"""

import curses
import random
from unittest.mock import Mock, patch

import pygame
import pytest

from wrapsnake import console, game
from wrapsnake.board import Board
from wrapsnake.config import CELL_SIZE
from wrapsnake.session import Session
from wrapsnake.snake import Direction


@pytest.fixture
def session():
    return Session(10, 10, rng=random.Random(3))


class TestPygameInput:
    @pytest.mark.parametrize("key,direction", [
        (pygame.K_UP, Direction.UP),
        (pygame.K_w, Direction.UP),
        (pygame.K_DOWN, Direction.DOWN),
        (pygame.K_s, Direction.DOWN),
    ])
    def test_steering_keys(self, session, key, direction):
        assert game.handle_key(session, key) is True
        assert session.snake.direction is direction

    def test_q_quits(self, session):
        assert game.handle_key(session, pygame.K_q) is False

    def test_escape_toggles_pause(self, session):
        game.handle_key(session, pygame.K_ESCAPE)
        assert session.board.paused is True
        game.handle_key(session, pygame.K_ESCAPE)
        assert session.board.paused is False

    def test_space_restarts_only_after_game_over(self, session):
        session.tick()
        game.handle_key(session, pygame.K_SPACE)
        assert session.snake.head == (6, 2)

        session.board.end_game()
        game.handle_key(session, pygame.K_SPACE)
        assert session.board.game_over is False
        assert session.snake.head == (5, 2)

    def test_step_gate(self):
        assert game.step_due(1000, 1149, 150) is False
        assert game.step_due(1000, 1150, 150) is True

    def test_board_is_centered(self):
        board = Board(10, 20)
        x, y = game.board_origin(board, width=800, height=600)
        assert x == (800 - 20 * CELL_SIZE) // 2
        assert y == (600 - 10 * CELL_SIZE) // 2


class TestConsoleInput:
    @pytest.mark.parametrize("key,direction", [
        (curses.KEY_UP, Direction.UP),
        (ord("w"), Direction.UP),
        (ord("W"), Direction.UP),
        (curses.KEY_DOWN, Direction.DOWN),
        (ord("s"), Direction.DOWN),
    ])
    def test_steering_keys(self, session, key, direction):
        assert console.handle_key(session, key) is True
        assert session.snake.direction is direction

    def test_left_is_a_reversal_at_start(self, session):
        console.handle_key(session, curses.KEY_LEFT)
        assert session.snake.direction is Direction.RIGHT

    @pytest.mark.parametrize("key", [ord("q"), ord("Q")])
    def test_q_quits(self, session, key):
        assert console.handle_key(session, key) is False

    def test_escape_pauses_and_blocks_steering(self, session):
        console.handle_key(session, console.KEY_ESC)
        assert session.board.paused is True
        console.handle_key(session, curses.KEY_UP)
        assert session.snake.direction is Direction.RIGHT

    def test_space_restarts_after_game_over(self, session):
        session.tick()
        session.board.end_game()
        console.handle_key(session, ord(" "))
        assert session.board.game_over is False
        assert session.snake.head == (5, 2)


class TestConsoleLayout:
    def test_board_size_leaves_margins(self):
        assert console.board_size(40, 120, offset=5) == (30, 110)

    @pytest.mark.parametrize("rows,cols", [(10, 80), (24, 10), (5, 5)])
    def test_terminal_too_small(self, rows, cols):
        with pytest.raises(console.TerminalTooSmall):
            console.board_size(rows, cols, offset=5)

    def test_fps_counter_window(self):
        counter = console.FPSCounter()
        for i in range(30):
            counter.update(now=i * 0.125)
        # t = 2.625 .. 3.625
        assert counter.count() == 9


class TestConsoleFrame:
    def test_frame_reads_keys_then_ticks(self, session):
        stdscr = Mock()
        stdscr.getch.side_effect = [curses.KEY_UP, -1]
        con = console.ConsoleGame(stdscr, session)

        with patch.object(console.ConsoleGame, "draw") as draw:
            assert con.frame() is True

        assert session.snake.head == (5, 1)
        draw.assert_called_once_with()

    def test_frame_stops_on_quit(self, session):
        stdscr = Mock()
        stdscr.getch.side_effect = [ord("q")]
        con = console.ConsoleGame(stdscr, session)

        with patch.object(console.ConsoleGame, "draw") as draw:
            assert con.frame() is False

        assert session.snake.head == (5, 2)
        draw.assert_not_called()
