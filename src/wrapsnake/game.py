# game.py
from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

import pygame # type: ignore

from .board import Board, CellType
from .config import (
    WIDTH, HEIGHT, CELL_SIZE, GRID_W, GRID_H,
    BG, GRID, GREEN, BLUE, RED, TEXT,
    Config, CFG, make_rng,
)
from .session import Session
from .snake import Direction

logger = logging.getLogger(__name__)

CELL_COLORS = {
    CellType.EMPTY: BG,
    CellType.SNAKE: GREEN,
    CellType.SNAKE_HEAD: BLUE,
    CellType.FOOD: RED,
}

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,  pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,  pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

# ---------- Helpers ----------
def board_origin(board: Board, width: int = WIDTH, height: int = HEIGHT) -> Tuple[int, int]:
    """Top-left pixel that centers the grid in the window."""
    return (
        (width - board.columns * CELL_SIZE) // 2,
        (height - board.rows * CELL_SIZE) // 2,
    )

def draw_cell(screen: pygame.Surface, origin: Tuple[int, int], gx: int, gy: int, color: Tuple[int, int, int]) -> None:
    rect = pygame.Rect(origin[0] + gx * CELL_SIZE, origin[1] + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, GRID, rect, 1)

def step_due(last_move: int, now_ms: int, move_every_ms: int) -> bool:
    return now_ms - last_move >= move_every_ms

# ---------- Input ----------
def handle_key(session: Session, key: int) -> bool:
    """Apply one key press to the session. Return False to quit."""
    if key == pygame.K_q:
        return False
    if session.board.game_over:
        if key == pygame.K_SPACE:
            session.restart()
        return True
    if key == pygame.K_ESCAPE:
        session.toggle_pause()
        return True
    direction = KEY_DIRECTIONS.get(key)
    if direction is not None:
        session.steer(direction)
    return True

def handle_input(session: Session) -> bool:
    """Drain the pygame event queue. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and not handle_key(session, event.key):
            return False
    return True

# ---------- Draw ----------
def draw_game(screen: pygame.Surface, font: pygame.font.Font, session: Session) -> None:
    screen.fill(BG)
    board = session.board
    origin = board_origin(board, screen.get_width(), screen.get_height())
    for cell in board.cells:
        draw_cell(screen, origin, cell.col, cell.row, CELL_COLORS[cell.cell_type])
    txt = font.render(f"Score: {session.snake.score}", True, TEXT)
    screen.blit(txt, (8, 6))

def draw_banner(screen: pygame.Surface, font: pygame.font.Font, lines) -> None:
    # Dim with translucent overlay
    w, h = screen.get_width(), screen.get_height()
    overlay = pygame.Surface((w, h), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    y = h // 2 - 16 * (len(lines) - 1)
    for text, color in lines:
        surf = font.render(text, True, color)
        screen.blit(surf, surf.get_rect(center=(w // 2, y)))
        y += 32

def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, session: Session) -> None:
    title = "YOU WIN" if session.board.won else "GAME OVER"
    draw_banner(screen, font, [
        (title, (240, 240, 250)),
        ("Press <space> to restart, <q> to quit", TEXT),
        (f"Score: {session.snake.score}", TEXT),
    ])

def draw_paused(screen: pygame.Surface, font: pygame.font.Font) -> None:
    draw_banner(screen, font, [
        ("PAUSED", BLUE),
        ("Press <ESC> to resume, <q> to quit", TEXT),
    ])

# ---------- Loop ----------
def run(cfg: Config = CFG, rng: Optional[random.Random] = None) -> int:
    """Open the window and play until the user quits. Returns the last score."""
    pygame.init()
    font = pygame.font.SysFont(None, 28)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    session = Session(GRID_H, GRID_W, rng=rng or make_rng(cfg.seed))
    last_move = pygame.time.get_ticks()
    running = True

    try:
        while running:
            # 1) input
            running = handle_input(session)
            if not running:
                break

            # 2) update, gated on real time
            now = pygame.time.get_ticks()
            if step_due(last_move, now, cfg.move_every_ms):
                session.tick()
                last_move = now

            # 3) render
            draw_game(screen, font, session)
            if session.board.game_over:
                draw_game_over(screen, font, session)
            elif session.board.paused:
                draw_paused(screen, font)
            pygame.display.flip()
            clock.tick(cfg.gui_fps)
    finally:
        pygame.quit()

    return session.snake.score
