from dataclasses import dataclass
from typing import Optional
import random

# ----- Window & grid (pygame front end) -----
WIDTH, HEIGHT = 800, 800
CELL_SIZE = 30
GRID_W, GRID_H = WIDTH // CELL_SIZE, HEIGHT // CELL_SIZE

# ----- Colors -----
BG    = (0, 0, 0)
GRID  = (40, 40, 48)
GREEN = (80, 200, 80)
BLUE  = (70, 110, 230)
RED   = (200, 70, 70)
TEXT  = (220, 220, 230)

# ----- Terminal front end -----
CONSOLE_OFFSET = 5          # margin (in characters) around the board

# ----- Starting snake (head first) -----
START_BODY = ((5, 2), (4, 2), (3, 2), (2, 2))

# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None
    move_every_ms: int = 150     # pygame: one grid step per interval
    gui_fps: int = 60
    console_fps: int = 15
    event_queue_size: int = 8
    sound_volume: float = 0.4

CFG = Config()


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Food placement source; seed it for reproducible games."""
    return random.Random(seed)
