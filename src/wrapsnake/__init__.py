"""Snake on a wraparound grid: simulation core plus pygame and curses front ends."""

from wrapsnake.board import Board, Cell, CellType, InvalidDimensions
from wrapsnake.events import EventChannel, GameEvent
from wrapsnake.session import Session
from wrapsnake.snake import Direction, Segment, Snake

__all__ = [
    "Board", "Cell", "CellType", "InvalidDimensions",
    "EventChannel", "GameEvent",
    "Session",
    "Direction", "Segment", "Snake",
]
