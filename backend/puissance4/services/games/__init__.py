"""Game domain: board, rules and errors.

This package holds the pure game logic imported by socket handlers and
HTTP routes. It does no I/O and knows nothing about rooms or transports.
"""

from .board import Board
from .engine import DRAW, MAX_PLAYERS, Game, GameSnapshot, GameStatus, WinnerType
from .errors import (
    ColumnFullError,
    DuplicatePlayerError,
    GameAlreadyStartedError,
    InvalidColumnError,
    NotEnoughPlayersError,
    NotInProgressError,
    NotYourTurnError,
    Puissance4Error,
    RoomFullError,
    RoomNotFoundError,
)

__all__ = [
    'Board',
    'ColumnFullError',
    'DRAW',
    'DuplicatePlayerError',
    'Game',
    'GameAlreadyStartedError',
    'GameSnapshot',
    'GameStatus',
    'InvalidColumnError',
    'MAX_PLAYERS',
    'NotEnoughPlayersError',
    'NotInProgressError',
    'NotYourTurnError',
    'Puissance4Error',
    'RoomFullError',
    'RoomNotFoundError',
    'WinnerType',
]
