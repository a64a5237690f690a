import json
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .board import Board
from .errors import (
    DuplicatePlayerError,
    GameAlreadyStartedError,
    NotEnoughPlayersError,
    NotInProgressError,
    RoomFullError,
)

MAX_PLAYERS = 2
DRAW = 'Draw'


class GameStatus(str, Enum):
    STANDBY = 'STANDBY'
    IN_PROGRESS = 'IN_PROGRESS'
    FINISHED = 'FINISHED'


class WinnerType(str, Enum):
    NO_WINNER = 'NO_WINNER'
    PLAYER = 'PLAYER'
    DRAW = 'DRAW'


@dataclass(frozen=True)
class GameSnapshot:
    status: GameStatus
    board: Tuple[Tuple[int, ...], ...]
    players: Tuple[str, ...]
    current_player: Optional[str]
    winner: Optional[str]
    winner_type: WinnerType
    turns: int

    def to_dict(self) -> dict:
        """Wire mapping rendered by clients; keys must stay stable."""
        return {
            'status': self.status.value,
            'board': [list(row) for row in self.board],
            'players': list(self.players),
            'currentPlayer': self.current_player or '',
            'winner': self.winner or '',
            'winnerType': self.winner_type.value,
            'turns': self.turns,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class Game:
    """One board and the turn state of its (at most two) players.

    Player ids are opaque keys used for equality and turn checks. When
    `display_names` is given, snapshots show those names instead of ids.
    """

    def __init__(self, players=None, display_names: Optional[Dict[str, str]] = None,
                 width: int = 7, height: int = 6):
        players = list(players or [])
        if len(players) > MAX_PLAYERS:
            raise RoomFullError()
        if len(set(players)) != len(players):
            raise DuplicatePlayerError()
        self._board = Board(width, height)
        self._players: List[str] = []
        self._marks: Dict[str, int] = {}
        for player_id in players:
            self._seat(player_id)
        self._display_names = dict(display_names) if display_names is not None else None
        self._status = GameStatus.STANDBY
        self._current_player: Optional[str] = None
        self._winner: Optional[str] = None
        self._winner_type = WinnerType.NO_WINNER
        self._turns = 0

    # ---- Read-only state ----

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def board(self) -> Tuple[Tuple[int, ...], ...]:
        return self._board.rows()

    @property
    def players(self) -> Tuple[str, ...]:
        return tuple(self._players)

    @property
    def current_player(self) -> Optional[str]:
        return self._current_player

    @property
    def winner(self) -> Optional[str]:
        return self._winner

    @property
    def winner_type(self) -> WinnerType:
        return self._winner_type

    @property
    def turns(self) -> int:
        return self._turns

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    def is_full(self) -> bool:
        return len(self._players) >= MAX_PLAYERS

    def is_current_player(self, player_id) -> bool:
        return self._current_player is not None and self._current_player == player_id

    def display_name(self, player_id: str) -> str:
        if self._display_names is None:
            return player_id
        return self._display_names.get(player_id) or player_id

    # ---- Players ----

    def mark_of(self, player_id: str) -> Optional[int]:
        """Board mark owned by a seated player; fixed until they leave."""
        return self._marks.get(player_id)

    def _seat(self, player_id: str) -> None:
        free = [m for m in range(1, MAX_PLAYERS + 1) if m not in self._marks.values()]
        self._marks[player_id] = free[0]
        self._players.append(player_id)

    def add_player(self, player_id: str, display_name: Optional[str] = None) -> None:
        if player_id in self._players:
            raise DuplicatePlayerError()
        if self.is_full():
            raise RoomFullError()
        if self._status != GameStatus.STANDBY:
            raise GameAlreadyStartedError()
        self._seat(player_id)
        if self._display_names is not None and display_name:
            self._display_names[player_id] = display_name

    def remove_player(self, player_id: str) -> bool:
        """Drop a player and free their mark.

        Leaving an in-progress game forfeits it to the player still seated.
        Otherwise the turn moves on if it was theirs. Display names are kept
        so a departed winner still shows by name.
        """
        if player_id not in self._players:
            return False
        index = self._players.index(player_id)
        self._players.remove(player_id)
        del self._marks[player_id]
        if self._status == GameStatus.IN_PROGRESS and self._players:
            remaining = self._players[0]
            self._status = GameStatus.FINISHED
            self._winner = remaining
            self._winner_type = WinnerType.PLAYER
            self._current_player = remaining
        elif self._current_player == player_id:
            if self._players:
                self._current_player = self._players[index % len(self._players)]
            else:
                self._current_player = None
        return True

    # ---- Lifecycle ----

    def start(self) -> None:
        if self._status != GameStatus.STANDBY:
            raise GameAlreadyStartedError()
        if len(self._players) < MAX_PLAYERS:
            raise NotEnoughPlayersError()
        self._status = GameStatus.IN_PROGRESS
        self._current_player = self._players[0]

    def reset(self) -> None:
        self._board.clear()
        self._status = GameStatus.STANDBY
        self._current_player = None
        self._winner = None
        self._winner_type = WinnerType.NO_WINNER
        self._turns = 0

    def play(self, column) -> None:
        """Drop the current player's mark into `column`.

        Raises NotInProgressError, InvalidColumnError or ColumnFullError
        before anything is mutated.
        """
        if self._status != GameStatus.IN_PROGRESS:
            raise NotInProgressError()

        index = self._players.index(self._current_player)
        row = self._board.drop(column, self._marks[self._current_player])

        if self._board.is_winning_cell(row, column):
            self._status = GameStatus.FINISHED
            self._winner = self._current_player
            self._winner_type = WinnerType.PLAYER
        elif self._board.is_full():
            self._status = GameStatus.FINISHED
            self._winner = DRAW
            self._winner_type = WinnerType.DRAW
        else:
            self._current_player = self._players[(index + 1) % len(self._players)]
            self._turns += 1

    # ---- Projection ----

    def snapshot(self) -> GameSnapshot:
        winner = self._winner
        if winner is not None and self._winner_type == WinnerType.PLAYER:
            winner = self.display_name(winner)
        current = self._current_player
        return GameSnapshot(
            status=self._status,
            board=self._board.rows(),
            players=tuple(self.display_name(p) for p in self._players),
            current_player=self.display_name(current) if current is not None else None,
            winner=winner,
            winner_type=self._winner_type,
            turns=self._turns,
        )

    def __str__(self):
        return self._board.render()
