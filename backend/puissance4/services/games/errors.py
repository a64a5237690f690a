"""Game and room errors.

Every error carries the message sent back to the participant that caused
it. None of them is ever broadcast to a room.
"""


class Puissance4Error(Exception):
    """Base class for all game errors."""
    message = 'Invalid action'

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def reason(self) -> str:
        return str(self)


# ---- Moves ----

class NotInProgressError(Puissance4Error):
    message = 'Game is not in progress'


class InvalidColumnError(Puissance4Error):
    message = 'Invalid column'


class ColumnFullError(Puissance4Error):
    message = 'Column is full'


class NotYourTurnError(Puissance4Error):
    message = "It's not your turn"


# ---- Players and lifecycle ----

class RoomFullError(Puissance4Error):
    message = 'Room is full'


class DuplicatePlayerError(Puissance4Error):
    message = 'Player already in game'


class NotEnoughPlayersError(Puissance4Error):
    message = 'Two players are required to start'


class GameAlreadyStartedError(Puissance4Error):
    message = 'Game has already started'


# ---- Rooms ----

class RoomNotFoundError(Puissance4Error):
    message = 'Game not found'

    def __init__(self, room_id=None):
        self.room_id = room_id
        super().__init__()
