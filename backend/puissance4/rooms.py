"""In-memory room registry.

A room pairs a code with exactly one Game. The registry lock only guards
inserting and deleting entries; everything done to a room's game happens
while holding that room's own lock, so rooms never contend with each other.
"""
import random
import string
import threading
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

from flask import current_app

from puissance4.services.games import Game

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length: int = 6) -> str:
    """Random short code for private games. Uniqueness is the registry's job."""
    return ''.join(random.choices(CODE_ALPHABET, k=length))


class Room:
    def __init__(self, code: str, game: Game):
        self.code = code
        self.game = game
        self.lock = threading.Lock()
        # Set once the room left the registry; holders of a stale
        # reference must treat it as gone.
        self.closed = False

    def __repr__(self):
        return f'<Room {self.code} players={len(self.game.players)} status={self.game.status.value}>'


class RoomRegistry:
    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code):
        with self._lock:
            return code in self._rooms

    def get(self, code: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(code)

    def codes(self) -> List[str]:
        with self._lock:
            return sorted(self._rooms)

    def clear(self) -> None:
        with self._lock:
            for room in self._rooms.values():
                room.closed = True
            self._rooms.clear()

    def _get_or_create(self, code: str, factory: Optional[Callable[[], Game]]):
        with self._lock:
            room = self._rooms.get(code)
            if room is not None or factory is None:
                return room, False
            room = Room(code, factory())
            self._rooms[code] = room
            return room, True

    @contextmanager
    def acquire(self, code: str, factory: Optional[Callable[[], Game]] = None):
        """Yield `(room, created)` with the room lock held.

        Missing rooms are created from `factory` when one is given, otherwise
        `(None, False)` is yielded.
        """
        while True:
            room, created = self._get_or_create(code, factory)
            if room is None:
                yield None, False
                return
            with room.lock:
                if not room.closed:
                    yield room, created
                    return
            # Closed while we waited for its lock: look it up again.

    def create(self, factory: Callable[[], Game], code_length: int = 6) -> Room:
        """Register a game under a freshly generated, unused code."""
        with self._lock:
            code = generate_room_code(code_length)
            while code in self._rooms:
                current_app.logger.warning(f"[room-code] collision on {code}, regenerating")
                code = generate_room_code(code_length)
            room = Room(code, factory())
            self._rooms[code] = room
            return room

    def discard(self, room: Room) -> None:
        """Drop a room. Callers hold `room.lock`."""
        room.closed = True
        with self._lock:
            if self._rooms.get(room.code) is room:
                del self._rooms[room.code]


registry = RoomRegistry()
