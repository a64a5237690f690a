from flask import current_app, request
from flask_socketio import disconnect, emit, join_room, leave_room
from typing import Optional

from puissance4 import socketio
from puissance4.rooms import Room, registry
from puissance4.services.games import (
    DuplicatePlayerError,
    Game,
    GameAlreadyStartedError,
    GameStatus,
    NotEnoughPlayersError,
    NotYourTurnError,
    Puissance4Error,
    RoomFullError,
    RoomNotFoundError,
)

GAME_STATUS = 'game-status'
GAME_CODE = 'game-code'
ERROR = 'error'

ROOM_REQUIRED = 'Room is required'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _display_label(label, sid: str) -> str:
    label = (label or '').strip() if isinstance(label, str) else ''
    return label or f"player_{sid[:6]}"


def _new_game(sid: str, label: str) -> Game:
    cfg = current_app.config
    names = {sid: label} if cfg.get('SNAPSHOT_DISPLAY_NAMES', True) else None
    return Game(
        [sid],
        display_names=names,
        width=int(cfg.get('BOARD_WIDTH', 7)),
        height=int(cfg.get('BOARD_HEIGHT', 6)),
    )


def _broadcast(room: Room) -> None:
    emit(GAME_STATUS, room.game.snapshot().to_json(), to=room.code)


def _reply_error(reason: str) -> None:
    emit(ERROR, reason)


def _add_player(room: Room, sid: str, label: str) -> Optional[Puissance4Error]:
    """Seat `sid` in `room`; returns the refusal instead of raising it."""
    try:
        room.game.add_player(sid, label)
    except (RoomFullError, DuplicatePlayerError, GameAlreadyStartedError) as exc:
        return exc
    return None


# ---- Handlers ----

def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(*args):
    # Notification only: rooms are cleaned up by an explicit leave-room.
    current_app.logger.info(f"[disconnect] sid={_get_sid()}")


def handle_join_room(room_id=None, label=None):
    sid = _get_sid()
    if not room_id:
        _reply_error(ROOM_REQUIRED)
        return
    label = _display_label(label, sid)
    current_app.logger.info(f"[join-room] room={room_id} sid={sid} label={label}")
    with registry.acquire(room_id, lambda: _new_game(sid, label)) as (room, created):
        if not created:
            refused = _add_player(room, sid, label)
            if refused is not None:
                # Setup actions fail soft; the client simply sees the current state.
                current_app.logger.info(f"[join-room] room={room_id} sid={sid} ignored: {refused}")
        join_room(room.code)
        _broadcast(room)


def handle_leave_room(room_id=None, label=None):
    sid = _get_sid()
    if not room_id:
        _reply_error(ROOM_REQUIRED)
        return
    current_app.logger.info(f"[leave-room] room={room_id} sid={sid} label={label}")
    leave_room(room_id)
    with registry.acquire(room_id) as (room, _):
        if room is None:
            return
        room.game.remove_player(sid)
        if not room.game.players:
            registry.discard(room)
            current_app.logger.info(f"[room-closed] room={room_id}")
            return
        _broadcast(room)


def handle_start_game(room_id=None):
    if not room_id:
        _reply_error(ROOM_REQUIRED)
        return
    current_app.logger.info(f"[start-game] room={room_id} sid={_get_sid()}")
    with registry.acquire(room_id) as (room, _):
        if room is None:
            return
        try:
            room.game.start()
        except (NotEnoughPlayersError, GameAlreadyStartedError) as exc:
            current_app.logger.info(f"[start-game] room={room_id} ignored: {exc}")
            return
        _broadcast(room)


def handle_play_turn(room_id=None, column=None):
    sid = _get_sid()
    if not room_id:
        _reply_error(ROOM_REQUIRED)
        return
    current_app.logger.info(f"[play-turn] room={room_id} sid={sid} column={column}")
    with registry.acquire(room_id) as (room, _):
        if room is None or room.game.status != GameStatus.IN_PROGRESS:
            return
        if not room.game.is_current_player(sid):
            _reply_error(NotYourTurnError().reason)
            return
        try:
            room.game.play(column)
        except Puissance4Error as exc:
            current_app.logger.info(f"[play-turn] room={room_id} sid={sid} rejected: {exc}")
            _reply_error(exc.reason)
            return
        if room.game.status == GameStatus.FINISHED:
            current_app.logger.info(
                f"[game-over] room={room_id} winner_type={room.game.winner_type.value} turns={room.game.turns}"
            )
        _broadcast(room)


def handle_create_game(label=None):
    sid = _get_sid()
    label = _display_label(label, sid)
    length = int(current_app.config.get('ROOM_CODE_LENGTH', 6))
    room = registry.create(lambda: _new_game(sid, label), code_length=length)
    current_app.logger.info(f"[create-game] room={room.code} sid={sid} label={label}")
    with room.lock:
        join_room(room.code)
        emit(GAME_STATUS, room.game.snapshot().to_json())
        emit(GAME_CODE, room.code)


def handle_join_game(game_code=None, label=None):
    sid = _get_sid()
    label = _display_label(label, sid)
    current_app.logger.info(f"[join-game] room={game_code} sid={sid} label={label}")
    with registry.acquire(game_code) as (room, _):
        if room is None:
            _reply_error(RoomNotFoundError(game_code).reason)
            return
        refused = _add_player(room, sid, label)
        if isinstance(refused, (RoomFullError, GameAlreadyStartedError)):
            _reply_error(refused.reason)
            return
        join_room(room.code)
        _broadcast(room)


def handle_reset_game(room_id=None):
    sid = _get_sid()
    if not room_id:
        _reply_error(ROOM_REQUIRED)
        return
    current_app.logger.info(f"[reset-game] room={room_id} sid={sid}")
    with registry.acquire(room_id) as (room, _):
        if room is None or sid not in room.game.players:
            return
        room.game.reset()
        _broadcast(room)


def handle_socket_error(exc):
    current_app.logger.error(f"[socket-error] sid={_get_sid()}: {exc}", exc_info=exc)
    disconnect()


HANDLERS = {
    'connect': handle_connect,
    'disconnect': handle_disconnect,
    'join-room': handle_join_room,
    'leave-room': handle_leave_room,
    'start-game': handle_start_game,
    'play-turn': handle_play_turn,
    'create-game': handle_create_game,
    'join-game': handle_join_game,
    'reset-game': handle_reset_game,
}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on `namespace`."""
    for event, handler in HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
    socketio.on_error_default(handle_socket_error)
