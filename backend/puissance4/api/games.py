from flask import Blueprint, jsonify

from puissance4.rooms import registry
from puissance4.services.games import RoomNotFoundError

games = Blueprint('games', __name__)


@games.route('/', methods=['GET'])
def list_games():
    """
    Returns the codes of every live room.
    """
    return jsonify({'rooms': registry.codes()})


@games.route('/<string:room_id>/state', methods=['GET'])
def get_game_state(room_id):
    """
    Returns the same snapshot that game-status broadcasts carry.
    """
    with registry.acquire(room_id) as (room, _):
        if room is None:
            return jsonify({'error': RoomNotFoundError(room_id).reason}), 404
        payload = room.game.snapshot().to_dict()
    payload['room'] = room_id
    return jsonify(payload)
