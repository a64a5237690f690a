from flask import Blueprint, jsonify

from .rooms import registry

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Puissance 4 game server!'})


@main.route('/health')
def health():
    return jsonify({'status': 'ok', 'rooms': len(registry)})
