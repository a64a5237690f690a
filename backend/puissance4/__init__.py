import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or '*'
    if allowed_origins == ['*']:
        allowed_origins = '*'
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from puissance4.main import main
    flask_app.register_blueprint(main)

    from puissance4.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from puissance4.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('rooms')
    def rooms_command():
        """Lists live rooms with their status and players."""
        from puissance4.rooms import registry
        codes = registry.codes()
        if not codes:
            click.echo('No live rooms.')
            return
        for code in codes:
            room = registry.get(code)
            if room is None:
                continue
            snap = room.game.snapshot()
            click.echo(f"{code}\t{snap.status.value}\t{len(snap.players)}/2\tturns={snap.turns}")

    flask_app.cli.add_command(rooms_command)

    return flask_app
