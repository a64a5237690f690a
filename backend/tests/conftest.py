import os
import sys
import pytest

# Ensure the backend root (containing the `puissance4` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from puissance4 import create_app, socketio
from puissance4.rooms import registry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    BOARD_WIDTH = 7
    BOARD_HEIGHT = 6
    ROOM_CODE_LENGTH = 6
    SNAPSHOT_DISPLAY_NAMES = True
    CORS_ALLOWED_ORIGINS = '*'
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    registry.clear()
    application = create_app(TestConfig)
    yield application
    registry.clear()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()
