import os


def _flag(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Board size (columns x rows)
    BOARD_WIDTH = int(os.environ.get('BOARD_WIDTH', '7'))
    BOARD_HEIGHT = int(os.environ.get('BOARD_HEIGHT', '6'))
    # Length of generated private game codes
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '6'))
    # Show display names instead of connection ids in game-status payloads
    SNAPSHOT_DISPLAY_NAMES = _flag('SNAPSHOT_DISPLAY_NAMES', '1')
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', 'http://localhost:3001').split(',')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '3000'))
