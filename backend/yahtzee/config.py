import os


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///yahtzee.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    APP_NAME = os.environ.get('APP_NAME', 'Yahtzee Score Calculator')
    # '*' or a comma separated list of origins
    CORS_ORIGIN = os.environ.get('CORS_ORIGIN', '*')
    # Exposes demo helpers to the frontend via /api/config
    DEV_MODE = _env_flag('DEV_MODE')
    # 'sql' persists games through SQLAlchemy, 'memory' keeps them in-process
    GAME_STORE = os.environ.get('GAME_STORE', 'sql')
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '1'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '4'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
