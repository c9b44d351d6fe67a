import os
import sys
import pytest

# Ensure the backend root (containing the `yahtzee` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from yahtzee import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    APP_NAME = 'Yahtzee Score Calculator'
    CORS_ORIGIN = '*'
    DEV_MODE = False
    GAME_STORE = 'sql'
    MIN_PLAYERS = 1
    MAX_PLAYERS = 4
    LOG_LEVEL = 'INFO'


class MemoryStoreConfig(TestConfig):
    GAME_STORE = 'memory'


@pytest.fixture(params=['sql', 'memory'])
def flask_app(request):
    config_class = TestConfig if request.param == 'sql' else MemoryStoreConfig
    application = create_app(config_class)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def store(flask_app):
    return flask_app.extensions['game_store']


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
