from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from yahtzee.config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def _cors_origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    origins = _cors_origins(flask_app.config.get('CORS_ORIGIN'))
    CORS(flask_app, origins=origins)

    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # Game storage is injected per app; routes reach it via app.extensions
    from yahtzee.services.games.store import build_store
    store = flask_app.config.get('GAME_STORE_INSTANCE') or build_store(flask_app.config.get('GAME_STORE', 'sql'))
    flask_app.extensions['game_store'] = store

    from yahtzee.routes import main
    flask_app.register_blueprint(main)

    from yahtzee.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api')

    from yahtzee.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Make sure models are registered on the metadata
    from yahtzee import models  # noqa: F401

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    flask_app.logger.info(f"[startup] {flask_app.config.get('APP_NAME')} store={type(store).__name__}")
    return flask_app
