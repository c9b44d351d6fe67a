from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': f"Welcome to the {current_app.config['APP_NAME']} server!", 'status': 'ok'})


@main.route('/api/config')
def app_config():
    cfg = current_app.config
    return jsonify({
        'appName': cfg['APP_NAME'],
        'devMode': bool(cfg.get('DEV_MODE')),
        'maxPlayers': int(cfg.get('MAX_PLAYERS', 4)),
    })
