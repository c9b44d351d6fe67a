from flask_socketio import join_room, leave_room, emit
from flask import current_app
from yahtzee import socketio


def _room(game_id: str) -> str:
    return f"game:{game_id}"


def _game_id_from(data):
    """Lowercased game id from an event payload, or None after emitting an error."""
    game_id = data.get('game_id') if isinstance(data, dict) else None
    if not game_id:
        emit('error', {'message': 'game_id is required'})
        return None
    if not isinstance(game_id, str):
        emit('error', {'message': 'game_id must be a string'})
        return None
    return game_id.lower()


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_game(data):
    game_id = _game_id_from(data)
    if game_id is None:
        return
    game = current_app.extensions['game_store'].get(game_id)
    if game is None:
        emit('error', {'message': 'Game not found', 'game_id': game_id})
        return
    join_room(_room(game_id))
    emit('joined', {'room': _room(game_id), 'game': game.to_dict()})


def handle_leave_game(data):
    game_id = _game_id_from(data)
    if game_id is None:
        return
    leave_room(_room(game_id))
    emit('left', {'room': _room(game_id)})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    Rooms are dropped by Socket.IO itself when a client disconnects.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_game', handle_join_game, namespace=namespace)
        socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
