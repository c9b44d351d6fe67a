from flask import Blueprint, jsonify, request, current_app
from yahtzee import socketio
from yahtzee.services.scoring import (
    AlreadyScored,
    Category,
    NotScored,
    ScoringError,
    bonus_eligible,
    describe_score,
    preview_score,
    rank_players,
    score_all,
    score_category,
    upper_bonus_progress,
)
from yahtzee.services.scoring.engine import validate_hand
from yahtzee.services.games.sessions import (
    GameError,
    GameNotFound,
    clear_player_score,
    commit_player_score,
    create_game as svc_create_game,
    edit_player_score,
    record_player_score,
)


games = Blueprint('games', __name__)

_CONFLICT_ERRORS = (AlreadyScored, NotScored)


def _store():
    return current_app.extensions['game_store']


def _load_game(game_id: str):
    game = _store().get(game_id.lower())
    if game is None:
        raise GameNotFound('Game not found')
    return game


def _broadcast(game_id: str, event: str, payload: dict) -> None:
    socketio.emit(event, payload, to=f"game:{game_id}", namespace='/ws')


@games.errorhandler(ScoringError)
def handle_scoring_error(exc: ScoringError):
    status = 409 if isinstance(exc, _CONFLICT_ERRORS) else 400
    current_app.logger.info(f"[rejected] {type(exc).__name__}: {exc.message}")
    return jsonify(exc.to_dict()), status


@games.errorhandler(GameError)
def handle_game_error(exc: GameError):
    return jsonify(exc.to_dict()), exc.status_code


@games.route('/calculate', methods=['POST'])
def calculate():
    data = request.get_json(silent=True) or {}
    dice = validate_hand(data.get('dice') or [])
    category = Category.parse(data.get('category'))
    return jsonify({
        'score': score_category(category, dice),
        'dice': dice,
        'category': category.value,
        'description': describe_score(category, dice),
    })


@games.route('/calculate-all', methods=['GET'])
def calculate_all():
    raw = request.args.get('dice')
    if not raw:
        return jsonify({'error': 'Missing dice parameter'}), 400
    try:
        dice = [int(d) for d in raw.split(',')]
    except ValueError:
        return jsonify({'error': 'Invalid dice. Must be 5 numbers between 1 and 6.'}), 400
    scores = score_all(dice)
    return jsonify({'scores': {c.value: s for c, s in scores.items()}, 'dice': dice})


@games.route('/game/create', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    cfg = current_app.config
    store = _store()
    game = svc_create_game(
        store.new_game_id(),
        data.get('players'),
        min_players=int(cfg.get('MIN_PLAYERS', 1)),
        max_players=int(cfg.get('MAX_PLAYERS', 4)),
    )
    store.put(game)
    payload = game.to_dict()
    return jsonify({
        'gameId': game.game_id,
        'players': payload['players'],
        'createdAt': payload['createdAt'],
    }), 201


@games.route('/game/<string:game_id>', methods=['GET'])
def get_game(game_id):
    return jsonify(_load_game(game_id).to_dict())


@games.route('/game/<string:game_id>', methods=['DELETE'])
def delete_game(game_id):
    game_id = game_id.lower()
    if not _store().delete(game_id):
        raise GameNotFound('Game not found')
    _broadcast(game_id, 'session_ended', {'game_id': game_id})
    return '', 204


@games.route('/game/<string:game_id>/preview', methods=['POST'])
def preview(game_id):
    data = request.get_json(silent=True) or {}
    game = _load_game(game_id)
    player = game.find_player(data.get('playerName'))
    category = Category.parse(data.get('category'))
    dice = validate_hand(data.get('dice') or [])
    score = preview_score(player.scorecard, category, dice)
    used = player.scorecard.is_used(category)
    eligible = bonus_eligible(player.scorecard, dice)
    # The yahtzee box is the only used category that can still take a bonus
    bonus = eligible and (category is Category.YAHTZEE or not used)
    progress = upper_bonus_progress(player.scorecard, category, score) if category.is_upper else None
    return jsonify({
        'playerName': player.name,
        'category': category.value,
        'score': score,
        'alreadyScored': used,
        'bonusYahtzee': bonus,
        'joker': bonus and category is not Category.YAHTZEE,
        'description': describe_score(category, dice),
        'upperBonusProgress': progress.to_dict() if progress else None,
    })


@games.route('/game/<string:game_id>/score', methods=['POST'])
def submit_score(game_id):
    data = request.get_json(silent=True) or {}
    player_name = data.get('playerName')
    category = data.get('category')
    dice = data.get('dice')
    manual = data.get('score')
    if dice is None and manual is None:
        return jsonify({'error': 'Provide either dice or a score'}), 400

    store = _store()
    game_id = _load_game(game_id).game_id
    with store.lock(game_id):
        game = _load_game(game_id)
        if dice is not None:
            result = commit_player_score(game, player_name, category, dice)
            score = result.committed_score
            bonus_awarded, joker, bonus_points = result.bonus_awarded, result.used_as_joker, result.bonus_points
        else:
            record_player_score(game, player_name, category, manual)
            score = manual
            bonus_awarded, joker, bonus_points = False, False, 0
        store.put(game)

    player = game.find_player(player_name)
    current_app.logger.info(
        f"[score] game={game.game_id} player={player.name} category={category} score={score} bonus={bonus_awarded}"
    )
    _broadcast(game.game_id, 'state_update', {'game_id': game.game_id, 'playerName': player.name})
    return jsonify({
        'playerName': player.name,
        'category': Category.parse(category).value,
        'score': score,
        'finalScore': player.final_score.to_dict(),
        'scorecard': player.scorecard.to_dict(),
        'bonusYahtzee': bonus_awarded,
        'joker': joker,
        'bonusPoints': bonus_points,
    })


@games.route('/game/<string:game_id>/edit-score', methods=['POST'])
def edit_score(game_id):
    data = request.get_json(silent=True) or {}
    player_name = data.get('playerName')
    category = Category.parse(data.get('category'))
    value = data.get('score')

    store = _store()
    game_id = _load_game(game_id).game_id
    with store.lock(game_id):
        game = _load_game(game_id)
        final_score = edit_player_score(game, player_name, category, value)
        store.put(game)

    player = game.find_player(player_name)
    current_app.logger.info(f"[edit] game={game.game_id} player={player.name} category={category.value} score={value}")
    _broadcast(game.game_id, 'state_update', {'game_id': game.game_id, 'playerName': player.name})
    return jsonify({
        'playerName': player.name,
        'category': category.value,
        'score': value,
        'finalScore': final_score.to_dict(),
        'scorecard': player.scorecard.to_dict(),
    })


@games.route('/game/<string:game_id>/clear-score', methods=['POST'])
def clear_score(game_id):
    data = request.get_json(silent=True) or {}
    player_name = data.get('playerName')
    category = Category.parse(data.get('category'))

    store = _store()
    game_id = _load_game(game_id).game_id
    with store.lock(game_id):
        game = _load_game(game_id)
        final_score = clear_player_score(game, player_name, category)
        store.put(game)

    player = game.find_player(player_name)
    current_app.logger.info(f"[clear] game={game.game_id} player={player.name} category={category.value}")
    _broadcast(game.game_id, 'state_update', {'game_id': game.game_id, 'playerName': player.name})
    return jsonify({
        'playerName': player.name,
        'category': category.value,
        'finalScore': final_score.to_dict(),
        'scorecard': player.scorecard.to_dict(),
    })


@games.route('/game/<string:game_id>/leaderboard', methods=['GET'])
def leaderboard(game_id):
    game = _load_game(game_id)
    return jsonify({
        'gameId': game.game_id,
        'leaderboard': [entry.to_dict() for entry in rank_players(game.players)],
    })
