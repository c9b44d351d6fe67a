import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from yahtzee.services.scoring import (
    CommitResult,
    FinalScore,
    Scorecard,
    clear_score,
    commit_score,
    compute_final_score,
    edit_score,
    record_manual_score,
)

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 64


class GameError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.message}


class InvalidGame(GameError):
    """Player list rejected at game creation."""


class GameNotFound(GameError):
    status_code = 404


class PlayerNotFound(GameError):
    status_code = 404


@dataclass
class SessionPlayer:
    name: str
    scorecard: Scorecard = field(default_factory=Scorecard)
    final_score: Optional[FinalScore] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'scorecard': self.scorecard.to_dict(),
            'finalScore': self.final_score.to_dict() if self.final_score else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionPlayer':
        final = data.get('finalScore')
        return cls(
            name=data['name'],
            scorecard=Scorecard.from_dict(data.get('scorecard')),
            final_score=FinalScore.from_dict(final) if final else None,
        )


@dataclass
class GameSession:
    game_id: str
    players: List[SessionPlayer]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def find_player(self, name: str) -> SessionPlayer:
        for player in self.players:
            if player.name == name:
                return player
        raise PlayerNotFound('Player not found')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.game_id,
            'players': [p.to_dict() for p in self.players],
            'createdAt': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameSession':
        return cls(
            game_id=data['id'],
            players=[SessionPlayer.from_dict(p) for p in data['players']],
            created_at=datetime.fromisoformat(data['createdAt']),
        )


def normalize_player_names(names: Any, min_players: int = 1, max_players: int = 4) -> List[str]:
    if not isinstance(names, (list, tuple)) or not names:
        raise InvalidGame('Must provide at least one player name')
    cleaned = []
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise InvalidGame('Player names must be non-empty strings')
        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            raise InvalidGame(f'Player names are limited to {MAX_NAME_LENGTH} characters')
        if name in cleaned:
            raise InvalidGame(f'Duplicate player name: {name}')
        cleaned.append(name)
    if not min_players <= len(cleaned) <= max_players:
        raise InvalidGame(f'A game needs between {min_players} and {max_players} players')
    return cleaned


def create_game(game_id: str, names: Iterable[str], min_players: int = 1, max_players: int = 4) -> GameSession:
    """Start a game with empty scorecards for each named player."""
    cleaned = normalize_player_names(names, min_players=min_players, max_players=max_players)
    game = GameSession(game_id=game_id, players=[SessionPlayer(name=n) for n in cleaned])
    logger.info(f"[create] game={game_id} players={cleaned}")
    return game


def commit_player_score(game: GameSession, player_name: str, category, dice) -> CommitResult:
    player = game.find_player(player_name)
    result = commit_score(player.scorecard, category, dice)
    # Only reached when the commit succeeded
    player.scorecard = result.scorecard
    player.final_score = result.final_score
    if result.bonus_awarded:
        logger.info(
            f"[bonus-yahtzee] game={game.game_id} player={player_name} "
            f"count={result.scorecard.bonus_yahtzees} joker={result.used_as_joker}"
        )
    return result


def record_player_score(game: GameSession, player_name: str, category, value) -> FinalScore:
    player = game.find_player(player_name)
    player.scorecard = record_manual_score(player.scorecard, category, value)
    player.final_score = compute_final_score(player.scorecard)
    return player.final_score


def edit_player_score(game: GameSession, player_name: str, category, value) -> FinalScore:
    player = game.find_player(player_name)
    player.scorecard = edit_score(player.scorecard, category, value)
    player.final_score = compute_final_score(player.scorecard)
    return player.final_score


def clear_player_score(game: GameSession, player_name: str, category) -> FinalScore:
    player = game.find_player(player_name)
    player.scorecard = clear_score(player.scorecard, category)
    player.final_score = compute_final_score(player.scorecard)
    return player.final_score
