"""Game storage behind a small get/put/delete interface.

Stores hand out detached ``GameSession`` copies; callers mutate the copy and
``put`` it back while holding ``store.lock(game_id)``, which serializes
score changes per game.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
import json
import logging
import random
import string
import threading
import weakref
from typing import Dict, Iterator, Optional

from .sessions import GameSession

logger = logging.getLogger(__name__)

GAME_ID_ALPHABET = string.ascii_lowercase + string.digits
GAME_ID_LENGTH = 6


class GameStore(ABC):

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    @abstractmethod
    def get(self, game_id: str) -> Optional[GameSession]:
        ...

    @abstractmethod
    def put(self, game: GameSession) -> None:
        ...

    @abstractmethod
    def delete(self, game_id: str) -> bool:
        """Remove a game; returns False when it did not exist."""

    def exists(self, game_id: str) -> bool:
        return self.get(game_id) is not None

    def new_game_id(self, length: int = GAME_ID_LENGTH) -> str:
        """Generate a short game id not used by any stored game."""
        while True:
            game_id = ''.join(random.choices(GAME_ID_ALPHABET, k=length))
            if not self.exists(game_id):
                return game_id

    @contextmanager
    def lock(self, game_id: str) -> Iterator[None]:
        # Entries live only while some request holds a reference to the lock
        with self._locks_guard:
            game_lock = self._locks.get(game_id)
            if game_lock is None:
                game_lock = threading.Lock()
                self._locks[game_id] = game_lock
        with game_lock:
            yield


class MemoryGameStore(GameStore):
    """Process-local store; games are kept as serialized dicts."""

    def __init__(self):
        super().__init__()
        self._games: Dict[str, dict] = {}

    def get(self, game_id):
        data = self._games.get(game_id)
        return GameSession.from_dict(data) if data is not None else None

    def put(self, game):
        self._games[game.game_id] = game.to_dict()

    def delete(self, game_id):
        return self._games.pop(game_id, None) is not None


class SqlGameStore(GameStore):
    """Flask-SQLAlchemy backed store. Requires an application context."""

    def get(self, game_id):
        from yahtzee.models import Game
        row = Game.query.filter_by(game_id=game_id).first()
        return GameSession.from_dict(row.to_dict()) if row else None

    def put(self, game):
        from yahtzee import db
        from yahtzee.models import Game, Player
        row = Game.query.filter_by(game_id=game.game_id).first()
        if row is None:
            row = Game(game_id=game.game_id, created_at=game.created_at)
            db.session.add(row)
        existing = {p.name: p for p in row.players}
        for position, player in enumerate(game.players):
            record = existing.get(player.name)
            if record is None:
                record = Player(name=player.name)
                row.players.append(record)
            record.position = position
            record.scorecard = json.dumps(player.scorecard.to_dict())
            record.final_score = json.dumps(player.final_score.to_dict()) if player.final_score else None
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def delete(self, game_id):
        from yahtzee import db
        from yahtzee.models import Game
        row = Game.query.filter_by(game_id=game_id).first()
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        logger.info(f"[delete] game={game_id}")
        return True


def build_store(kind: str) -> GameStore:
    if kind == 'memory':
        return MemoryGameStore()
    if kind == 'sql':
        return SqlGameStore()
    raise ValueError(f'Unknown GAME_STORE: {kind!r}')
