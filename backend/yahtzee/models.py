from datetime import datetime, timezone
import json

from yahtzee import db


def _utcnow():
    return datetime.now(timezone.utc)


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.String(16), unique=True, index=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    players = db.relationship(
        'Player',
        back_populates='game',
        order_by='Player.position',
        cascade='all, delete-orphan',
    )

    def to_dict(self):
        created = self.created_at
        # SQLite hands back naive datetimes
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return {
            'id': self.game_id,
            'players': [p.to_dict() for p in self.players],
            'createdAt': created.isoformat(),
        }


class Player(db.Model):
    __tablename__ = 'player'
    __table_args__ = (db.UniqueConstraint('game_id', 'name', name='uq_player_game_name'),)
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False)
    scorecard = db.Column(db.Text, nullable=False, default='{}')  # JSON-encoded scorecard
    final_score = db.Column(db.Text, nullable=True)  # JSON-encoded FinalScore, null until scored
    game = db.relationship('Game', back_populates='players')

    def to_dict(self):
        return {
            'name': self.name,
            'scorecard': json.loads(self.scorecard) if self.scorecard else {},
            'finalScore': json.loads(self.final_score) if self.final_score else None,
        }
