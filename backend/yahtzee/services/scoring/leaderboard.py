from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol

from .scorecard import FinalScore


class Ranked(Protocol):
    name: str
    final_score: Optional[FinalScore]


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    name: str
    total_score: int
    upper_total: int
    upper_bonus: int
    lower_total: int
    bonus_yahtzees: int
    bonus_yahtzee_score: int

    def to_dict(self) -> Dict[str, object]:
        return {
            'rank': self.rank,
            'name': self.name,
            'totalScore': self.total_score,
            'upperTotal': self.upper_total,
            'upperBonus': self.upper_bonus,
            'lowerTotal': self.lower_total,
            'bonusYahtzees': self.bonus_yahtzees,
            'bonusYahtzeeScore': self.bonus_yahtzee_score,
        }


def rank_players(players: Iterable[Ranked]) -> List[LeaderboardEntry]:
    """Rank players by total score, highest first.

    Players that have not scored yet are left out. Ranks are positional:
    tied players get consecutive ranks in the order they were listed.
    """
    scored = [p for p in players if p.final_score is not None]
    # sorted() is stable, so earlier players win ties
    ordered = sorted(scored, key=lambda p: p.final_score.total_score, reverse=True)
    return [
        LeaderboardEntry(
            rank=index,
            name=p.name,
            total_score=p.final_score.total_score,
            upper_total=p.final_score.upper_total,
            upper_bonus=p.final_score.upper_bonus,
            lower_total=p.final_score.lower_total,
            bonus_yahtzees=p.final_score.bonus_yahtzees,
            bonus_yahtzee_score=p.final_score.bonus_yahtzee_score,
        )
        for index, p in enumerate(ordered, start=1)
    ]
