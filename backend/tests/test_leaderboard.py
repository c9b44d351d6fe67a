from yahtzee.services.games.sessions import SessionPlayer
from yahtzee.services.scoring import Scorecard, commit_score, rank_players
from yahtzee.services.scoring.scorecard import FinalScore


def _player(name, total):
    if total is None:
        return SessionPlayer(name=name)
    return SessionPlayer(name=name, final_score=FinalScore(
        upper_total=0, upper_bonus=0, lower_total=total,
        bonus_yahtzees=0, bonus_yahtzee_score=0, total_score=total,
    ))


def test_positional_ranking_with_ties():
    players = [_player('Ann', 100), _player('Bo', 250), _player('Cy', 250), _player('Di', 90)]
    ranks = {entry.name: entry.rank for entry in rank_players(players)}
    assert [ranks[p.name] for p in players] == [3, 1, 2, 4]


def test_unscored_players_are_excluded():
    board = rank_players([_player('Ann', None), _player('Bo', 10)])
    assert [(e.rank, e.name) for e in board] == [(1, 'Bo')]
    assert rank_players([]) == []


def test_entry_fields():
    result = commit_score(Scorecard(), 'yahtzee', [3, 3, 3, 3, 3])
    result = commit_score(result.scorecard, 'threes', [3, 3, 3, 3, 3])
    player = SessionPlayer(name='Ann', scorecard=result.scorecard, final_score=result.final_score)
    (entry,) = rank_players([player])
    assert entry.to_dict() == {
        'rank': 1,
        'name': 'Ann',
        'totalScore': 165,
        'upperTotal': 15,
        'upperBonus': 0,
        'lowerTotal': 50,
        'bonusYahtzees': 1,
        'bonusYahtzeeScore': 100,
    }
