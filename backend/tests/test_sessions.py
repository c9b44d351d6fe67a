import pytest

from yahtzee.services.games.sessions import (
    GameSession,
    InvalidGame,
    PlayerNotFound,
    clear_player_score,
    commit_player_score,
    create_game,
    edit_player_score,
    record_player_score,
)
from yahtzee.services.games.store import MemoryGameStore
from yahtzee.services.scoring import AlreadyScored


def test_create_game_trims_names():
    game = create_game('abc123', ['  Alice ', 'Bob'])
    assert [p.name for p in game.players] == ['Alice', 'Bob']
    assert all(p.final_score is None for p in game.players)


@pytest.mark.parametrize('names', [
    [],
    None,
    'Alice',
    ['Alice', ''],
    ['Alice', 'Alice'],
    ['A', 'B', 'C', 'D', 'E'],
    ['x' * 65],
])
def test_create_game_rejects_bad_player_lists(names):
    with pytest.raises(InvalidGame):
        create_game('abc123', names)


def test_commit_and_clear_update_player():
    game = create_game('abc123', ['Alice', 'Bob'])
    result = commit_player_score(game, 'Alice', 'sixes', [6, 6, 6, 1, 2])
    alice = game.find_player('Alice')
    assert result.committed_score == 18
    assert alice.final_score.total_score == 18
    assert game.find_player('Bob').final_score is None

    final = clear_player_score(game, 'Alice', 'sixes')
    assert final.total_score == 0
    assert alice.scorecard.is_used('sixes') is False


def test_failed_commit_leaves_player_untouched():
    game = create_game('abc123', ['Alice'])
    record_player_score(game, 'Alice', 'chance', 20)
    before = game.find_player('Alice').scorecard.copy()
    with pytest.raises(AlreadyScored):
        commit_player_score(game, 'Alice', 'chance', [1, 1, 1, 1, 2])
    assert game.find_player('Alice').scorecard == before


def test_unknown_player():
    game = create_game('abc123', ['Alice'])
    with pytest.raises(PlayerNotFound):
        commit_player_score(game, 'Zed', 'ones', [1, 1, 1, 1, 1])


def test_game_round_trips_through_dict():
    game = create_game('abc123', ['Alice', 'Bob'])
    commit_player_score(game, 'Alice', 'yahtzee', [2, 2, 2, 2, 2])
    commit_player_score(game, 'Alice', 'twos', [2, 2, 2, 2, 2])
    restored = GameSession.from_dict(game.to_dict())
    assert restored == game
    assert restored.find_player('Alice').scorecard.bonus_yahtzees == 1


def test_memory_store_returns_detached_copies():
    store = MemoryGameStore()
    game = create_game(store.new_game_id(), ['Alice'])
    store.put(game)
    loaded = store.get(game.game_id)
    commit_player_score(loaded, 'Alice', 'ones', [1, 1, 2, 3, 4])
    assert store.get(game.game_id).find_player('Alice').final_score is None
    store.put(loaded)
    assert store.get(game.game_id).find_player('Alice').final_score.total_score == 2
    assert store.delete(game.game_id) is True
    assert store.delete(game.game_id) is False
    assert store.get(game.game_id) is None


def test_store_lock_is_per_game():
    store = MemoryGameStore()
    with store.lock('one'):
        # a different game is never blocked
        with store.lock('two'):
            pass
        assert store._locks['one'].locked()
    # released locks are not retained
    assert 'one' not in store._locks
    assert 'two' not in store._locks


def test_edit_player_score_updates_final_score():
    game = create_game('abc123', ['Alice'])
    commit_player_score(game, 'Alice', 'chance', [1, 2, 3, 4, 5])
    final = edit_player_score(game, 'Alice', 'chance', 22)
    assert final.total_score == 22
    assert game.find_player('Alice').scorecard.get('chance') == 22
