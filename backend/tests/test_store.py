from yahtzee.services.games.sessions import commit_player_score, create_game


def test_store_round_trip(store):
    game = create_game(store.new_game_id(), ['Alice', 'Bob'])
    store.put(game)
    commit_player_score(game, 'Bob', 'yahtzee', [4, 4, 4, 4, 4])
    commit_player_score(game, 'Bob', 'fours', [4, 4, 4, 4, 4])
    store.put(game)

    loaded = store.get(game.game_id)
    assert [p.name for p in loaded.players] == ['Alice', 'Bob']
    bob = loaded.find_player('Bob')
    assert bob.scorecard.to_dict() == {'fours': 20, 'yahtzee': 50, 'bonusYahtzees': 1}
    assert bob.final_score.total_score == 170
    assert loaded.find_player('Alice').final_score is None
    assert loaded.created_at == game.created_at


def test_store_delete_and_ids(store):
    game = create_game(store.new_game_id(), ['Alice'])
    assert len(game.game_id) == 6
    assert not store.exists(game.game_id)
    store.put(game)
    assert store.exists(game.game_id)
    assert store.delete(game.game_id) is True
    assert store.get(game.game_id) is None
    assert store.delete(game.game_id) is False
