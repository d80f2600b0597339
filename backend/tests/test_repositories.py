import pytest

from luelue import db
from luelue.dto import CardDTO, ClaimDTO, PlayerDTO, StatusUpdateRequest, UpdateCardDTO, UpdateGameDTO
from luelue.enums import CardType, GameState
from luelue.errors import DatabaseQueryError
from luelue.models import Card, Game, Player
from luelue.repositories import (
    CardRepository, ChatRepository, ClaimsRepository, GameRepository, PlayerRepository,
)
from luelue.services.games.status import build_status_update


@pytest.fixture()
def repos(flask_app):
    session = db.session
    return {
        'game': GameRepository(session),
        'player': PlayerRepository(session),
        'card': CardRepository(session),
        'claim': ClaimsRepository(session),
        'chat': ChatRepository(session),
    }


def _game(repos):
    return repos['game'].add_game(Game())


def _player(repos, game, name, cards=()):
    dto = PlayerDTO(name=name, game_id=game.id, assigned_cards=[CardDTO(CardType.parse(c)) for c in cards])
    return repos['player'].add_player(dto, repos['card'])


def _sync(repos, game, **fields):
    return repos['game'].update_game(
        UpdateGameDTO(id=game.id, **fields), repos['player'], repos['card'], repos['claim'])


# ----- players -----

def test_players_get_consecutive_seats(repos):
    game = _game(repos)
    seated = [_player(repos, game, n) for n in ('Alice', 'Bob', 'Cara')]
    assert [p.seat for p in seated] == [1, 2, 3]
    assert game.which_player_turn == seated[0].id
    listed = repos['player'].get_all_players(game.id)
    assert [p.name for p in listed] == ['Alice', 'Bob', 'Cara']


def test_full_game_rejects_another_player(repos):
    game = _game(repos)
    for i in range(5):
        _player(repos, game, f'p{i}')
    with pytest.raises(DatabaseQueryError) as info:
        _player(repos, game, 'late')
    assert info.value.status_code == 409
    assert db.session.query(Player).count() == 5


def test_player_for_unknown_game(repos):
    with pytest.raises(DatabaseQueryError) as info:
        repos['player'].add_player(PlayerDTO(name='Ghost', game_id='missing'))
    assert info.value.status_code == 404


def test_deleting_the_active_player_clears_the_turn(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'])
    _player(repos, game, 'Bob')
    repos['player'].delete_player(alice.id)
    assert game.which_player_turn is None
    assert db.session.query(Card).count() == 0


def test_player_listing_when_empty(repos):
    game = _game(repos)
    with pytest.raises(DatabaseQueryError) as info:
        repos['player'].get_all_players(game.id)
    assert info.value.status_code == 404


# ----- cards and claims -----

def test_cards_cannot_be_filtered_by_claim_and_player(repos):
    with pytest.raises(DatabaseQueryError) as info:
        repos['card'].get_all_cards(claim_id='k', player_id='p')
    assert info.value.status_code == 400


def test_deleting_a_claimed_card_updates_the_count(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King', 'Ace'])
    card_ids = [c.id for c in alice.assigned_cards]
    claim = repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=card_ids), repos['card'])
    repos['card'].delete_card(card_ids[0])
    assert claim.number_of_cards == 1


def test_deleting_the_last_claimed_card_removes_the_claim(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'])
    card_id = alice.assigned_cards[0].id
    claim = repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=[card_id]), repos['card'])
    claim_id = claim.id
    repos['card'].delete_card(card_id)
    with pytest.raises(DatabaseQueryError) as info:
        repos['claim'].get_claim_by_id(claim_id)
    assert info.value.status_code == 404


def test_card_update_cannot_move_a_card_into_a_claim(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'])
    bob = _player(repos, game, 'Bob', ['Queen'])
    claim = repos['claim'].create_claim(
        ClaimDTO(created_by=alice.id, card_ids=[alice.assigned_cards[0].id]), repos['card'])
    bob_card_id = bob.assigned_cards[0].id

    with pytest.raises(DatabaseQueryError) as info:
        repos['card'].update_card(UpdateCardDTO(bob_card_id, claim_id=claim.id))
    assert info.value.status_code == 400
    assert repos['card'].get_card_by_id(bob_card_id).claim_id is None
    assert claim.number_of_cards == 1
    assert len(repos['card'].get_all_cards(claim_id=claim.id)) == 1


def test_claimed_card_keeps_its_owner(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King', 'Ace'])
    bob = _player(repos, game, 'Bob')
    claimed_id, free_id = [c.id for c in alice.assigned_cards]
    repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=[claimed_id]), repos['card'])

    with pytest.raises(DatabaseQueryError) as info:
        repos['card'].update_card(UpdateCardDTO(claimed_id, player_id=bob.id))
    assert info.value.status_code == 409
    assert repos['card'].get_card_by_id(claimed_id).player_id == alice.id

    # Type changes and moving an unclaimed card are still allowed
    assert repos['card'].update_card(UpdateCardDTO(claimed_id, card_type=CardType.Joker)).card_type is CardType.Joker
    assert repos['card'].update_card(UpdateCardDTO(free_id, player_id=bob.id)).player_id == bob.id


def test_claims_cannot_be_filtered_by_game_and_player(repos):
    with pytest.raises(DatabaseQueryError) as info:
        repos['claim'].get_all_claims(game_id='g', player_id='p')
    assert info.value.status_code == 400


def test_claim_moves_cards_out_of_the_hand(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King', 'Queen', 'Ace'])
    card_ids = [c.id for c in alice.assigned_cards][:2]
    claim = repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=card_ids), repos['card'])
    assert claim.game_id == game.id
    assert claim.number_of_cards == 2
    assert sorted(c.id for c in claim.cards) == sorted(card_ids)
    assert len(repos['card'].get_all_cards(claim_id=claim.id)) == 2


@pytest.mark.parametrize('picker, status', [
    (lambda own, other: [], 400),
    (lambda own, other: own[:1] * 2, 400),
    (lambda own, other: own + other, 400),
])
def test_invalid_claims(repos, picker, status):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King', 'Queen'])
    bob = _player(repos, game, 'Bob', ['Jack'])
    own = [c.id for c in alice.assigned_cards]
    other = [c.id for c in bob.assigned_cards]
    with pytest.raises(DatabaseQueryError) as info:
        repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=picker(own, other)), repos['card'])
    assert info.value.status_code == status


def test_claim_with_too_many_cards(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'] * 5)
    card_ids = [c.id for c in alice.assigned_cards]
    with pytest.raises(DatabaseQueryError) as info:
        repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=card_ids), repos['card'])
    assert info.value.status_code == 400


def test_card_cannot_be_claimed_twice(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King', 'Queen'])
    card_ids = [c.id for c in alice.assigned_cards]
    repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=card_ids[:1]), repos['card'])
    with pytest.raises(DatabaseQueryError) as info:
        repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=card_ids), repos['card'])
    assert info.value.status_code == 409


def test_claim_for_another_game(repos):
    game = _game(repos)
    other_game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'])
    dto = ClaimDTO(created_by=alice.id, card_ids=[alice.assigned_cards[0].id], game_id=other_game.id)
    with pytest.raises(DatabaseQueryError) as info:
        repos['claim'].create_claim(dto, repos['card'])
    assert info.value.status_code == 400


def test_deleting_a_claim_returns_cards_to_the_hand(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'])
    card_id = alice.assigned_cards[0].id
    claim = repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=[card_id]), repos['card'])
    repos['claim'].delete_claim(claim.id)
    card = repos['card'].get_card_by_id(card_id)
    assert card.claim_id is None
    assert card.player_id == alice.id


# ----- roster and claims sync -----

def test_roster_sync_deletes_adds_and_keeps(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice')
    bob = _player(repos, game, 'Bob', ['Queen'])
    alice_id, bob_id = alice.id, bob.id

    _sync(repos, game, players=[PlayerDTO(name='Alice', id=alice_id), PlayerDTO(name='Dan')])

    roster = repos['player'].get_all_players(game.id)
    assert [p.name for p in roster] == ['Alice', 'Dan']
    assert roster[0].id == alice_id
    assert db.session.get(Player, bob_id) is None
    assert db.session.query(Card).count() == 0
    assert game.which_player_turn == alice_id


def test_roster_sync_keeps_client_supplied_ids(repos):
    game = _game(repos)
    _sync(repos, game, players=[PlayerDTO(name='Eve', id='eve-1', assigned_cards=[CardDTO(CardType.Ace)])])
    eve = repos['player'].get_player('eve-1')
    assert eve.game_id == game.id
    assert [c.card_type for c in eve.assigned_cards] == [CardType.Ace]
    assert game.which_player_turn == 'eve-1'


def test_roster_sync_hands_the_turn_to_the_first_seat(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice')
    bob = _player(repos, game, 'Bob')
    bob_id = bob.id
    assert game.which_player_turn == alice.id

    _sync(repos, game, players=[PlayerDTO(name='Bob', id=bob_id)])
    assert game.which_player_turn == bob_id


def test_roster_sync_returns_the_resulting_roster(repos):
    game = _game(repos)
    _player(repos, game, 'Alice')
    dto = UpdateGameDTO(id=game.id, players=[PlayerDTO(name='Zed')])
    roster = repos['game'].update_players_in_game(dto, repos['player'], repos['card'])
    assert [p.name for p in roster] == ['Zed']


@pytest.mark.parametrize('players, status', [
    (None, 500),
    ([], 400),
    ([PlayerDTO(name=f'p{i}') for i in range(6)], 400),
])
def test_roster_sync_rejects(repos, players, status):
    game = _game(repos)
    _player(repos, game, 'Alice')
    dto = UpdateGameDTO(id=game.id, players=players)
    with pytest.raises(DatabaseQueryError) as info:
        repos['game'].update_players_in_game(dto, repos['player'], repos['card'])
    assert info.value.status_code == status


def test_claims_sync(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King', 'Queen'])
    card_ids = [c.id for c in alice.assigned_cards]
    repos['claim'].create_claim(ClaimDTO(created_by=alice.id, card_ids=card_ids[:1]), repos['card'])

    _sync(repos, game, claims=[])
    assert repos['claim'].get_all_claims(game_id=game.id) == []
    assert all(c.claim_id is None for c in repos['card'].get_all_cards(player_id=alice.id))

    _sync(repos, game, claims=[ClaimDTO(created_by=alice.id, card_ids=card_ids, id='k2')])
    claims = repos['claim'].get_all_claims(game_id=game.id)
    assert [c.id for c in claims] == ['k2']
    assert claims[0].number_of_cards == 2


def test_claims_sync_requires_a_list(repos):
    game = _game(repos)
    with pytest.raises(DatabaseQueryError) as info:
        repos['game'].update_claims_of_game(UpdateGameDTO(id=game.id), repos['claim'], repos['card'])
    assert info.value.status_code == 500


def test_update_game_writes_only_provided_columns(repos):
    game = _game(repos)
    _sync(repos, game, round_number=3, card_to_play=CardType.Jack)
    stored = repos['game'].get_game_by_id(game.id)
    assert stored.round_number == 3
    assert stored.card_to_play is CardType.Jack
    assert stored.state is GameState.Starting


def test_update_game_without_changes(repos):
    game = _game(repos)
    with pytest.raises(DatabaseQueryError) as info:
        _sync(repos, game)
    assert info.value.status_code == 400


def test_failed_update_game_rolls_back(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice')
    game_id, alice_id = game.id, alice.id

    with pytest.raises(DatabaseQueryError) as info:
        _sync(repos, game, state=GameState.Ended, which_player_turn='nobody',
              players=[PlayerDTO(name='Alice', id=alice_id), PlayerDTO(name='Bob')])
    assert info.value.status_code == 400

    stored = repos['game'].get_game_by_id(game_id)
    assert stored.state is GameState.Starting
    assert stored.which_player_turn == alice_id
    assert [p.name for p in repos['player'].get_all_players(game_id)] == ['Alice']


def test_deleting_a_game_removes_everything(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['King'])
    repos['claim'].create_claim(
        ClaimDTO(created_by=alice.id, card_ids=[alice.assigned_cards[0].id]), repos['card'])
    repos['chat'].add_chat_message(game.id, alice.id, 'hi')
    repos['game'].delete_game(game.id)
    assert db.session.query(Player).count() == 0
    assert db.session.query(Card).count() == 0
    with pytest.raises(DatabaseQueryError):
        repos['chat'].get_chat(game.id)


# ----- chat -----

def test_chat_rejects_players_from_other_games(repos):
    game = _game(repos)
    other = _game(repos)
    stranger = _player(repos, other, 'Stranger')
    with pytest.raises(DatabaseQueryError) as info:
        repos['chat'].add_chat_message(game.id, stranger.id, 'hello')
    assert info.value.status_code == 403


# ----- status -----

def test_status_for_a_seated_player(repos):
    game = _game(repos)
    alice = _player(repos, game, 'Alice', ['Ace'])
    status = build_status_update(
        StatusUpdateRequest(player_id=alice.id, game_id=game.id), repos['game'], repos['player'])
    assert status.player_excluded_from_game is False
    assert status.player_data['name'] == 'Alice'
    assert status.game_data['id'] == game.id


@pytest.mark.parametrize('seated_elsewhere', [True, False])
def test_status_for_an_outside_player(repos, seated_elsewhere):
    game = _game(repos)
    if seated_elsewhere:
        player_id = _player(repos, _game(repos), 'Other').id
    else:
        player_id = 'missing'
    status = build_status_update(
        StatusUpdateRequest(player_id=player_id, game_id=game.id), repos['game'], repos['player'])
    assert status.player_excluded_from_game is True
    assert status.player_data is None
