from luelue.errors import DatabaseQueryError
from luelue.models import Chat, ChatMessage, Game, Player, utcnow
from .base import BaseRepository
from .card_repository import CardRepository

MAX_PLAYERS = 5


class PlayerRepository(BaseRepository):
    """Access to the `players` table."""

    def add_player(self, player, card_repository=None, commit=True) -> Player:
        """Seat a new player at `player.game_id`.

        The first player of a game without an active player gets the turn.
        Cards listed in `player.assigned_cards` are dealt to the new player.
        """
        received = {'id': player.id, 'name': player.name, 'game_id': player.game_id}
        game = self._fetch(Game, player.game_id, 'Game not found')
        if player.id and self.session.get(Player, player.id) is not None:
            raise DatabaseQueryError(f'A player with the id {player.id} already exists', received, 409)

        max_players = self._setting('MAX_PLAYERS', MAX_PLAYERS)
        if len(game.players) >= max_players:
            raise DatabaseQueryError(f'The game is full ({max_players} players)', received, 409)

        seat = max((p.seat for p in game.players), default=0) + 1
        new_player = Player(name=player.name, score=player.score, seat=seat, game=game)
        if player.id:
            new_player.id = player.id
        self.session.add(new_player)
        self.session.flush()
        if player.assigned_cards:
            if card_repository is None:
                card_repository = CardRepository(self.session)
            for card in player.assigned_cards:
                card_repository.create_card(card, new_player.id, commit=False)
        if not game.which_player_turn:
            game.which_player_turn = new_player.id
        if commit:
            self._commit(received)
        return new_player

    def update_player(self, player) -> Player:
        """Apply the fields of an `UpdatePlayerDTO` that were provided."""
        existing = self._fetch(Player, player.id, 'Player not found')
        if player.name is None and player.score is None:
            raise DatabaseQueryError(
                'No new data was provided! The modifying attempt was aborted!', player.to_dict(), 400)
        if player.name is not None:
            existing.name = player.name
        if player.score is not None:
            existing.score = player.score
        # Touched even when the values are unchanged
        existing.last_time_updated = utcnow()
        self._commit(player.to_dict())
        return existing

    def delete_player(self, player_id, commit=True) -> None:
        """Delete a player along with their cards, claims and chat messages."""
        player = self._fetch(Player, player_id, 'Player not found')
        game = player.game
        if game is not None and game.which_player_turn == player.id:
            game.which_player_turn = None
        self.session.delete(player)
        self.session.flush()
        chat = self.session.query(Chat).filter_by(game_id=player.game_id).first()
        if chat is not None:
            self.session.expire(chat, ['messages'])
            chat.number_of_messages = self.session.query(ChatMessage).filter_by(chat_id=chat.id).count()
        if commit:
            self._commit({'id': player_id})

    def get_player(self, player_id) -> Player:
        return self._fetch(Player, player_id, 'Player not found')

    def get_all_players(self, game_id=None):
        query = self.session.query(Player)
        if game_id is not None:
            query = query.filter_by(game_id=game_id)
        players = self._all(query.order_by(Player.seat))
        if not players:
            raise DatabaseQueryError('No players found', status_code=404)
        return players
