from dataclasses import replace

from luelue.errors import ApplicationError, DatabaseQueryError
from luelue.models import Chat, Game
from .base import BaseRepository
from .player_repository import MAX_PLAYERS


class GameRepository(BaseRepository):
    """Access to the `games` table.

    A game owns its players, claims and chat; updates that touch those
    relations are delegated to the matching repository so that every change
    to a table goes through one place.
    """

    def add_game(self, game: Game) -> Game:
        if game.id and self.session.get(Game, game.id) is not None:
            raise DatabaseQueryError(f'A game with the id {game.id} already exists', {'id': game.id}, 409)
        if game.chat is None:
            game.chat = Chat()
        self.session.add(game)
        self._commit({'id': game.id})
        return game

    def update_game(self, game_data, player_repo, card_repo, claims_repo) -> Game:
        """Apply an `UpdateGameDTO` in a single transaction.

        Only provided columns are written. `players` and `claims`, when
        present, are synced against what is stored.
        """
        game = self._fetch(Game, game_data.id, 'Game not found')
        values = game_data.scalar_fields()
        if not values and game_data.players is None and game_data.claims is None:
            raise DatabaseQueryError(
                'No new data was provided! The modifying attempt was aborted!', game_data.to_dict(), 400)

        try:
            for column, value in values.items():
                setattr(game, column, value)
            if game_data.players is not None:
                self.update_players_in_game(game_data, player_repo, card_repo)
            if game_data.claims is not None:
                self.update_claims_of_game(game_data, claims_repo, card_repo)

            roster = {p.id for p in game.players}
            if game.which_player_turn is not None and game.which_player_turn not in roster:
                raise DatabaseQueryError(
                    'which_player_turn must reference a player of the game', game_data.to_dict(), 400)
        except ApplicationError:
            self.session.rollback()
            raise

        self._commit(game_data.to_dict())
        return game

    def get_game_by_id(self, game_id) -> Game:
        return self._fetch(Game, game_id, 'Game not found')

    def get_all_games(self):
        games = self._all(self.session.query(Game).order_by(Game.started_at))
        if not games:
            raise DatabaseQueryError('No games found', status_code=404)
        return games

    def delete_game(self, game_id) -> None:
        game = self._fetch(Game, game_id, 'Game not found')
        self.session.delete(game)
        self._commit({'id': game_id})

    # ----- relation syncing, called inside update_game's transaction -----

    def update_players_in_game(self, game_data, player_repo, card_repo):
        """Sync the stored roster with `game_data.players`.

        Stored players missing from the list are deleted, listed players that
        aren't stored yet are added, and players present in both are left as
        they are. Returns the resulting roster.
        """
        new_players = game_data.players
        if new_players is None:
            raise DatabaseQueryError(
                'Function was called with invalid data passed to it! A new list of players is mandatory!')
        if len(new_players) == 0:
            raise DatabaseQueryError(
                "An empty list of players was provided! That's an invalid data input!", game_data.to_dict(), 400)
        max_players = self._setting('MAX_PLAYERS', MAX_PLAYERS)
        if len(new_players) > max_players:
            raise DatabaseQueryError(f'A game holds at most {max_players} players', game_data.to_dict(), 400)

        try:
            current_players = player_repo.get_all_players(game_data.id)
        except DatabaseQueryError as exc:
            if exc.status_code != 404:
                raise
            current_players = []

        current_ids = {p.id for p in current_players}
        wanted_ids = {p.id for p in new_players if p.id}
        for player in current_players:
            if player.id not in wanted_ids:
                player_repo.delete_player(player.id, commit=False)

        game = self.session.get(Game, game_data.id)
        self.session.flush()
        self.session.expire(game, ['players'])

        for player in new_players:
            if player.id and player.id in current_ids:
                continue
            player_repo.add_player(replace(player, game_id=game_data.id), card_repo, commit=False)

        self.session.flush()
        self.session.expire(game, ['players'])
        if game.which_player_turn is None and game.players:
            game.which_player_turn = game.players[0].id
        return list(game.players)

    def update_claims_of_game(self, game_data, claims_repo, card_repo):
        """Sync the stored claims with `game_data.claims`, same rules as players.

        An empty list clears every claim of the game.
        """
        new_claims = game_data.claims
        if new_claims is None:
            raise DatabaseQueryError(
                'Function was called with invalid data passed to it! A new list of claims is mandatory!')

        current_claims = claims_repo.get_all_claims(game_id=game_data.id)
        current_ids = {c.id for c in current_claims}
        wanted_ids = {c.id for c in new_claims if c.id}
        for claim in current_claims:
            if claim.id not in wanted_ids:
                claims_repo.delete_claim(claim.id, commit=False)
        self.session.flush()

        for claim in new_claims:
            if claim.id and claim.id in current_ids:
                continue
            claims_repo.create_claim(replace(claim, game_id=game_data.id), card_repo, commit=False)

        game = self.session.get(Game, game_data.id)
        self.session.flush()
        self.session.expire(game, ['claims'])
        return list(game.claims)
