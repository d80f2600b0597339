from luelue.errors import DatabaseQueryError
from luelue.models import Card, Claim, Player
from .base import BaseRepository

MAX_CARDS_PER_CLAIM = 4


class ClaimsRepository(BaseRepository):
    """Access to the `claims` table.

    A claim's cards are stored on the `cards` table (`cards.claim_id`), so
    creating a claim goes through :class:`CardRepository` to attach them.
    """

    def get_claim_by_id(self, claim_id) -> Claim:
        return self._fetch(Claim, claim_id, f"The claim with the id {claim_id} couldn't be found!")

    def get_all_claims(self, game_id=None, player_id=None):
        """Claims of a game or of a player, each with its cards."""
        if game_id is not None and player_id is not None:
            raise DatabaseQueryError(
                'Either game_id or player_id must be provided, but not both.', status_code=400)
        query = self.session.query(Claim)
        if game_id is not None:
            query = query.filter_by(game_id=game_id)
        elif player_id is not None:
            query = query.filter_by(created_by=player_id)
        return self._all(query)

    def create_claim(self, claim, card_repository, commit=True) -> Claim:
        received = {'id': claim.id, 'created_by': claim.created_by, 'cards': list(claim.card_ids)}
        player = self._fetch(Player, claim.created_by, 'Player not found')
        if claim.game_id is not None and claim.game_id != player.game_id:
            raise DatabaseQueryError('The claiming player is not part of that game', received, 400)
        if claim.id and self.session.get(Claim, claim.id) is not None:
            raise DatabaseQueryError(f'A claim with the id {claim.id} already exists', received, 409)

        max_cards = self._setting('MAX_CARDS_PER_CLAIM', MAX_CARDS_PER_CLAIM)
        if not 1 <= len(claim.card_ids) <= max_cards:
            raise DatabaseQueryError(f'A claim holds between 1 and {max_cards} cards', received, 400)
        if len(set(claim.card_ids)) != len(claim.card_ids):
            raise DatabaseQueryError('A card can only be claimed once', received, 400)
        for card_id in claim.card_ids:
            card = self._fetch(Card, card_id, 'Card not found')
            if card.player_id != player.id:
                raise DatabaseQueryError(f'The card {card_id} does not belong to the claiming player', received, 400)
            if card.claim_id is not None:
                raise DatabaseQueryError(f'The card {card_id} is already part of a claim', received, 409)

        new_claim = Claim(created_by=player.id, game_id=player.game_id, number_of_cards=len(claim.card_ids))
        if claim.id:
            new_claim.id = claim.id
        self.session.add(new_claim)
        self.session.flush()

        for card_id in claim.card_ids:
            card_repository.attach_to_claim(card_id, new_claim)
        self.session.flush()
        self.session.expire(new_claim, ['cards'])
        if commit:
            self._commit(received)
        return new_claim

    def delete_claim(self, claim_id, commit=True) -> None:
        """Delete a claim; its cards go back to the claiming player's hand."""
        claim = self.get_claim_by_id(claim_id)
        for card in list(claim.cards):
            card.claim = None
        self.session.delete(claim)
        if commit:
            self._commit({'id': claim_id})
