from luelue.errors import DatabaseQueryError
from luelue.models import Card, Player
from .base import BaseRepository


class CardRepository(BaseRepository):
    """Access to the `cards` table."""

    def get_all_cards(self, claim_id=None, player_id=None):
        """Cards of a claim or of a player, or every card when neither is given."""
        if claim_id is not None and player_id is not None:
            raise DatabaseQueryError(
                'Either claim_id or player_id must be provided, but not both.', status_code=400)
        query = self.session.query(Card)
        if claim_id is not None:
            query = query.filter_by(claim_id=claim_id)
        elif player_id is not None:
            query = query.filter_by(player_id=player_id)
        return self._all(query)

    def get_card_by_id(self, card_id) -> Card:
        return self._fetch(Card, card_id, 'Card not found')

    def delete_card(self, card_id) -> None:
        """Delete a card. A claim left without cards is deleted with it."""
        card = self._fetch(Card, card_id, 'Card not found')
        claim = card.claim
        self.session.delete(card)
        if claim is not None:
            claim.number_of_cards = max(0, claim.number_of_cards - 1)
            if claim.number_of_cards == 0:
                self.session.delete(claim)
                self._log.info("claim=%s lost its last card and was deleted", claim.id)
        self._commit({'id': card_id})

    def create_card(self, card, player_id, commit=True) -> Card:
        """Deal a new card of `card.card_type` to `player_id`."""
        received = {'id': card.id, 'card_type': card.card_type.name, 'player_id': player_id}
        if player_id is not None:
            self._fetch(Player, player_id, 'Player not found')
        if card.id and self.session.get(Card, card.id) is not None:
            raise DatabaseQueryError(f'A card with the id {card.id} already exists', received, 409)
        new_card = Card(card_type=card.card_type, player_id=player_id)
        if card.id:
            new_card.id = card.id
        self.session.add(new_card)
        if commit:
            self._commit(received)
        else:
            self.session.flush()
        return new_card

    def update_card(self, card_data) -> Card:
        """Apply the fields of an `UpdateCardDTO` that were provided.

        Claim membership is owned by :class:`ClaimsRepository`: a card joins a
        claim only when the claim is created, and a claimed card keeps its owner.
        """
        card = self.session.get(Card, card_data.id)
        if card is None:
            raise DatabaseQueryError("Card not found and couldn't be updated!", card_data.to_dict(), 404)
        if card_data.claim_id is not None and card_data.claim_id != card.claim_id:
            raise DatabaseQueryError(
                'Cards are added to a claim when the claim is created', card_data.to_dict(), 400)
        if card_data.player_id is not None and card.claim_id is not None \
                and card_data.player_id != card.player_id:
            raise DatabaseQueryError(
                f'The card {card.id} is part of a claim and cannot change owner', card_data.to_dict(), 409)

        if card_data.card_type is not None:
            card.card_type = card_data.card_type
        if card_data.player_id is not None:
            self._fetch(Player, card_data.player_id, 'Player not found')
            card.player_id = card_data.player_id
        self._commit(card_data.to_dict())
        return card

    def attach_to_claim(self, card_id, claim) -> Card:
        """Put a validated card into `claim`; the caller commits."""
        card = self._fetch(Card, card_id, 'Card not found')
        card.claim_id = claim.id
        return card
