import random
from typing import Optional, Sequence

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from luelue import db
from luelue.enums import CardType, GameState
from luelue.errors import DatabaseQueryError, ProcessError
from luelue.models import Game, Player


def select_new_card_to_be_played(rng: random.Random) -> CardType:
    """Draw the card type every claim of the next round has to match."""
    return CardType.from_index(rng.randrange(CardType.number_of_values()))


def next_player_id(players: Sequence[Player], current_id: Optional[str]) -> Optional[str]:
    """Id of the player seated after `current_id`, wrapping around.

    Falls back to the first seat when nobody (or an unknown player) holds the turn.
    """
    if not players:
        return None
    ordered = sorted(players, key=lambda p: (p.seat, p.id))
    ids = [p.id for p in ordered]
    if current_id not in ids:
        return ids[0]
    return ids[(ids.index(current_id) + 1) % len(ids)]


def prep_for_new_round(game: Game, rng: Optional[random.Random] = None) -> Game:
    """Advance `game` to its next round.

    Claims of the finished round are removed together with the cards played
    into them, the turn moves to the next seat and a new card type is drawn.
    """
    if rng is None:
        rng = current_app.extensions['card_rng']
    if game.state == GameState.Ended:
        raise ProcessError('The game has ended, no new round can be started', 'prep_for_new_round', {'id': game.id}, status_code=409)
    players = list(game.players)
    if not players:
        raise ProcessError('A game without players cannot start a new round', 'prep_for_new_round', {'id': game.id}, status_code=409)

    prev_round = int(game.round_number or 0)
    discarded = 0
    for claim in list(game.claims):
        for card in list(claim.cards):
            db.session.delete(card)
            discarded += 1
        db.session.delete(claim)

    game.round_number = prev_round + 1
    game.state = GameState.InProgress
    game.which_player_turn = next_player_id(players, game.which_player_turn)
    game.card_to_play = select_new_card_to_be_played(rng)
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise DatabaseQueryError(str(exc), {'id': game.id}) from exc

    current_app.logger.info(
        f"[next_round] game={game.id} advance round {prev_round} -> {game.round_number} "
        f"turn={game.which_player_turn} card={game.card_to_play.name} discarded={discarded}"
    )
    return game


def end_game(game: Game) -> Game:
    if game.state == GameState.Ended:
        return game
    game.state = GameState.Ended
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise DatabaseQueryError(str(exc), {'id': game.id}) from exc
    current_app.logger.info(f"[finish] game={game.id} finished at round={game.round_number}")
    return game
