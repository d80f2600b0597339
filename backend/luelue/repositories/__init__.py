"""Concrete repositories, one per table."""
from .game_repository import GameRepository
from .player_repository import PlayerRepository
from .card_repository import CardRepository
from .claim_repository import ClaimsRepository
from .chat_repository import ChatRepository

__all__ = [
    'GameRepository',
    'PlayerRepository',
    'CardRepository',
    'ClaimsRepository',
    'ChatRepository',
]
