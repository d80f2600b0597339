"""Request/response payloads that don't map one-to-one onto a table row."""
from dataclasses import dataclass, field
from typing import List, Optional

from luelue.enums import CardType, GameState
from luelue.errors import BadClientRequest, ProcessError


def _require_object(payload, what):
    if not isinstance(payload, dict):
        raise BadClientRequest(f'{what} must be a JSON object', payload)
    return payload


def _require_str(payload, key, what):
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise BadClientRequest(f'{what}: "{key}" is required', payload)
    return value


def _optional_str(payload, key, what):
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise BadClientRequest(f'{what}: "{key}" must be a string', payload)
    return value


def _optional_int(payload, key, what):
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise BadClientRequest(f'{what}: "{key}" must be a non-negative integer', payload)
    return value


def _optional_list(payload, key, what):
    value = payload.get(key)
    if value is not None and not isinstance(value, list):
        raise BadClientRequest(f'{what}: "{key}" must be a list', payload)
    return value


@dataclass
class CardDTO:
    card_type: CardType
    id: Optional[str] = None

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Card')
        if 'card_type' not in payload:
            raise BadClientRequest('Card: "card_type" is required', payload)
        return cls(card_type=CardType.parse(payload['card_type']), id=_optional_str(payload, 'id', 'Card'))


@dataclass
class PlayerDTO:
    name: str
    id: Optional[str] = None
    game_id: Optional[str] = None
    score: int = 0
    assigned_cards: List[CardDTO] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Player')
        return cls(
            name=_require_str(payload, 'name', 'Player').strip(),
            id=_optional_str(payload, 'id', 'Player'),
            game_id=_optional_str(payload, 'game_id', 'Player'),
            score=_optional_int(payload, 'score', 'Player') or 0,
            assigned_cards=[CardDTO.from_json(c) for c in (_optional_list(payload, 'assigned_cards', 'Player') or [])],
        )


@dataclass
class ClaimDTO:
    created_by: str
    card_ids: List[str]
    id: Optional[str] = None
    game_id: Optional[str] = None

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Claim')
        cards = _optional_list(payload, 'cards', 'Claim') or []
        card_ids = []
        for card in cards:
            card_id = card.get('id') if isinstance(card, dict) else card
            if not isinstance(card_id, str) or not card_id:
                raise BadClientRequest('Claim: every card must be a card id or an object with an "id"', payload)
            card_ids.append(card_id)
        return cls(
            created_by=_require_str(payload, 'created_by', 'Claim'),
            card_ids=card_ids,
            id=_optional_str(payload, 'id', 'Claim'),
            game_id=_optional_str(payload, 'game_id', 'Claim'),
        )


@dataclass
class NewGameDTO:
    id: Optional[str] = None
    state: Optional[GameState] = None
    card_to_play: Optional[CardType] = None

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Game')
        return cls(
            id=_optional_str(payload, 'id', 'Game'),
            state=GameState.parse(payload['state']) if payload.get('state') is not None else None,
            card_to_play=CardType.parse(payload['card_to_play']) if payload.get('card_to_play') is not None else None,
        )


@dataclass
class UpdateGameDTO:
    id: str
    state: Optional[GameState] = None
    round_number: Optional[int] = None
    card_to_play: Optional[CardType] = None
    which_player_turn: Optional[str] = None
    players: Optional[List[PlayerDTO]] = None
    claims: Optional[List[ClaimDTO]] = None

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Game update')
        players = _optional_list(payload, 'players', 'Game update')
        claims = _optional_list(payload, 'claims', 'Game update')
        return cls(
            id=_require_str(payload, 'id', 'Game update'),
            state=GameState.parse(payload['state']) if payload.get('state') is not None else None,
            round_number=_optional_int(payload, 'round_number', 'Game update'),
            card_to_play=CardType.parse(payload['card_to_play']) if payload.get('card_to_play') is not None else None,
            which_player_turn=_optional_str(payload, 'which_player_turn', 'Game update'),
            players=[PlayerDTO.from_json(p) for p in players] if players is not None else None,
            claims=[ClaimDTO.from_json(c) for c in claims] if claims is not None else None,
        )

    def scalar_fields(self) -> dict:
        """Columns of the `games` table that were provided."""
        values = {
            'state': self.state,
            'round_number': self.round_number,
            'card_to_play': self.card_to_play,
            'which_player_turn': self.which_player_turn,
        }
        return {k: v for k, v in values.items() if v is not None}

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'state': self.state.name if self.state else None,
            'round_number': self.round_number,
            'card_to_play': self.card_to_play.name if self.card_to_play else None,
            'which_player_turn': self.which_player_turn,
            'players': [p.id or p.name for p in self.players] if self.players is not None else None,
            'claims': [c.id for c in self.claims] if self.claims is not None else None,
        }


@dataclass
class UpdatePlayerDTO:
    id: str
    name: Optional[str] = None
    score: Optional[int] = None

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Player update')
        name = _optional_str(payload, 'name', 'Player update')
        if name is not None and not name.strip():
            raise BadClientRequest('Player update: "name" must not be empty', payload)
        return cls(
            id=_require_str(payload, 'id', 'Player update'),
            name=name.strip() if name else None,
            score=_optional_int(payload, 'score', 'Player update'),
        )

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'score': self.score}


@dataclass
class UpdateCardDTO:
    id: str
    card_type: Optional[CardType] = None
    player_id: Optional[str] = None
    claim_id: Optional[str] = None

    def __post_init__(self):
        if self.card_type is None and self.player_id is None and self.claim_id is None:
            raise ProcessError(
                'No new data was provided! The modifying attempt was aborted!',
                'UpdateCardDTO',
                {'id': self.id},
                status_code=400,
            )

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Card update')
        return cls(
            id=_require_str(payload, 'id', 'Card update'),
            card_type=CardType.parse(payload['card_type']) if payload.get('card_type') is not None else None,
            player_id=_optional_str(payload, 'player_id', 'Card update'),
            claim_id=_optional_str(payload, 'claim_id', 'Card update'),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'card_type': self.card_type.name if self.card_type else None,
            'player_id': self.player_id,
            'claim_id': self.claim_id,
        }


@dataclass
class StatusUpdateRequest:
    player_id: str
    game_id: str

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Status request')
        return cls(
            player_id=_require_str(payload, 'player_id', 'Status request'),
            game_id=_require_str(payload, 'game_id', 'Status request'),
        )


@dataclass
class ChatMessageDTO:
    player_id: str
    content: str = ''

    @classmethod
    def from_json(cls, payload):
        payload = _require_object(payload, 'Chat message')
        return cls(
            player_id=_require_str(payload, 'player_id', 'Chat message'),
            content=_optional_str(payload, 'content', 'Chat message') or '',
        )


@dataclass
class StatusUpdate:
    game_data: Optional[dict] = None
    player_data: Optional[dict] = None
    player_excluded_from_game: bool = False

    def to_dict(self) -> dict:
        return {
            'game_data': self.game_data,
            'player_data': self.player_data,
            'player_excluded_from_game': self.player_excluded_from_game,
        }
