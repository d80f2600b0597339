from luelue import db
from luelue.enums import CardType, GameState
from luelue.errors import InvalidMessageError
from datetime import datetime, timezone
import uuid


def new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class IndexedEnum(db.TypeDecorator):
    """Stores a CardType/GameState as its integer index."""
    impl = db.Integer
    cache_ok = True

    def __init__(self, enum_cls, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enum_cls = enum_cls

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return self.enum_cls.parse(value).index()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.enum_cls.from_index(value)


class Game(db.Model):
    __tablename__ = 'games'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    which_player_turn = db.Column(db.String(36), nullable=True)
    state = db.Column(IndexedEnum(GameState), nullable=False, default=GameState.Starting)
    started_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    round_number = db.Column(db.Integer, nullable=False, default=0)
    card_to_play = db.Column(IndexedEnum(CardType), nullable=False, default=CardType.King)
    players = db.relationship(
        'Player', back_populates='game', cascade='all',
        order_by='Player.seat',
    )
    claims = db.relationship('Claim', back_populates='game', cascade='all')
    chat = db.relationship('Chat', back_populates='game', uselist=False, cascade='all, delete-orphan')

    def to_dict(self, include_players=True):
        data = {
            'id': self.id,
            'which_player_turn': self.which_player_turn,
            'state': self.state.name if self.state else None,
            'started_at': _iso(self.started_at),
            'round_number': self.round_number,
            'card_to_play': self.card_to_play.name if self.card_to_play else None,
            'claims': [c.to_dict() for c in self.claims],
            'chat': self.chat.to_dict() if self.chat else None,
        }
        if include_players:
            data['players'] = [p.to_dict() for p in self.players]
        return data


class Player(db.Model):
    __tablename__ = 'players'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(64), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    # Join order within the game, used for turn rotation
    seat = db.Column(db.Integer, nullable=False, default=0)
    game_id = db.Column(db.String(36), db.ForeignKey('games.id'), nullable=False, index=True)
    joined_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    last_time_updated = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    game = db.relationship('Game', back_populates='players')
    assigned_cards = db.relationship('Card', back_populates='player', cascade='all')
    claims = db.relationship('Claim', back_populates='creator', cascade='all')
    messages = db.relationship('ChatMessage', cascade='all')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'seat': self.seat,
            'game_id': self.game_id,
            'joined_at': _iso(self.joined_at),
            'last_time_updated': _iso(self.last_time_updated),
            'assigned_cards': [c.to_dict() for c in self.assigned_cards],
        }


class Card(db.Model):
    __tablename__ = 'cards'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    card_type = db.Column(IndexedEnum(CardType), nullable=False, default=CardType.King)
    player_id = db.Column(db.String(36), db.ForeignKey('players.id'), nullable=True, index=True)
    claim_id = db.Column(db.String(36), db.ForeignKey('claims.id'), nullable=True, index=True)
    player = db.relationship('Player', back_populates='assigned_cards')
    claim = db.relationship('Claim', back_populates='cards')

    def to_dict(self):
        return {
            'id': self.id,
            'card_type': self.card_type.name if self.card_type else None,
            'player_id': self.player_id,
            'claim_id': self.claim_id,
        }


class Claim(db.Model):
    __tablename__ = 'claims'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    created_by = db.Column(db.String(36), db.ForeignKey('players.id'), nullable=False, index=True)
    game_id = db.Column(db.String(36), db.ForeignKey('games.id'), nullable=False, index=True)
    number_of_cards = db.Column(db.Integer, nullable=False, default=0)
    creator = db.relationship('Player', back_populates='claims')
    game = db.relationship('Game', back_populates='claims')
    cards = db.relationship('Card', back_populates='claim')

    def to_dict(self):
        return {
            'id': self.id,
            'created_by': self.created_by,
            'game_id': self.game_id,
            'number_of_cards': self.number_of_cards,
            'cards': [c.to_dict() for c in self.cards],
        }


class Chat(db.Model):
    __tablename__ = 'chats'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    game_id = db.Column(db.String(36), db.ForeignKey('games.id'), nullable=False, unique=True)
    number_of_messages = db.Column(db.Integer, nullable=False, default=0)
    game = db.relationship('Game', back_populates='chat')
    messages = db.relationship(
        'ChatMessage', back_populates='chat', cascade='all, delete-orphan',
        order_by='ChatMessage.seq',
    )

    def add_chat_message(self, message, max_messages):
        """Append `message`, dropping the oldest one once the chat is full.

        Returns the dropped message, if any. Empty content is rejected.
        """
        if not message.content:
            raise InvalidMessageError('The message is too short to be added to the chat!', message.to_dict())
        message.seq = self.messages[-1].seq + 1 if self.messages else 1
        dropped = None
        if self.number_of_messages >= max_messages and self.messages:
            dropped = self.messages.pop(0)
        else:
            self.number_of_messages += 1
        self.messages.append(message)
        return dropped

    def reset(self):
        self.number_of_messages = 0
        self.messages = []

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'number_of_messages': self.number_of_messages,
            'messages': [m.to_dict() for m in self.messages],
        }


class ChatMessage(db.Model):
    __tablename__ = 'chat_messages'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    # Position in the chat, assigned when the message is appended
    seq = db.Column(db.Integer, nullable=False, default=0)
    player_id = db.Column(db.String(36), db.ForeignKey('players.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    sent_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    chat_id = db.Column(db.String(36), db.ForeignKey('chats.id'), nullable=False, index=True)
    chat = db.relationship('Chat', back_populates='messages')

    def to_dict(self):
        return {
            'id': self.id,
            'player_id': self.player_id,
            'content': self.content,
            'sent_at': _iso(self.sent_at),
            'chat_id': self.chat_id,
        }
