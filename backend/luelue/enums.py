"""Card types and game states.

Both are persisted as their integer index and serialized by variant name.
"""
import enum

from .errors import BadClientRequest


class _IndexedEnum(enum.Enum):

    def index(self) -> int:
        return list(type(self)).index(self)

    def as_str(self) -> str:
        return self.value

    @classmethod
    def from_index(cls, idx: int):
        members = list(cls)
        if not 0 <= idx < len(members):
            raise ValueError(f'{cls.__name__} has no variant with index {idx}')
        return members[idx]

    @classmethod
    def number_of_values(cls) -> int:
        return len(cls)

    @classmethod
    def parse(cls, value):
        """Accept a member, a variant name (any case), a display string or an index."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise BadClientRequest(f'Invalid {cls.__name__}: {value!r}', value)
        if isinstance(value, int):
            try:
                return cls.from_index(value)
            except ValueError as exc:
                raise BadClientRequest(str(exc), value)
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if wanted in (member.name.lower(), member.value.lower()):
                    return member
        raise BadClientRequest(f'Invalid {cls.__name__}: {value!r}', value)


class CardType(_IndexedEnum):
    King = 'King'
    Queen = 'Queen'
    Jack = 'Jack'
    Ace = 'Ace'
    # Wild card
    Joker = 'Joker'


class GameState(_IndexedEnum):
    InProgress = 'In Progress'
    Ended = 'Ended'
    WaitingForPlayers = 'Waiting for Players'
    Starting = 'Starting'
