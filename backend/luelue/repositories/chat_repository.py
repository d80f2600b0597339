from luelue.errors import DatabaseQueryError
from luelue.models import Chat, ChatMessage, Player
from .base import BaseRepository

MAX_CHAT_MESSAGES = 50


class ChatRepository(BaseRepository):
    """Access to the `chats` and `chat_messages` tables."""

    def get_chat(self, game_id) -> Chat:
        chats = self._all(self.session.query(Chat).filter_by(game_id=game_id))
        if not chats:
            raise DatabaseQueryError('Chat not found', status_code=404)
        return chats[0]

    def add_chat_message(self, game_id, player_id, content) -> ChatMessage:
        chat = self.get_chat(game_id)
        player = self._fetch(Player, player_id, 'Player not found')
        if player.game_id != game_id:
            raise DatabaseQueryError(
                'Only players of the game can post in its chat', {'player_id': player_id, 'game_id': game_id}, 403)

        message = ChatMessage(player_id=player.id, content=content)
        dropped = chat.add_chat_message(message, self._setting('MAX_CHAT_MESSAGES', MAX_CHAT_MESSAGES))
        if dropped is not None:
            self._log.info("chat=%s full, dropped oldest message %s", chat.id, dropped.id)
        self._commit(message.to_dict())
        return message

    def reset_chat(self, game_id) -> Chat:
        chat = self.get_chat(game_id)
        chat.reset()
        self._commit({'game_id': game_id})
        return chat
