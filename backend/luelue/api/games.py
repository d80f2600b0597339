from flask import Blueprint, jsonify, request, current_app
from luelue import db
from luelue.dto import ChatMessageDTO, NewGameDTO, StatusUpdateRequest, UpdateGameDTO
from luelue.errors import BadClientRequest
from luelue.models import Game
from luelue.repositories import (
    CardRepository, ChatRepository, ClaimsRepository, GameRepository, PlayerRepository,
)
from luelue.services.games.rounds import end_game, prep_for_new_round
from luelue.services.games.status import build_status_update
from luelue.socketio_events import notify_game_changed


games = Blueprint('games', __name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise BadClientRequest('Request body must be valid JSON')
    return data


@games.route('/game', methods=['POST'])
def create_game():
    # An empty body creates a game with defaults
    data = request.get_json(silent=True)
    game_data = NewGameDTO.from_json({} if data is None else data)
    game = Game()
    if game_data.id:
        game.id = game_data.id
    if game_data.state is not None:
        game.state = game_data.state
    if game_data.card_to_play is not None:
        game.card_to_play = game_data.card_to_play
    GameRepository(db.session).add_game(game)
    current_app.logger.info(f"[create] game={game.id}")
    return jsonify(game.to_dict()), 201


@games.route('/games', methods=['GET'])
def list_games():
    return jsonify([g.to_dict() for g in GameRepository(db.session).get_all_games()])


@games.route('/game/<string:game_id>', methods=['GET'])
def get_game(game_id):
    return jsonify(GameRepository(db.session).get_game_by_id(game_id).to_dict())


@games.route('/game/update', methods=['PUT'])
def update_game():
    game_data = UpdateGameDTO.from_json(_json_body())
    game = GameRepository(db.session).update_game(
        game_data,
        PlayerRepository(db.session),
        CardRepository(db.session),
        ClaimsRepository(db.session),
    )
    notify_game_changed(game.id)
    return jsonify(game.to_dict())


@games.route('/game/<string:game_id>', methods=['DELETE'])
def delete_game(game_id):
    GameRepository(db.session).delete_game(game_id)
    current_app.logger.info(f"[delete] game={game_id}")
    notify_game_changed(game_id)
    return '', 204


@games.route('/game/<string:game_id>/round', methods=['POST'])
def next_round(game_id):
    game = GameRepository(db.session).get_game_by_id(game_id)
    prep_for_new_round(game)
    notify_game_changed(game.id)
    return jsonify(game.to_dict())


@games.route('/game/<string:game_id>/end', methods=['POST'])
def finish_game(game_id):
    game = GameRepository(db.session).get_game_by_id(game_id)
    end_game(game)
    notify_game_changed(game.id)
    return jsonify(game.to_dict())


@games.route('/status', methods=['POST'])
def game_status():
    status_request = StatusUpdateRequest.from_json(_json_body())
    status = build_status_update(status_request, GameRepository(db.session), PlayerRepository(db.session))
    return jsonify(status.to_dict())


@games.route('/game/<string:game_id>/chat', methods=['GET'])
def get_chat(game_id):
    return jsonify(ChatRepository(db.session).get_chat(game_id).to_dict())


@games.route('/game/<string:game_id>/chat', methods=['POST'])
def post_chat_message(game_id):
    chat_data = ChatMessageDTO.from_json(_json_body())
    message = ChatRepository(db.session).add_chat_message(game_id, chat_data.player_id, chat_data.content)
    notify_game_changed(game_id)
    return jsonify(message.to_dict()), 201


@games.route('/game/<string:game_id>/chat', methods=['DELETE'])
def reset_chat(game_id):
    chat = ChatRepository(db.session).reset_chat(game_id)
    notify_game_changed(game_id)
    return jsonify(chat.to_dict())
