from flask import Blueprint, jsonify, request, current_app
from luelue import db
from luelue.dto import PlayerDTO, UpdatePlayerDTO
from luelue.errors import BadClientRequest
from luelue.repositories import CardRepository, PlayerRepository
from luelue.socketio_events import notify_game_changed


players = Blueprint('players', __name__)


@players.route('/player', methods=['POST'])
def add_player():
    data = request.get_json(silent=True)
    if data is None:
        raise BadClientRequest('Request body must be valid JSON')
    player_data = PlayerDTO.from_json(data)
    if not player_data.game_id:
        raise BadClientRequest('Player: "game_id" is required', data)
    player = PlayerRepository(db.session).add_player(player_data, CardRepository(db.session))
    current_app.logger.info(f"[join] game={player.game_id} player={player.id} seat={player.seat}")
    notify_game_changed(player.game_id)
    return jsonify(player.to_dict()), 201


@players.route('/players', methods=['GET'])
def list_players():
    game_id = request.args.get('game_id')
    return jsonify([p.to_dict() for p in PlayerRepository(db.session).get_all_players(game_id)])


@players.route('/player/<string:player_id>', methods=['GET'])
def get_player(player_id):
    return jsonify(PlayerRepository(db.session).get_player(player_id).to_dict())


@players.route('/player/update', methods=['PUT'])
def update_player():
    data = request.get_json(silent=True)
    if data is None:
        raise BadClientRequest('Request body must be valid JSON')
    player = PlayerRepository(db.session).update_player(UpdatePlayerDTO.from_json(data))
    notify_game_changed(player.game_id)
    return jsonify(player.to_dict())


@players.route('/player/<string:player_id>', methods=['DELETE'])
def delete_player(player_id):
    repo = PlayerRepository(db.session)
    game_id = repo.get_player(player_id).game_id
    repo.delete_player(player_id)
    current_app.logger.info(f"[leave] game={game_id} player={player_id}")
    notify_game_changed(game_id)
    return '', 204
