from flask import Blueprint, jsonify, request
from luelue import db
from luelue.dto import CardDTO, ClaimDTO, UpdateCardDTO
from luelue.errors import BadClientRequest
from luelue.repositories import CardRepository, ClaimsRepository
from luelue.socketio_events import notify_game_changed


cards = Blueprint('cards', __name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise BadClientRequest('Request body must be valid JSON')
    return data


# ---- cards ----

@cards.route('/card', methods=['POST'])
def create_card():
    data = _json_body()
    card = CardRepository(db.session).create_card(CardDTO.from_json(data), data.get('player_id'))
    return jsonify(card.to_dict()), 201


@cards.route('/cards', methods=['GET'])
def list_cards():
    found = CardRepository(db.session).get_all_cards(
        claim_id=request.args.get('claim_id'),
        player_id=request.args.get('player_id'),
    )
    return jsonify([c.to_dict() for c in found])


@cards.route('/card/<string:card_id>', methods=['GET'])
def get_card(card_id):
    return jsonify(CardRepository(db.session).get_card_by_id(card_id).to_dict())


@cards.route('/card/update', methods=['PUT'])
def update_card():
    card = CardRepository(db.session).update_card(UpdateCardDTO.from_json(_json_body()))
    return jsonify(card.to_dict())


@cards.route('/card/<string:card_id>', methods=['DELETE'])
def delete_card(card_id):
    CardRepository(db.session).delete_card(card_id)
    return '', 204


# ---- claims ----

@cards.route('/claim', methods=['POST'])
def create_claim():
    claim = ClaimsRepository(db.session).create_claim(ClaimDTO.from_json(_json_body()), CardRepository(db.session))
    notify_game_changed(claim.game_id)
    return jsonify(claim.to_dict()), 201


@cards.route('/claims', methods=['GET'])
def list_claims():
    found = ClaimsRepository(db.session).get_all_claims(
        game_id=request.args.get('game_id'),
        player_id=request.args.get('player_id'),
    )
    return jsonify([c.to_dict() for c in found])


@cards.route('/claim/<string:claim_id>', methods=['GET'])
def get_claim(claim_id):
    return jsonify(ClaimsRepository(db.session).get_claim_by_id(claim_id).to_dict())


@cards.route('/claim/<string:claim_id>', methods=['DELETE'])
def delete_claim(claim_id):
    repo = ClaimsRepository(db.session)
    game_id = repo.get_claim_by_id(claim_id).game_id
    repo.delete_claim(claim_id)
    notify_game_changed(game_id)
    return '', 204
