from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import random
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Card draws share one generator per app so consecutive rounds advance it
    seed = flask_app.config.get('CARD_RNG_SEED')
    if seed in (None, ''):
        card_rng = random.Random()
    else:
        try:
            card_rng = random.Random(int(seed))
        except (TypeError, ValueError):
            card_rng = random.Random(seed)
    flask_app.extensions['card_rng'] = card_rng

    from luelue.routes import main
    flask_app.register_blueprint(main)

    from luelue.api.games import games
    flask_app.register_blueprint(games)

    from luelue.api.players import players
    flask_app.register_blueprint(players)

    from luelue.api.cards import cards
    flask_app.register_blueprint(cards)

    from luelue.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from luelue.errors import ApplicationError, DatabaseQueryError

    @flask_app.errorhandler(ApplicationError)
    def handle_application_error(exc):
        if isinstance(exc, DatabaseQueryError) and exc.status_code >= 500:
            flask_app.logger.error(f"[db-error] {exc}")
        else:
            flask_app.logger.warning(f"[app-error] status={exc.status_code} {exc}")
        return jsonify(exc.to_dict()), exc.status_code

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with a demo game."""
        from luelue.models import Game
        from luelue.dto import CardDTO, PlayerDTO
        from luelue.repositories import GameRepository, PlayerRepository, CardRepository
        from luelue.services.games.rounds import select_new_card_to_be_played
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            game = GameRepository(db.session).add_game(Game())
            game_id = game.id
            player_repo = PlayerRepository(db.session)
            card_repo = CardRepository(db.session)
            rng = flask_app.extensions['card_rng']
            for name in ['Alice', 'Bob', 'Cara']:
                hand = [CardDTO(select_new_card_to_be_played(rng)) for _ in range(5)]
                player_repo.add_player(PlayerDTO(name=name, game_id=game_id, assigned_cards=hand), card_repo)

            print(f'Database has been reset and seeded! Demo game: {game_id}')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
