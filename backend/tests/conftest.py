import os
import sys
import pytest

# Ensure the backend root (containing the `luelue` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from luelue import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = []
    MAX_PLAYERS = 5
    MAX_CARDS_PER_CLAIM = 4
    MAX_CHAT_MESSAGES = 50
    SSE_HEARTBEAT_SEC = 0
    SSE_MAX_EVENTS = 2
    CARD_RNG_SEED = '7'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import luelue.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def new_game(client):
    """Create a game over HTTP and return its JSON."""
    def _create(**payload):
        res = client.post('/game', json=payload)
        assert res.status_code == 201
        return res.get_json()
    return _create


@pytest.fixture()
def join(client):
    """Seat a player over HTTP and return its JSON."""
    def _join(game_id, name, cards=()):
        res = client.post('/player', json={
            'game_id': game_id,
            'name': name,
            'assigned_cards': [{'card_type': c} for c in cards],
        })
        assert res.status_code == 201, res.get_json()
        return res.get_json()
    return _join
