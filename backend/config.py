import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///luelue.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Allowed frontend origins, comma separated
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',') if o.strip()]
    # Table limits
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '5'))
    MAX_CARDS_PER_CLAIM = int(os.environ.get('MAX_CARDS_PER_CLAIM', '4'))
    MAX_CHAT_MESSAGES = int(os.environ.get('MAX_CHAT_MESSAGES', '50'))
    # Server-sent events (seconds). 0 events means the stream never ends.
    SSE_HEARTBEAT_SEC = float(os.environ.get('SSE_HEARTBEAT_SEC', '30'))
    SSE_MAX_EVENTS = int(os.environ.get('SSE_MAX_EVENTS', '0'))
    # Optional: fixed seed for the card draw. Unset draws from system entropy.
    CARD_RNG_SEED = os.environ.get('CARD_RNG_SEED')
