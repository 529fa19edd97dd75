import os


class Config:
    APP_ENV = os.environ.get('APP_ENV', 'development')
    # Verbose in development, quiet otherwise
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or ('DEBUG' if APP_ENV == 'development' else 'WARNING')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8911'))
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    # Where client agents connect by default
    RELAY_URL = os.environ.get('RELAY_URL', 'ws://localhost:8911/ws')
    # Handshake timeout handed to websockets.connect. Client side only; the
    # server applies no per-message timeout of its own.
    CLIENT_OPEN_TIMEOUT_SEC = float(os.environ.get('CLIENT_OPEN_TIMEOUT_SEC', '15'))
