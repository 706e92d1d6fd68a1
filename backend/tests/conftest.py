import os
import sys
import pytest

# Ensure the backend root (containing the `alias_game` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from alias_game import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    JWT_SECRET_KEY = 'test-jwt-secret-with-at-least-32-bytes!!'
    JWT_EXPIRES_SEC = 3600
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    MAX_PLAYERS_IN_TEAM = 3
    DEFAULT_TURN_TIME = 60
    MESSAGE_HISTORY_LIMIT = 50
    SEED_ON_STARTUP = False
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)

    # The app context below stays pushed for the whole test, so Flask reuses
    # it (and its ``g``) for every test-client request. Drop Flask-Login's
    # cached user so each request resolves its own Authorization header.
    @application.before_request
    def _reset_login_user():
        from flask import g
        g.pop('_login_user', None)

    with application.app_context():
        # Ensure models are imported so tables are created
        import alias_game.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def services(flask_app):
    from alias_game.services import get_services
    return get_services()


@pytest.fixture()
def make_user(flask_app):
    """Create a user and return ``(user, token)``."""
    from alias_game.auth import create_access_token
    from alias_game.models import User

    def _make(username, password='Password1!'):
        user = User(username=username)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user, create_access_token(user.id)

    return _make


@pytest.fixture()
def seeded(services):
    from alias_game.services.bootstrap import create_default_rooms
    return create_default_rooms(services.rooms, services.teams)


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
def user_ids(make_user):
    """Ids of five registered users."""
    return [make_user(f'player{i}')[0].id for i in range(1, 6)]
