from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from alias_game.config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from alias_game.services import EXTENSION_KEY, build_services
    flask_app.extensions[EXTENSION_KEY] = build_services(db.session, flask_app.config)

    from alias_game.errors import AliasError

    @flask_app.errorhandler(AliasError)
    def handle_alias_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(404)
    def handle_not_found(exc):
        return jsonify({'error': 'Not found'}), 404

    @flask_app.errorhandler(405)
    def handle_method_not_allowed(exc):
        return jsonify({'error': 'Method not allowed'}), 405

    @flask_app.errorhandler(500)
    def handle_internal_error(exc):
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500

    from alias_game.main import main
    flask_app.register_blueprint(main, url_prefix='/api/v1')

    from alias_game.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/v1/rooms')

    from alias_game.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    from alias_game.models import User
    from alias_game.auth import load_user_from_request

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    login_manager.request_loader(load_user_from_request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    @click.command('seed-rooms')
    def seed_rooms_command():
        """Deletes every room and recreates the default rooms and teams."""
        from alias_game.services import get_services
        from alias_game.services.bootstrap import create_default_rooms
        with flask_app.app_context():
            services = get_services()
            rooms = create_default_rooms(services.rooms, services.teams)
        print(f'Seeded {len(rooms)} rooms.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from alias_game.services import get_services
        from alias_game.services.bootstrap import create_default_rooms
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            users = ['testuser1', 'testuser2', 'testuser3']
            for u in users:
                user = User(username=u)
                user.set_password('Password1!')
                db.session.add(user)
            db.session.commit()

            services = get_services()
            create_default_rooms(services.rooms, services.teams)
        print('Database has been reset and seeded!')

    flask_app.cli.add_command(seed_rooms_command)
    flask_app.cli.add_command(db_reset_command)

    return flask_app
