from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from alias_game import db
from alias_game.auth import create_access_token
from alias_game.errors import UsernameTaken, Unauthorized
from alias_game.models import User
from alias_game.schemas import parse_credentials

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Alias game server!'})

@main.route('/auth/register', methods=['POST'])
def register():
    creds = parse_credentials(request.get_json(silent=True), strong_password=True)
    if User.query.filter_by(username=creds.username).first():
        raise UsernameTaken()

    user = User(username=creds.username)
    user.set_password(creds.password)
    db.session.add(user)
    db.session.commit()

    return jsonify({
        'user': user.to_dict(),
        'access_token': create_access_token(user.id),
    }), 201

@main.route('/auth/login', methods=['POST'])
def login():
    creds = parse_credentials(request.get_json(silent=True))
    user = User.query.filter_by(username=creds.username).first()
    if not user or not user.check_password(creds.password):
        raise Unauthorized('Invalid username or password')
    login_user(user)
    return jsonify({
        'user': user.to_dict(),
        'access_token': create_access_token(user.id),
    })

@main.route('/auth/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})

@main.route('/users/me')
@login_required
def me():
    return jsonify(current_user.to_dict())
