from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from alias_game import socketio
from alias_game.schemas import parse_message, parse_player, parse_room, parse_round, parse_team
from alias_game.services import get_services


rooms = Blueprint('rooms', __name__)


def room_channel(room_id: int) -> str:
    return f"room:{room_id}"


def _emit(event: str, payload: dict, room_id: int) -> None:
    socketio.emit(event, payload, to=room_channel(room_id), namespace='/ws')


# ---- Rooms ----

@rooms.route('', methods=['GET'])
def list_rooms():
    return jsonify([room.to_dict() for room in get_services().rooms.find_all()])


@rooms.route('', methods=['POST'])
@login_required
def create_room():
    payload = parse_room(request.get_json(silent=True), current_app.config.get('DEFAULT_TURN_TIME', 60))
    room = get_services().rooms.create(payload.name, turn_time=payload.turn_time)
    return jsonify(room.to_dict()), 201


@rooms.route('/<int:room_id>', methods=['GET'])
def get_room(room_id):
    services = get_services()
    room = services.rooms.find_by_id(room_id)
    payload = room.to_dict()
    payload['teams'] = [t.to_dict() for t in services.teams.teams_of(room)]
    return jsonify(payload)


@rooms.route('/<int:room_id>', methods=['DELETE'])
@login_required
def delete_room(room_id):
    get_services().rooms.delete(room_id)
    _emit('room_update', {'room_id': room_id, 'deleted': True}, room_id)
    return '', 204


@rooms.route('/<int:room_id>/reset', methods=['POST'])
@login_required
def reset_room(room_id):
    services = get_services()
    room = services.rooms.reset(room_id)
    payload = room.to_dict()
    payload['teams'] = [t.to_dict() for t in services.teams.teams_of(room)]
    _emit('room_update', payload, room_id)
    return jsonify(payload)


@rooms.route('/<int:room_id>/calculate-scores', methods=['PATCH'])
def calculate_scores(room_id):
    result = get_services().scores.calculate_scores(room_id)
    _emit('scores_updated', result, room_id)
    return jsonify(result)


# ---- Teams ----

@rooms.route('/<int:room_id>/teams', methods=['GET'])
def list_teams(room_id):
    return jsonify([t.to_dict() for t in get_services().teams.list_all(room_id)])


@rooms.route('/<int:room_id>/teams', methods=['POST'])
@login_required
def create_team(room_id):
    payload = parse_team(request.get_json(silent=True))
    team = get_services().teams.create(room_id, payload.name, players=payload.players)
    _emit('team_update', team.to_dict(), room_id)
    return jsonify(team.to_dict()), 201


@rooms.route('/<int:room_id>/teams/<int:team_id>', methods=['GET'])
def get_team(room_id, team_id):
    return jsonify(get_services().teams.find_in_room(room_id, team_id).to_dict())


@rooms.route('/<int:room_id>/teams/<int:team_id>', methods=['PATCH'])
@login_required
def update_team(room_id, team_id):
    payload = parse_team(request.get_json(silent=True))
    team = get_services().teams.update(room_id, team_id, payload.name)
    _emit('team_update', team.to_dict(), room_id)
    return jsonify(team.to_dict())


@rooms.route('/<int:room_id>/teams/<int:team_id>', methods=['DELETE'])
@login_required
def delete_team(room_id, team_id):
    get_services().teams.remove(room_id, team_id)
    _emit('team_update', {'id': team_id, 'room_id': room_id, 'deleted': True}, room_id)
    return '', 204


@rooms.route('/<int:room_id>/teams/<int:team_id>/players', methods=['GET'])
def list_team_players(room_id, team_id):
    return jsonify(get_services().teams.list_players(room_id, team_id))


@rooms.route('/<int:room_id>/teams/<int:team_id>/players', methods=['POST'])
@login_required
def add_team_player(room_id, team_id):
    """Adds a player to the team; without a user_id the caller joins."""
    payload = parse_player(request.get_json(silent=True))
    user_id = payload.user_id or current_user.id
    teams = get_services().teams
    teams.find_in_room(room_id, team_id)
    result = teams.add_player(team_id, user_id)
    _emit('team_update', teams.find_by_id(team_id).to_dict(), room_id)
    return jsonify(result), 201


@rooms.route('/<int:room_id>/teams/<int:team_id>/players/<int:user_id>', methods=['DELETE'])
@login_required
def remove_team_player(room_id, team_id, user_id):
    team = get_services().teams.remove_player(room_id, team_id, user_id)
    _emit('team_update', team.to_dict(), room_id)
    return jsonify(team.to_dict())


@rooms.route('/<int:room_id>/teams/<int:team_id>/next-turn', methods=['PATCH'])
@login_required
def next_turn(room_id, team_id):
    team = get_services().teams.rotate(room_id, team_id)
    _emit('team_update', team.to_dict(), room_id)
    return jsonify(team.to_dict())


@rooms.route('/<int:room_id>/teams/<int:team_id>/rounds', methods=['POST'])
@login_required
def record_round(room_id, team_id):
    payload = parse_round(request.get_json(silent=True))
    entry = get_services().scores.record_round(room_id, team_id, payload.guessed, payload.skipped)
    return jsonify(entry.to_dict()), 201


# ---- Messages ----

@rooms.route('/<int:room_id>/messages', methods=['GET'])
def list_messages(room_id):
    limit = request.args.get('limit', type=int)
    messages = get_services().messages.list_for_room(room_id, limit=limit)
    return jsonify([m.to_dict() for m in messages])


@rooms.route('/<int:room_id>/messages', methods=['POST'])
@login_required
def post_message(room_id):
    payload = parse_message(request.get_json(silent=True))
    message = get_services().messages.create(room_id, current_user.id, payload.content)
    _emit('message', message.to_dict(), room_id)
    return jsonify(message.to_dict()), 201
