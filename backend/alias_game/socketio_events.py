from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from alias_game.auth import extract_token, user_from_token
from alias_game.errors import AliasError, ValidationError
from alias_game.schemas import parse_message
from alias_game.services import get_services
from typing import Dict, Any

# sid -> {'user_id': int | None, 'rooms': set of room ids}
_sid_to_ctx: Dict[str, Dict[str, Any]] = {}


def _get_sid() -> str:
    return request.sid  # type: ignore


def _room_id(data) -> int:
    room_id = (data or {}).get('room_id')
    try:
        return int(room_id)
    except (TypeError, ValueError):
        raise ValidationError('room_id is required')


def handle_connect(auth=None):
    token = (auth or {}).get('token') if isinstance(auth, dict) else None
    user = user_from_token(extract_token(token or request.headers.get('Authorization')))
    _sid_to_ctx[_get_sid()] = {'user_id': user.id if user else None, 'rooms': set()}
    emit('connected', {'message': 'Connected to /ws', 'user_id': user.id if user else None})


def handle_disconnect(*args):
    _sid_to_ctx.pop(_get_sid(), None)


def handle_join_room(data):
    try:
        room = get_services().rooms.find_by_id(_room_id(data))
    except AliasError as exc:
        emit('error', exc.to_dict())
        return
    channel = f"room:{room.id}"
    join_room(channel)
    _sid_to_ctx.setdefault(_get_sid(), {'user_id': None, 'rooms': set()})['rooms'].add(room.id)
    emit('joined', {'room': channel, 'room_id': room.id})


def handle_leave_room(data):
    try:
        room_id = _room_id(data)
    except AliasError as exc:
        emit('error', exc.to_dict())
        return
    channel = f"room:{room_id}"
    leave_room(channel)
    ctx = _sid_to_ctx.get(_get_sid())
    if ctx:
        ctx['rooms'].discard(room_id)
    emit('left', {'room': channel, 'room_id': room_id})


def handle_send_message(data):
    """Persist a chat message, then broadcast it to everyone in the room."""
    ctx = _sid_to_ctx.get(_get_sid()) or {}
    user_id = ctx.get('user_id')
    if not user_id:
        emit('error', {'error': 'Unauthorized'})
        return
    try:
        room_id = _room_id(data)
        payload = parse_message(data)
        message = get_services().messages.create(room_id, user_id, payload.content)
    except AliasError as exc:
        emit('error', exc.to_dict())
        return
    current_app.logger.info(f"[message] room={room_id} user={user_id} id={message.id}")
    emit('message', message.to_dict(), to=f"room:{room_id}")


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the '/ws' namespace."""
    from alias_game import socketio

    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('disconnect', handle_disconnect, namespace='/ws')
    socketio.on_event('join_room', handle_join_room, namespace='/ws')
    socketio.on_event('leave_room', handle_leave_room, namespace='/ws')
    socketio.on_event('send_message', handle_send_message, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
