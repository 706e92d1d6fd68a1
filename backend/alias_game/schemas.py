"""Request payload parsing.

Each ``parse_*`` function takes the decoded JSON body (or ``None``) and
returns a small dataclass, raising :class:`ValidationError` on bad input.
"""
import string
from dataclasses import dataclass, field
from typing import List, Optional

from alias_game.errors import ValidationError

USERNAME_MIN = 3
USERNAME_MAX = 20
PASSWORD_MIN = 8
NAME_MAX = 64
MESSAGE_MAX = 500


@dataclass
class Credentials:
    username: str
    password: str


@dataclass
class RoomPayload:
    name: str
    turn_time: int


@dataclass
class TeamPayload:
    name: str
    players: List[int] = field(default_factory=list)


@dataclass
class PlayerPayload:
    user_id: Optional[int]


@dataclass
class RoundPayload:
    guessed: int
    skipped: int


@dataclass
class MessagePayload:
    content: str


def _body(data) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _require_str(data: dict, key: str, max_len: int = NAME_MAX) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{key} is required')
    value = value.strip()
    if len(value) > max_len:
        raise ValidationError(f'{key} must be at most {max_len} characters')
    return value


def _int(data: dict, key: str, default=None, minimum=None, maximum=None):
    value = data.get(key, default)
    if value is None:
        return None
    # bool is an int subclass; "true" is never a valid count
    if isinstance(value, bool):
        raise ValidationError(f'{key} must be an integer')
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{key} must be an integer')
    if minimum is not None and value < minimum:
        raise ValidationError(f'{key} must be >= {minimum}')
    if maximum is not None and value > maximum:
        raise ValidationError(f'{key} must be <= {maximum}')
    return value


def is_strong_password(password: str) -> bool:
    return (
        len(password) >= PASSWORD_MIN
        and any(c.islower() for c in password)
        and any(c.isupper() for c in password)
        and any(c.isdigit() for c in password)
        and any(c in string.punctuation for c in password)
    )


def parse_credentials(data, strong_password: bool = False) -> Credentials:
    data = _body(data)
    username = data.get('username')
    if not isinstance(username, str) or not username.strip():
        raise ValidationError('Username is required')
    username = username.strip()
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        raise ValidationError(f'Username must be {USERNAME_MIN}-{USERNAME_MAX} characters')
    password = data.get('password')
    if not isinstance(password, str) or not password:
        raise ValidationError('Password is required')
    if strong_password and not is_strong_password(password):
        raise ValidationError(
            'Password must be at least 8 characters and contain lower and upper case letters, a digit and a symbol'
        )
    return Credentials(username=username, password=password)


def parse_room(data, default_turn_time: int = 60) -> RoomPayload:
    data = _body(data)
    return RoomPayload(
        name=_require_str(data, 'name'),
        turn_time=_int(data, 'turn_time', default=default_turn_time, minimum=10, maximum=600),
    )


def parse_team(data) -> TeamPayload:
    data = _body(data)
    players = data.get('players') or []
    if not isinstance(players, list):
        raise ValidationError('players must be a list')
    parsed = []
    for p in players:
        if isinstance(p, bool) or not isinstance(p, int):
            raise ValidationError('players must be a list of user ids')
        parsed.append(p)
    return TeamPayload(name=_require_str(data, 'name'), players=parsed)


def parse_player(data) -> PlayerPayload:
    data = _body(data)
    return PlayerPayload(user_id=_int(data, 'user_id', minimum=1))


def parse_round(data) -> RoundPayload:
    data = _body(data)
    return RoundPayload(
        guessed=_int(data, 'guessed', default=0, minimum=0),
        skipped=_int(data, 'skipped', default=0, minimum=0),
    )


def parse_message(data) -> MessagePayload:
    data = _body(data)
    return MessagePayload(content=_require_str(data, 'content', max_len=MESSAGE_MAX))
