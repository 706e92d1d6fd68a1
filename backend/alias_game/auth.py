"""Bearer token issuance and lookup.

Clients forward the token verbatim in the ``Authorization`` header, with or
without a ``Bearer`` prefix. Flask-Login resolves ``current_user`` from it
through the request loader registered in the app factory.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from flask import current_app

from alias_game import db
from alias_game.models import User


def create_access_token(user_id: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'iat': now,
        'exp': now + timedelta(seconds=int(current_app.config.get('JWT_EXPIRES_SEC', 3600))),
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'], algorithm='HS256')


def decode_access_token(token: str) -> int:
    """Return the user id in ``token``.

    Raises ``jwt.InvalidTokenError`` (or a subclass) on a bad or expired token.
    """
    payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
    try:
        return int(payload['sub'])
    except (KeyError, TypeError, ValueError):
        raise jwt.InvalidTokenError('Invalid token payload')


def extract_token(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    value = header_value.strip()
    if value.lower().startswith('bearer '):
        value = value[7:].strip()
    return value or None


def user_from_token(token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    try:
        user_id = decode_access_token(token)
    except jwt.InvalidTokenError as exc:
        current_app.logger.info(f"[auth] rejected token: {exc}")
        return None
    return db.session.get(User, user_id)


def load_user_from_request(req) -> Optional[User]:
    return user_from_token(extract_token(req.headers.get('Authorization')))
