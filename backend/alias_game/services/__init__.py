"""Alias domain services.

The app factory builds one :class:`Services` bundle per application and
stores it in ``app.extensions``; routes and socket handlers fetch it with
:func:`get_services` instead of importing module-level singletons.
"""
from dataclasses import dataclass

from flask import current_app

from .rooms import RoomService
from .teams import TeamService
from .scoring import ScoreService
from .messages import MessageService

EXTENSION_KEY = 'alias_game'


@dataclass
class Services:
    rooms: RoomService
    teams: TeamService
    scores: ScoreService
    messages: MessageService


def build_services(session, config) -> Services:
    rooms = RoomService(session, default_turn_time=int(config.get('DEFAULT_TURN_TIME', 60)))
    teams = TeamService(session, rooms, max_players=int(config.get('MAX_PLAYERS_IN_TEAM', 3)))
    return Services(
        rooms=rooms,
        teams=teams,
        scores=ScoreService(session, rooms, teams),
        messages=MessageService(session, rooms, history_limit=int(config.get('MESSAGE_HISTORY_LIMIT', 50))),
    )


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
