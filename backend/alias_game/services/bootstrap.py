"""Startup seeding of the default rooms.

Every start wipes all rooms, then recreates the default ones, each with
three empty teams. Errors are not caught here: a half-seeded database
should stop the process from starting.
"""
from flask import current_app

DEFAULT_ROOMS = [
    {'name': 'Room1', 'turn_time': 60},
    {'name': 'Room2', 'turn_time': 60},
]
DEFAULT_TEAMS = ['Team1', 'Team2', 'Team3']


def create_default_rooms(rooms, teams, room_specs=None, team_names=None):
    rooms.delete_all()
    created = []
    for spec in room_specs or DEFAULT_ROOMS:
        room = rooms.create(spec['name'], turn_time=spec['turn_time'])
        add_teams_to_room(rooms, teams, room.id, team_names or DEFAULT_TEAMS)
        created.append(room)
    current_app.logger.info(f"[bootstrap] seeded rooms={[r.name for r in created]}")
    return created


def add_teams_to_room(rooms, teams, room_id, team_names):
    team_ids = []
    for name in team_names:
        team = teams.create(room_id, name, players=[])
        team_ids.append(team.id)
    return rooms.update_team_ids(room_id, team_ids)


def seed_on_startup(app):
    """Seed the default rooms when ``SEED_ON_STARTUP`` is set.

    Called from ``run.py`` at import time so ``flask run`` and WSGI servers
    loading ``run:app`` seed as well as ``python run.py``.
    """
    if not app.config.get('SEED_ON_STARTUP'):
        return None
    from alias_game.services import get_services
    with app.app_context():
        services = get_services()
        return create_default_rooms(services.rooms, services.teams)
