import pytest

from alias_game.errors import RoomExists, RoomNotFound
from alias_game.models import Message, Room, Round, Team
from alias_game.services.bootstrap import create_default_rooms, seed_on_startup


def test_bootstrap_on_empty_store(services):
    rooms = create_default_rooms(services.rooms, services.teams)

    assert [r.name for r in rooms] == ['Room1', 'Room2']
    assert Room.query.count() == 2
    for room in services.rooms.find_all():
        assert room.turn_time == 60
        teams = services.teams.teams_of(room)
        assert [t.name for t in teams] == ['Team1', 'Team2', 'Team3']
        assert room.team_ids == [t.id for t in teams]
        for team in teams:
            assert team.players == []
            assert team.describer is None
            assert team.team_leader is None


def test_bootstrap_wipes_existing_rooms(services, make_user):
    alice, _ = make_user('alice')
    stale = services.rooms.create('Stale')
    team = services.teams.create(stale.id, 'Old', players=[alice.id])
    services.messages.create(stale.id, alice.id, 'hello')
    services.scores.record_round(stale.id, team.id, guessed=3, skipped=1)

    create_default_rooms(services.rooms, services.teams)

    assert sorted(r.name for r in Room.query.all()) == ['Room1', 'Room2']
    assert Team.query.count() == 6
    assert Message.query.count() == 0
    assert Round.query.count() == 0


def test_bootstrap_twice_is_stable(services):
    create_default_rooms(services.rooms, services.teams)
    create_default_rooms(services.rooms, services.teams)
    assert Room.query.count() == 2
    assert Team.query.count() == 6


def test_bootstrap_with_custom_rooms(services):
    rooms = create_default_rooms(
        services.rooms, services.teams,
        room_specs=[{'name': 'Quick', 'turn_time': 30}],
        team_names=['Red', 'Blue'],
    )
    assert len(rooms) == 1
    assert rooms[0].turn_time == 30
    assert [t.name for t in services.teams.list_all(rooms[0].id)] == ['Red', 'Blue']


def test_create_room_rejects_duplicate_name(services):
    services.rooms.create('Room1')
    with pytest.raises(RoomExists):
        services.rooms.create('Room1')


def test_create_room_uses_default_turn_time(services):
    assert services.rooms.create('Room9').turn_time == 60


def test_delete_room(services):
    room = services.rooms.create('Gone')
    services.teams.create(room.id, 'Team1')
    services.rooms.delete(room.id)
    with pytest.raises(RoomNotFound):
        services.rooms.find_by_id(room.id)
    assert Team.query.count() == 0


def test_reset_room_empties_teams(services, user_ids):
    room = services.rooms.create('Busy')
    team = services.teams.create(room.id, 'Team1', players=user_ids[:2])
    services.teams.rotate(room.id, team.id)
    services.scores.record_round(room.id, team.id, guessed=4, skipped=0)
    services.scores.calculate_scores(room.id)

    services.rooms.reset(room.id)

    team = services.teams.find_by_id(team.id)
    assert team.players == []
    assert team.describer is None
    assert team.team_leader is None
    assert team.score == 0
    assert Round.query.filter_by(room_id=room.id).count() == 0


def test_seed_on_startup_disabled_leaves_store_alone(flask_app, services):
    services.rooms.create('Kept')
    assert seed_on_startup(flask_app) is None
    assert [r.name for r in Room.query.all()] == ['Kept']


def test_seed_on_startup_seeds_default_rooms(flask_app, services, monkeypatch):
    services.rooms.create('Stale')
    monkeypatch.setitem(flask_app.config, 'SEED_ON_STARTUP', True)
    rooms = seed_on_startup(flask_app)
    assert [r.name for r in rooms] == ['Room1', 'Room2']
    assert sorted(r.name for r in Room.query.all()) == ['Room1', 'Room2']
    assert Team.query.count() == 6
