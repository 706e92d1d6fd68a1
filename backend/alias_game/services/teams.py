"""Team roster: membership and role rotation.

A team holds an ordered list of user ids. Once per round the describer
moves one position forward and the team leader is the player right after
the new describer, both wrapping around the end of the list.
"""
from typing import List, Optional, Tuple

from flask import current_app

from alias_game.errors import DuplicateMember, EmptyTeam, TeamFull, TeamNotFound, UserNotFound
from alias_game.models import Room, Team, User

MAX_USERS_IN_TEAM = 3


def next_roles(players: List[int], describer: Optional[int]) -> Tuple[int, int]:
    """Return ``(describer, team_leader)`` for the next round.

    An unset describer, or one no longer in ``players``, starts the cycle at
    the first player. With a single player both roles fall on that player.
    """
    if not players:
        raise EmptyTeam()
    current = players.index(describer) if describer in players else -1
    next_describer = (current + 1) % len(players)
    next_leader = (next_describer + 1) % len(players)
    return players[next_describer], players[next_leader]


class TeamService:
    def __init__(self, session, rooms, max_players: int = MAX_USERS_IN_TEAM):
        self.session = session
        self.rooms = rooms
        self.max_players = max_players

    def create(self, room_id: int, name: str, players: Optional[List[int]] = None) -> Team:
        room = self.rooms.find_by_id(room_id)
        players = list(players or [])
        if len(players) > self.max_players:
            raise TeamFull()
        if len(set(players)) != len(players):
            raise DuplicateMember()
        self._check_members(room.id, players)
        team = Team(room_id=room.id, name=name, players=players)
        self.session.add(team)
        self.session.flush()
        room.team_ids = list(room.team_ids or []) + [team.id]
        self.session.commit()
        return team

    def _check_members(self, room_id: int, user_ids: List[int], team_id: Optional[int] = None) -> None:
        """Every user must exist and sit in no other team of the room."""
        for user_id in user_ids:
            if not self.session.get(User, user_id):
                raise UserNotFound(user_id)
        query = Team.query.filter(Team.room_id == room_id)
        if team_id is not None:
            query = query.filter(Team.id != team_id)
        taken = {p for t in query.all() for p in (t.players or [])}
        if taken.intersection(user_ids):
            raise DuplicateMember('User is already in another team of this room.')

    def find_by_id(self, team_id: int) -> Team:
        team = self.session.get(Team, team_id)
        if not team:
            raise TeamNotFound(team_id)
        return team

    def find_in_room(self, room_id: int, team_id: int, for_update: bool = False) -> Team:
        self.rooms.find_by_id(room_id)
        query = Team.query.filter_by(id=team_id, room_id=room_id)
        if for_update:
            query = query.with_for_update()
        team = query.first()
        if not team:
            raise TeamNotFound(team_id, room_id)
        return team

    def list_all(self, room_id: int) -> List[Team]:
        self.rooms.find_by_id(room_id)
        return Team.query.filter_by(room_id=room_id).order_by(Team.id).all()

    def list_players(self, room_id: int, team_id: int) -> List[int]:
        return list(self.find_in_room(room_id, team_id).players or [])

    def update(self, room_id: int, team_id: int, name: str) -> Team:
        team = self.find_in_room(room_id, team_id)
        team.name = name
        self.session.commit()
        return team

    def remove(self, room_id: int, team_id: int) -> None:
        team = self.find_in_room(room_id, team_id)
        room = team.room
        room.team_ids = [tid for tid in (room.team_ids or []) if tid != team.id]
        self.session.delete(team)
        self.session.commit()

    def add_player(self, team_id: int, user_id: int) -> dict:
        team = Team.query.filter_by(id=team_id).with_for_update().first()
        if not team:
            raise TeamNotFound(team_id)

        players = list(team.players or [])
        if len(players) >= self.max_players:
            raise TeamFull()
        if user_id in players:
            raise DuplicateMember()
        self._check_members(team.room_id, [user_id], team_id=team.id)

        team.players = players + [user_id]
        self.session.commit()
        current_app.logger.info(f"[add-player] room={team.room_id} team={team.id} user={user_id} size={len(team.players)}")
        return {
            'message': 'Player added to the team successfully.',
            'room_id': team.room_id,
            'team_id': team.id,
        }

    def remove_player(self, room_id: int, team_id: int, user_id: int) -> Team:
        team = self.find_in_room(room_id, team_id)
        players = list(team.players or [])
        if user_id not in players:
            return team
        team.players = [p for p in players if p != user_id]
        if team.describer == user_id:
            team.describer = None
        if team.team_leader == user_id:
            team.team_leader = None
        self.session.commit()
        current_app.logger.info(f"[remove-player] room={room_id} team={team_id} user={user_id} size={len(team.players)}")
        return team

    def rotate(self, room_id: int, team_id: int) -> Team:
        """Advance describer and team leader by one position in a single write."""
        team = self.find_in_room(room_id, team_id, for_update=True)
        describer, leader = next_roles(list(team.players or []), team.describer)
        team.describer = describer
        team.team_leader = leader
        self.session.commit()
        current_app.logger.info(f"[rotate] room={room_id} team={team_id} describer={describer} leader={leader}")
        return team

    def teams_of(self, room: Room) -> List[Team]:
        """Teams in the order the room lists them, unlisted ones last."""
        order = {tid: i for i, tid in enumerate(room.team_ids or [])}
        return sorted(room.teams, key=lambda t: (order.get(t.id, len(order)), t.id))
