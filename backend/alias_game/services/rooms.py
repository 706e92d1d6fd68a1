from typing import List, Optional

from flask import current_app

from alias_game.errors import RoomExists, RoomNotFound
from alias_game.models import Room, Round


class RoomService:
    """Room directory backed by the SQLAlchemy session."""

    def __init__(self, session, default_turn_time: int = 60):
        self.session = session
        self.default_turn_time = default_turn_time

    def create(self, name: str, turn_time: Optional[int] = None, team_ids: Optional[List[int]] = None) -> Room:
        if self.find_by_name(name):
            raise RoomExists(name)
        room = Room(
            name=name,
            turn_time=turn_time if turn_time is not None else self.default_turn_time,
            team_ids=list(team_ids or []),
        )
        self.session.add(room)
        self.session.commit()
        current_app.logger.info(f"[room-create] room={room.id} name={room.name} turn_time={room.turn_time}")
        return room

    def find_all(self) -> List[Room]:
        return Room.query.order_by(Room.id).all()

    def find_by_name(self, name: str) -> Optional[Room]:
        return Room.query.filter_by(name=name).first()

    def find_by_id(self, room_id: int) -> Room:
        room = self.session.get(Room, room_id)
        if not room:
            raise RoomNotFound(room_id)
        return room

    def update_team_ids(self, room_id: int, team_ids: List[int]) -> Room:
        room = self.find_by_id(room_id)
        room.team_ids = list(team_ids)
        self.session.commit()
        return room

    def delete(self, room_id: int) -> None:
        room = self.find_by_id(room_id)
        self.session.delete(room)
        self.session.commit()
        current_app.logger.info(f"[room-delete] room={room_id}")

    def delete_all(self) -> int:
        rooms = Room.query.all()
        for room in rooms:
            self.session.delete(room)
        self.session.commit()
        current_app.logger.info(f"[room-delete-all] removed={len(rooms)}")
        return len(rooms)

    def reset(self, room_id: int) -> Room:
        """Empty every team of the room and drop its round history."""
        room = self.find_by_id(room_id)
        for team in room.teams:
            team.players = []
            team.describer = None
            team.team_leader = None
            team.score = 0
        Round.query.filter_by(room_id=room.id).delete()
        self.session.commit()
        current_app.logger.info(f"[room-reset] room={room.id} teams={len(room.teams)}")
        return room
