from typing import List, Optional

from alias_game.models import Message


class MessageService:
    def __init__(self, session, rooms, history_limit: int = 50):
        self.session = session
        self.rooms = rooms
        self.history_limit = history_limit

    def create(self, room_id: int, user_id: int, content: str) -> Message:
        room = self.rooms.find_by_id(room_id)
        message = Message(room_id=room.id, user_id=user_id, content=content)
        self.session.add(message)
        self.session.commit()
        return message

    def list_for_room(self, room_id: int, limit: Optional[int] = None) -> List[Message]:
        """Most recent messages of the room, oldest first."""
        room = self.rooms.find_by_id(room_id)
        limit = limit or self.history_limit
        latest = (
            Message.query.filter_by(room_id=room.id)
            .order_by(Message.id.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(latest))
