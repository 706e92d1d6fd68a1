"""Domain errors raised by the services.

Every error carries the HTTP status it maps to; the app factory registers a
single handler that renders them as ``{"error": message}``.
"""


class AliasError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class NotFound(AliasError):
    status_code = 404
    message = 'Not found'


class BadRequest(AliasError):
    status_code = 400
    message = 'Bad request'


class Conflict(AliasError):
    status_code = 409
    message = 'Conflict'


class Unauthorized(AliasError):
    status_code = 401
    message = 'Unauthorized'


class RoomNotFound(NotFound):
    def __init__(self, room_id):
        super().__init__(f'Room {room_id} not found')
        self.room_id = room_id


class TeamNotFound(NotFound):
    def __init__(self, team_id, room_id=None):
        if room_id is None:
            super().__init__('Team not found.')
        else:
            super().__init__(f'Team {team_id} in room {room_id} not found')
        self.team_id = team_id
        self.room_id = room_id


class UserNotFound(NotFound):
    def __init__(self, user_id):
        super().__init__(f'User {user_id} not found')
        self.user_id = user_id


class TeamFull(BadRequest):
    message = 'Team is already full.'


class DuplicateMember(BadRequest):
    message = 'User is already in the team.'


class EmptyTeam(BadRequest):
    message = 'Team has no players.'


class ValidationError(BadRequest):
    message = 'Invalid payload'


class RoomExists(Conflict):
    def __init__(self, name):
        super().__init__(f'Room {name} already exists')
        self.name = name


class UsernameTaken(Conflict):
    message = 'Username already exists'
