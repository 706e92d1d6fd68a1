from alias_game import db, bcrypt
from flask_login import UserMixin
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc)


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Room(db.Model):
    __tablename__ = 'room'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    turn_time = db.Column(db.Integer, nullable=False, default=60)
    # Ordered list of team ids, kept alongside the relationship for display order
    team_ids = db.Column(db.JSON, nullable=False, default=list)
    teams = db.relationship('Team', back_populates='room', cascade='all, delete')
    messages = db.relationship('Message', back_populates='room', cascade='all, delete',
                               order_by='Message.id')
    rounds = db.relationship('Round', back_populates='room', cascade='all, delete')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'turn_time': self.turn_time,
            'team_ids': list(self.team_ids or []),
        }


class Team(db.Model):
    __tablename__ = 'team'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=False, index=True)
    name = db.Column(db.String(64), nullable=False)
    # Ordered list of user ids; the order drives role rotation
    players = db.Column(db.JSON, nullable=False, default=list)
    describer = db.Column(db.Integer, nullable=True)
    team_leader = db.Column(db.Integer, nullable=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    room = db.relationship('Room', back_populates='teams')
    rounds = db.relationship('Round', back_populates='team', cascade='all, delete')

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'name': self.name,
            'players': list(self.players or []),
            'describer': self.describer,
            'team_leader': self.team_leader,
            'score': self.score or 0,
        }


class Round(db.Model):
    __tablename__ = 'round'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=False, index=True)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False, index=True)
    describer = db.Column(db.Integer, nullable=True)
    guessed = db.Column(db.Integer, nullable=False, default=0)
    skipped = db.Column(db.Integer, nullable=False, default=0)
    points = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    room = db.relationship('Room', back_populates='rounds')
    team = db.relationship('Team', back_populates='rounds')

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'team_id': self.team_id,
            'describer': self.describer,
            'guessed': self.guessed,
            'skipped': self.skipped,
            'points': self.points,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Message(db.Model):
    __tablename__ = 'message'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('room.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    room = db.relationship('Room', back_populates='messages')
    author = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'user_id': self.user_id,
            'username': self.author.username if self.author else None,
            'content': self.content,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
