from typing import Optional

from flask import current_app
from sqlalchemy import func

from alias_game.models import Round


def round_points(guessed: int, skipped: int) -> int:
    """+1 per guessed word, -1 per skipped word."""
    return guessed - skipped


class ScoreService:
    def __init__(self, session, rooms, teams):
        self.session = session
        self.rooms = rooms
        self.teams = teams

    def record_round(self, room_id: int, team_id: int, guessed: int, skipped: int) -> Round:
        team = self.teams.find_in_room(room_id, team_id)
        entry = Round(
            room_id=team.room_id,
            team_id=team.id,
            describer=team.describer,
            guessed=guessed,
            skipped=skipped,
            points=round_points(guessed, skipped),
        )
        self.session.add(entry)
        self.session.commit()
        current_app.logger.info(
            f"[round] room={room_id} team={team_id} guessed={guessed} skipped={skipped} points={entry.points}"
        )
        return entry

    def calculate_scores(self, room_id: int) -> dict:
        """Recompute every team score of the room from its rounds."""
        room = self.rooms.find_by_id(room_id)
        totals = dict(
            self.session.query(Round.team_id, func.coalesce(func.sum(Round.points), 0))
            .filter(Round.room_id == room.id)
            .group_by(Round.team_id)
            .all()
        )
        teams = self.teams.teams_of(room)
        for team in teams:
            team.score = int(totals.get(team.id, 0))
        self.session.commit()

        current_app.logger.info(f"[scores] room={room.id} " + ' '.join(f"{t.id}={t.score}" for t in teams))
        return {
            'room_id': room.id,
            'teams': [{'id': t.id, 'name': t.name, 'score': t.score} for t in teams],
            'leader_team_id': _leader(teams),
        }


def _leader(teams) -> Optional[int]:
    if not teams:
        return None
    best = max(t.score for t in teams)
    top = [t for t in teams if t.score == best]
    if len(top) > 1:
        return None
    return top[0].id
