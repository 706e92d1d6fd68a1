"""create user, room, team, round and message tables

Revision ID: 5c2a9e1d7b40
Revises:
Create Date: 2026-09-14 10:20:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e1d7b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'room',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('turn_time', sa.Integer(), nullable=False),
        sa.Column('team_ids', sa.JSON(), nullable=False),
    )
    op.create_index('ix_room_name', 'room', ['name'], unique=True)

    op.create_table(
        'team',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('room.id'), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('players', sa.JSON(), nullable=False),
        sa.Column('describer', sa.Integer(), nullable=True),
        sa.Column('team_leader', sa.Integer(), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_team_room_id', 'team', ['room_id'])

    op.create_table(
        'round',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('room.id'), nullable=False),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('team.id'), nullable=False),
        sa.Column('describer', sa.Integer(), nullable=True),
        sa.Column('guessed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('skipped', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_round_room_id', 'round', ['room_id'])
    op.create_index('ix_round_team_id', 'round', ['team_id'])

    op.create_table(
        'message',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('room_id', sa.Integer(), sa.ForeignKey('room.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_message_room_id', 'message', ['room_id'])


def downgrade():
    op.drop_index('ix_message_room_id', table_name='message')
    op.drop_table('message')
    op.drop_index('ix_round_team_id', table_name='round')
    op.drop_index('ix_round_room_id', table_name='round')
    op.drop_table('round')
    op.drop_index('ix_team_room_id', table_name='team')
    op.drop_table('team')
    op.drop_index('ix_room_name', table_name='room')
    op.drop_table('room')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
