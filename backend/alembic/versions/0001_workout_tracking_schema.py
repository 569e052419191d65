"""workout tracking schema: users, workouts, exercises, sessions, session exercises, sets

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    # 1) users
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2) workouts + exercises
    op.create_table(
        'workouts',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False, server_default='strength'),
        *_timestamps(),
    )
    op.create_table(
        'exercises',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(8, 2), nullable=False, server_default='0'),
        *_timestamps(),
    )

    # 3) sessions; workout link survives workout deletion as NULL
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workouts.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('workout_name', sa.String(length=255), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), index=True),
        *_timestamps(),
    )
    op.create_index(
        'uq_workout_sessions_active_user', 'workout_sessions', ['user_id'], unique=True,
        postgresql_where=sa.text('is_active'), sqlite_where=sa.text('is_active'),
    )

    # 4) session exercises (snapshot of the planned exercise)
    op.create_table(
        'session_exercises',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('session_id', sa.String(length=36), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.String(length=36), sa.ForeignKey('exercises.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('exercise_name', sa.String(length=255), nullable=False),
        sa.Column('planned_sets', sa.Integer(), nullable=False),
        sa.Column('planned_reps', sa.Integer(), nullable=False),
        sa.Column('planned_weight', sa.Numeric(8, 2), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )

    # 5) exercise sets
    op.create_table(
        'exercise_sets',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('session_exercise_id', sa.String(length=36), sa.ForeignKey('session_exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(8, 2), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('exercise_sets')
    op.drop_table('session_exercises')
    op.drop_index('uq_workout_sessions_active_user', table_name='workout_sessions')
    op.drop_table('workout_sessions')
    op.drop_table('exercises')
    op.drop_table('workouts')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
