"""initial physiotrack schema

Revision ID: 4b1d0e7a9c21
Revises:
Create Date: 2026-10-17 10:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# enum types are declared once so downgrade can drop them explicitly
user_role = sa.Enum('user', 'clinician', 'admin', name='user_role')
body_part = sa.Enum('neck', 'shoulder', 'arm', 'elbow', 'wrist', 'back', 'lower_back',
                    'hip', 'knee', 'ankle', 'general', name='body_part')
mood = sa.Enum('good', 'neutral', 'bad', name='mood')
user_category = sa.Enum('athlete', 'post_surgery', 'elderly', 'general', name='user_category')
age_group = sa.Enum('young', 'middle', 'mature', 'senior', name='age_group')
activity_level = sa.Enum('sedentary', 'light', 'moderate', 'high', 'athlete', name='activity_level')
reminder_type = sa.Enum('exercise', 'pain_log', 'custom', name='reminder_type')


# revision identifiers, used by Alembic.
revision: str = '4b1d0e7a9c21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _now():
    return sa.text('CURRENT_TIMESTAMP')


def upgrade() -> None:
    # 1) users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('role', user_role, nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
        sa.Column('total_sessions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('daily_session_target', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('daily_point_target', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('voice_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('announce_start', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('announce_complete', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2) completed sessions and their exercises
    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('uid', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('template_name', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('points_earned', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_sessions_uid', 'sessions', ['uid'], unique=True)
    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])

    op.create_table(
        'session_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_session_exercises_session_id', 'session_exercises', ['session_id'])

    # 3) templates
    op.create_table(
        'session_templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('estimated_duration', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('is_ai_generated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
    )
    op.create_index('ix_session_templates_user_id', 'session_templates', ['user_id'])

    op.create_table(
        'template_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('session_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False, server_default=''),
    )
    op.create_index('ix_template_exercises_template_id', 'template_exercises', ['template_id'])

    # 4) pain diary
    op.create_table(
        'pain_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_uid', sa.String(length=36), nullable=True),
        sa.Column('pain_level', sa.Integer(), nullable=False),
        sa.Column('body_part', body_part, nullable=False),
        sa.Column('mood', mood, nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
    )
    op.create_index('ix_pain_entries_user_id', 'pain_entries', ['user_id'])

    # 5) badges
    op.create_table(
        'earned_badges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('badge_id', sa.String(length=64), nullable=False),
        sa.Column('unlocked_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
        sa.UniqueConstraint('user_id', 'badge_id', name='uq_earned_badge'),
    )
    op.create_index('ix_earned_badges_user_id', 'earned_badges', ['user_id'])

    # 6) profile and recommendations
    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category', user_category, nullable=False),
        sa.Column('age_group', age_group, nullable=False),
        sa.Column('activity_level', activity_level, nullable=False),
        sa.Column('primary_complaint', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('goal', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('limitations', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
    )
    op.create_index('ix_user_profiles_user_id', 'user_profiles', ['user_id'], unique=True)

    op.create_table(
        'ai_recommendations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('exercises', sa.JSON(), nullable=False),
        sa.Column('estimated_duration', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('special_notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('accepted_template_id', sa.Integer(), nullable=True),
        sa.Column('is_accepted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('generated_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
    )
    op.create_index('ix_ai_recommendations_user_id', 'ai_recommendations', ['user_id'])

    # 7) reminders
    op.create_table(
        'reminders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=120), nullable=False),
        sa.Column('message', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('days_of_week', sa.JSON(), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('reminder_type', reminder_type, nullable=False, server_default='exercise'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=_now(), nullable=False),
    )
    op.create_index('ix_reminders_user_id', 'reminders', ['user_id'])


def downgrade() -> None:
    # drop child tables first
    op.drop_table('reminders')
    op.drop_table('ai_recommendations')
    op.drop_table('user_profiles')
    op.drop_table('earned_badges')
    op.drop_table('pain_entries')
    op.drop_table('template_exercises')
    op.drop_table('session_templates')
    op.drop_table('session_exercises')
    op.drop_table('sessions')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (reminder_type, activity_level, age_group, user_category, mood, body_part, user_role):
        enum_type.drop(bind, checkfirst=True)
