"""create_quiz_tables

Revision ID: 3c1f9a7e2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a7e2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('quizzes',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('total_marks', sa.Float(), nullable=False),
        sa.Column('questions_json', sa.Text(), nullable=False),
        sa.Column('attempt_count', sa.Integer(), nullable=False),
        sa.Column('average_score', sa.Float(), nullable=False),
        sa.Column('average_time_spent', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_quizzes_id', 'quizzes', ['id'])

    op.create_table('reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('quiz_name', sa.String(255), nullable=False),
        sa.Column('score', sa.Float(), nullable=False),
        sa.Column('total', sa.Float(), nullable=False),
        sa.Column('questions_json', sa.Text(), nullable=False),
        sa.Column('auto_submitted', sa.Boolean(), nullable=False),
        sa.Column('reason', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_reports_id', 'reports', ['id'])
    op.create_index('ix_reports_username', 'reports', ['username'])

    op.create_table('review_schedules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('quiz_id', sa.String(64), nullable=False),
        sa.Column('question_index', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.String(64), nullable=True),
        sa.Column('easiness_factor', sa.Float(), nullable=False),
        sa.Column('repetitions', sa.Integer(), nullable=False),
        sa.Column('interval', sa.Integer(), nullable=False),
        sa.Column('next_review_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_quality', sa.Integer(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username', 'quiz_id', 'question_index', name='uq_review_question')
    )
    op.create_index('ix_review_schedules_id', 'review_schedules', ['id'])
    op.create_index('ix_review_schedules_username', 'review_schedules', ['username'])
    op.create_index('ix_review_schedules_quiz_id', 'review_schedules', ['quiz_id'])

    op.create_table('daily_activity',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('activity_date', sa.Date(), nullable=False),
        sa.Column('time_spent_seconds', sa.Integer(), nullable=False),
        sa.Column('quiz_count', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username', 'activity_date', name='uq_activity_day')
    )
    op.create_index('ix_daily_activity_id', 'daily_activity', ['id'])
    op.create_index('ix_daily_activity_username', 'daily_activity', ['username'])

    op.create_table('user_preferences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('quizzes_taken', sa.Integer(), nullable=False),
        sa.Column('total_score', sa.Float(), nullable=False),
        sa.Column('total_questions', sa.Integer(), nullable=False),
        sa.Column('total_time_spent', sa.Float(), nullable=False),
        sa.Column('last_difficulty', sa.String(20), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username', 'category', name='uq_preference_category')
    )
    op.create_index('ix_user_preferences_id', 'user_preferences', ['id'])
    op.create_index('ix_user_preferences_username', 'user_preferences', ['username'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_user_preferences_username', table_name='user_preferences')
    op.drop_index('ix_user_preferences_id', table_name='user_preferences')
    op.drop_table('user_preferences')
    op.drop_index('ix_daily_activity_username', table_name='daily_activity')
    op.drop_index('ix_daily_activity_id', table_name='daily_activity')
    op.drop_table('daily_activity')
    op.drop_index('ix_review_schedules_quiz_id', table_name='review_schedules')
    op.drop_index('ix_review_schedules_username', table_name='review_schedules')
    op.drop_index('ix_review_schedules_id', table_name='review_schedules')
    op.drop_table('review_schedules')
    op.drop_index('ix_reports_username', table_name='reports')
    op.drop_index('ix_reports_id', table_name='reports')
    op.drop_table('reports')
    op.drop_index('ix_quizzes_id', table_name='quizzes')
    op.drop_table('quizzes')
