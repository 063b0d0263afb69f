"""Initial migration - ledger, trail runs and badges

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create activity_entries table
    op.create_table(
        'activity_entries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('steps', sa.Integer(), nullable=False),
        sa.Column('distance_m', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'day', name='uq_activity_entries_user_day'),
    )
    op.create_index('ix_activity_entries_user_id', 'activity_entries', ['user_id'])

    # Create trail_runs table
    op.create_table(
        'trail_runs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('trail_id', sa.String(64), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('goal_days', sa.Integer(), nullable=False),
        sa.Column('cumulative_distance_m', sa.Float(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'trail_id', name='uq_trail_runs_user_trail'),
    )
    op.create_index('ix_trail_runs_user_id', 'trail_runs', ['user_id'])

    # Create earned_badges table
    op.create_table(
        'earned_badges',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('badge_id', sa.String(64), nullable=False),
        sa.Column('period', sa.String(16), nullable=False),
        sa.Column('unlocked_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'badge_id', 'period', name='uq_earned_badges_user_badge_period'),
    )
    op.create_index('ix_earned_badges_user_id', 'earned_badges', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_earned_badges_user_id', table_name='earned_badges')
    op.drop_table('earned_badges')
    op.drop_index('ix_trail_runs_user_id', table_name='trail_runs')
    op.drop_table('trail_runs')
    op.drop_index('ix_activity_entries_user_id', table_name='activity_entries')
    op.drop_table('activity_entries')
