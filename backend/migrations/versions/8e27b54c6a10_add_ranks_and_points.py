"""add rank thresholds, weekly points and session stat overrides

Revision ID: 8e27b54c6a10
Revises: 3c1f0a9d2e41
Create Date: 2025-07-14 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e27b54c6a10'
down_revision: Union[str, None] = '3c1f0a9d2e41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'rank_thresholds',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('rank_name', sa.String(length=64), nullable=False),
        sa.Column('missions_required', sa.Integer(), nullable=False),
        sa.Column('qualified_days_required', sa.Integer(), nullable=False),
        sa.Column('rank_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'camper_weekly_points',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('camper_id', sa.String(length=64), nullable=False),
        sa.Column('session_number', sa.Integer(), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('missions_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['camper_id'], ['campers.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('camper_id', 'session_number', 'week_number', name='uq_weekly_points_camper_week')
    )
    op.create_table(
        'camper_session_stats',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('camper_id', sa.String(length=64), nullable=False),
        sa.Column('session_id', sa.String(length=36), nullable=True),
        sa.Column('total_missions', sa.Integer(), nullable=True),
        sa.Column('total_qualified_days', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['camper_id'], ['campers.id']),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('camper_id', 'session_id', name='uq_session_stats_camper_session')
    )


def downgrade() -> None:
    op.drop_table('camper_session_stats')
    op.drop_table('camper_weekly_points')
    op.drop_table('rank_thresholds')
