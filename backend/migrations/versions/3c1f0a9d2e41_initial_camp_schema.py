"""initial camp schema

Revision ID: 3c1f0a9d2e41
Revises:
Create Date: 2025-06-02 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d2e41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'bunks',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.String(length=128), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    for table in ('campers', 'staff'):
        op.create_table(
            table,
            sa.Column('id', sa.String(length=64), nullable=False),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('access_code', sa.String(length=16), nullable=False),
            sa.Column('bunk_id', sa.String(length=64), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['bunk_id'], ['bunks.id']),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(f'ix_{table}_name', table, ['name'])
        op.create_index(f'ix_{table}_access_code', table, ['access_code'], unique=True)

    op.create_table(
        'missions',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('icon', sa.String(length=16), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_mandatory', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'submissions',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('camper_id', sa.String(length=64), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('missions', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('edit_request_reason', sa.Text(), nullable=True),
        sa.Column('edit_requested_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_by', sa.String(length=128), nullable=True),
        sa.Column('rejected_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejected_by', sa.String(length=128), nullable=True),
        sa.Column('session_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['camper_id'], ['campers.id']),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('camper_id', 'date', name='uq_submissions_camper_date')
    )
    op.create_index('ix_submissions_date_status', 'submissions', ['date', 'status'])
    op.create_table(
        'working_missions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('camper_id', sa.String(length=64), nullable=False),
        sa.Column('missions', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['camper_id'], ['campers.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('camper_id')
    )
    op.create_table(
        'system_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('daily_required_missions', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('admin_password_hash', sa.String(length=256), nullable=False),
        sa.Column('timezone', sa.String(length=64), nullable=False, server_default='UTC'),
        sa.Column('daily_reset_hour', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('auto_approve_submissions', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('system_settings')
    op.drop_table('working_missions')
    op.drop_index('ix_submissions_date_status', table_name='submissions')
    op.drop_table('submissions')
    op.drop_table('sessions')
    op.drop_table('missions')
    for table in ('staff', 'campers'):
        op.drop_index(f'ix_{table}_access_code', table_name=table)
        op.drop_index(f'ix_{table}_name', table_name=table)
        op.drop_table(table)
    op.drop_table('bunks')
