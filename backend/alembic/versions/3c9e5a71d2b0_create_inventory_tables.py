"""create inventory tables

Revision ID: 3c9e5a71d2b0
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3c9e5a71d2b0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'operating_systems',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('version', sa.String(100), nullable=False),
        sa.Column('end_of_support', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'version'),
    )
    op.create_index(op.f('ix_operating_systems_name'), 'operating_systems', ['name'], unique=False)
    op.create_index(op.f('ix_operating_systems_end_of_support'), 'operating_systems', ['end_of_support'], unique=False)

    op.create_table(
        'servers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('os_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['os_id'], ['operating_systems.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_servers_name'), 'servers', ['name'], unique=True)
    op.create_index(op.f('ix_servers_os_id'), 'servers', ['os_id'], unique=False)

    op.create_table(
        'server_change_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('server_id', sa.Integer(), nullable=True),
        sa.Column('server_name', sa.String(255), nullable=False),
        sa.Column('change_type', sa.String(20), nullable=False),
        sa.Column('old_os_id', sa.Integer(), nullable=True),
        sa.Column('new_os_id', sa.Integer(), nullable=True),
        sa.Column('old_os_name', sa.String(100), nullable=True),
        sa.Column('old_os_version', sa.String(100), nullable=True),
        sa.Column('new_os_name', sa.String(100), nullable=True),
        sa.Column('new_os_version', sa.String(100), nullable=True),
        sa.Column('changed_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['server_id'], ['servers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_server_change_history_server_id'), 'server_change_history', ['server_id'], unique=False)
    op.create_index(op.f('ix_server_change_history_change_type'), 'server_change_history', ['change_type'], unique=False)
    op.create_index(op.f('ix_server_change_history_changed_at'), 'server_change_history', ['changed_at'], unique=False)


def downgrade() -> None:
    op.drop_table('server_change_history')
    op.drop_table('servers')
    op.drop_table('operating_systems')
