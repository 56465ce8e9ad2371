"""initial_door_sign_schema

Revision ID: 3f1c9a2d7e40
Revises:
Create Date: 2026-10-19 09:12:31.402117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    userrole_enum = sa.Enum('admin', 'regular', name='userrole')
    statuscolor_enum = sa.Enum(
        'blue', 'green', 'red', 'yellow', 'purple', 'orange', 'gray',
        name='statuscolor',
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('role', userrole_enum, nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('avatar_url', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('epaper_id', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('epaper_import_url', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('epaper_import_key', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('epaper_export_url', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('epaper_export_key', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('current_status', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('custom_status_text', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('last_updated', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_epaper_id'), 'users', ['epaper_id'], unique=False)

    op.create_table(
        'status_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('custom_status_text', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('changed_by', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('changed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_status_history_user_id'), 'status_history', ['user_id'], unique=False)
    op.create_index(op.f('ix_status_history_changed_at'), 'status_history', ['changed_at'], unique=False)

    op.create_table(
        'status_options',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('color', statuscolor_enum, nullable=False),
        sa.Column('sort_order', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_status_options_name'), 'status_options', ['name'], unique=True)

    op.create_table(
        'sync_status',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('synced_at', sa.DateTime(), nullable=False),
        sa.Column('success', sa.Boolean(), nullable=False),
        sa.Column('error_message', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('updated_count', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_sync_status_synced_at'), 'sync_status', ['synced_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_sync_status_synced_at'), table_name='sync_status')
    op.drop_table('sync_status')
    op.drop_index(op.f('ix_status_options_name'), table_name='status_options')
    op.drop_table('status_options')
    op.drop_index(op.f('ix_status_history_changed_at'), table_name='status_history')
    op.drop_index(op.f('ix_status_history_user_id'), table_name='status_history')
    op.drop_table('status_history')
    op.drop_index(op.f('ix_users_epaper_id'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')

    # Enum types (PostgreSQL)
    sa.Enum(name='statuscolor').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
