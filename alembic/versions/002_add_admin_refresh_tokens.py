"""add admin_refresh_tokens table (refresh token ledger)

Revision ID: 002
Revises: 001
Create Date: 2026-01-20 11:30:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    is_sqlite = bind.dialect.name == 'sqlite'

    timestamp_default = sa.text("(datetime('now'))") if is_sqlite else sa.text('now()')

    op.create_table(
        'admin_refresh_tokens',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('admin_id', sa.String(length=36), nullable=False),
        sa.Column('token', sa.String(length=1024), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['admin_id'], ['admins.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('token'),
    )
    # Primary lookup path: refresh and logout find rows by token value
    op.create_index('ix_admin_refresh_tokens_token', 'admin_refresh_tokens', ['token'], unique=True)
    op.create_index('ix_admin_refresh_tokens_admin_id', 'admin_refresh_tokens', ['admin_id'])


def downgrade() -> None:
    op.drop_index('ix_admin_refresh_tokens_admin_id', table_name='admin_refresh_tokens')
    op.drop_index('ix_admin_refresh_tokens_token', table_name='admin_refresh_tokens')
    op.drop_table('admin_refresh_tokens')
