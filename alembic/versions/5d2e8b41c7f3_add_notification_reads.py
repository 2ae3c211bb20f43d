"""Add per-user read state for role-wide notifications

Revision ID: 5d2e8b41c7f3
Revises: 3a7c1e90b2d4
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '5d2e8b41c7f3'
down_revision = '3a7c1e90b2d4'
branch_labels = None
depends_on = None

GUID = sa.String(36).with_variant(postgresql.UUID(as_uuid=False), "postgresql")


def upgrade():
    op.create_table(
        'notification_reads',
        sa.Column('notification_id', GUID, nullable=False),
        sa.Column('user_id', GUID, nullable=False),
        sa.Column('read_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.ForeignKeyConstraint(['notification_id'], ['notifications.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('notification_id', 'user_id')
    )


def downgrade():
    op.drop_table('notification_reads')
