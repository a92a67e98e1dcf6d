"""Initial schema for the redpacket SQL backend

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

from redpacket.sql.models import GUID


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'redpacket_packets',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('creator_id', sa.String(255), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('packet_data', sa.LargeBinary(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_redpacket_packets_creator_id', 'redpacket_packets', ['creator_id'])


def downgrade() -> None:
    op.drop_index('ix_redpacket_packets_creator_id', table_name='redpacket_packets')
    op.drop_table('redpacket_packets')
