"""baseline

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


relationship_type = sa.Enum('Friend', 'Block', 'Subscribe', name='relationship_type')


def upgrade() -> None:
    # --- users ---
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), unique=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # --- relationships ---
    op.create_table(
        'relationships',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('requestor_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('target_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('relationship_type', relationship_type, nullable=False),
        sa.Column('pair_low', sa.String(), nullable=False),
        sa.Column('pair_high', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_index(
        'ux_relationships_type_pair',
        'relationships',
        ['relationship_type', 'pair_low', 'pair_high'],
        unique=True,
    )
    op.create_index('ix_relationships_requestor_id', 'relationships', ['requestor_id'])
    op.create_index('ix_relationships_target_id', 'relationships', ['target_id'])


def downgrade() -> None:
    op.drop_index('ix_relationships_target_id', table_name='relationships')
    op.drop_index('ix_relationships_requestor_id', table_name='relationships')
    op.drop_index('ux_relationships_type_pair', table_name='relationships')
    op.drop_table('relationships')
    op.drop_table('users')
    relationship_type.drop(op.get_bind(), checkfirst=True)
