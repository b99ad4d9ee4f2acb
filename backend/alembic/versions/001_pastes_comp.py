"""Create the pastes_comp table: one record-codec blob per paste.

Revision ID: 001_pastes_comp
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_pastes_comp'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'pastes_comp',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('data', sa.LargeBinary(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('pastes_comp')
