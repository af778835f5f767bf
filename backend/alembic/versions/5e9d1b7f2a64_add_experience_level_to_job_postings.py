"""add experience_level to job_postings

Revision ID: 5e9d1b7f2a64
Revises: 7c4e2b8a51d3
Create Date: 2026-10-19 15:12:47.503921

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e9d1b7f2a64'
down_revision: Union[str, None] = '7c4e2b8a51d3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.add_column('job_postings', sa.Column('experience_level', sa.String(length=50), nullable=True))


def downgrade():
    with op.batch_alter_table('job_postings') as batch_op:
        batch_op.drop_column('experience_level')
