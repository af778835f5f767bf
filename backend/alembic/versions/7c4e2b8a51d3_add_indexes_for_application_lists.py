"""add indexes for application list queries

Revision ID: 7c4e2b8a51d3
Revises: 3a1f0c2d9b10
Create Date: 2026-10-19 09:40:02.118734

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c4e2b8a51d3'
down_revision: Union[str, None] = '3a1f0c2d9b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    bind = op.get_bind()
    dialect = bind.dialect.name

    if dialect == "postgresql":
        # Ordered indexes match ORDER BY applied_at DESC in every list query
        op.execute("""
            CREATE INDEX IF NOT EXISTS ix_job_applications_job_status_applied_at
            ON job_applications (job_posting_id, status, applied_at DESC);
        """)
        op.execute("""
            CREATE INDEX IF NOT EXISTS ix_job_applications_applicant_applied_at
            ON job_applications (applicant_profile_id, applied_at DESC);
        """)
    else:
        # Cross-DB safe (SQLite/MySQL/etc.)
        op.create_index(
            "ix_job_applications_job_status_applied_at",
            "job_applications",
            ["job_posting_id", "status", "applied_at"],
            unique=False,
        )
        op.create_index(
            "ix_job_applications_applicant_applied_at",
            "job_applications",
            ["applicant_profile_id", "applied_at"],
            unique=False,
        )


def downgrade():
    op.drop_index("ix_job_applications_applicant_applied_at", table_name="job_applications")
    op.drop_index("ix_job_applications_job_status_applied_at", table_name="job_applications")
