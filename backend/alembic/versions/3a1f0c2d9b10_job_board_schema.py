"""job board schema: users, profiles, job postings, applications, activities

Revision ID: 3a1f0c2d9b10
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3a1f0c2d9b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "job_status": ("DRAFT", "ACTIVE", "CLOSED", "CANCELLED"),
    "employment_type": ("FULL_TIME", "PART_TIME", "CONTRACT", "INTERNSHIP", "TEMPORARY"),
    "workplace_type": ("ON_SITE", "REMOTE", "HYBRID"),
    "application_status": (
        "SUBMITTED", "REVIEWED", "SHORTLISTED", "INTERVIEW_SCHEDULED",
        "INTERVIEWED", "OFFERED", "ACCEPTED", "REJECTED", "WITHDRAWN",
    ),
}


def _enum(name):
    # postgres types are created once up front; columns only reference them
    values = ENUMS[name]
    return sa.Enum(*values, name=name).with_variant(
        postgresql.ENUM(*values, name=name, create_type=False), "postgresql"
    )


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name, values in ENUMS.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'applicant_profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('current_location', sa.String(length=255), nullable=True),
        sa.Column('current_title', sa.String(length=255), nullable=True),
        sa.Column('professional_summary', sa.Text(), nullable=True),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('experience_level', sa.String(length=20), nullable=True),
        sa.Column('expected_salary_min', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('resume_url', sa.String(), nullable=True),
        sa.Column('is_profile_complete', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('completion_percentage', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_applicant_profiles_user_id'), 'applicant_profiles', ['user_id'], unique=True)

    op.create_table(
        'employer_profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('company_size', sa.String(length=50), nullable=True),
        sa.Column('industry', sa.String(length=100), nullable=True),
        sa.Column('company_website', sa.String(), nullable=True),
        sa.Column('company_description', sa.Text(), nullable=True),
        sa.Column('company_logo_url', sa.String(), nullable=True),
        sa.Column('contact_person_name', sa.String(length=255), nullable=True),
        sa.Column('company_phone', sa.String(length=20), nullable=True),
        sa.Column('is_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_profile_complete', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('completion_percentage', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_employer_profiles_user_id'), 'employer_profiles', ['user_id'], unique=True)

    op.create_table(
        'job_postings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employer_profile_id', sa.Integer(), nullable=False),
        sa.Column('job_title', sa.String(length=255), nullable=False),
        sa.Column('employment_type', _enum('employment_type'), nullable=False),
        sa.Column('workplace_type', _enum('workplace_type'), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('job_summary', sa.Text(), nullable=True),
        sa.Column('screening_questions', sa.JSON(), nullable=True),
        sa.Column('status', _enum('job_status'), server_default='DRAFT', nullable=False),
        sa.Column('application_deadline', sa.Date(), nullable=True),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('application_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('posted_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('closed_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['employer_profile_id'], ['employer_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('application_count >= 0', name='ck_job_postings_application_count_nonneg'),
    )
    op.create_index(op.f('ix_job_postings_employer_profile_id'), 'job_postings', ['employer_profile_id'], unique=False)

    op.create_table(
        'job_applications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('job_posting_id', sa.Integer(), nullable=False),
        sa.Column('applicant_profile_id', sa.Integer(), nullable=False),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('resume_url', sa.String(length=1024), nullable=True),
        sa.Column('screening_answers', sa.JSON(), nullable=False),
        sa.Column('status', _enum('application_status'), server_default='SUBMITTED', nullable=False),
        sa.Column('applied_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['job_posting_id'], ['job_postings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['applicant_profile_id'], ['applicant_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_posting_id', 'applicant_profile_id', name='uq_application_job_applicant'),
    )
    op.create_index(op.f('ix_job_applications_job_posting_id'), 'job_applications', ['job_posting_id'], unique=False)
    op.create_index(op.f('ix_job_applications_applicant_profile_id'), 'job_applications', ['applicant_profile_id'], unique=False)

    op.create_table(
        'application_activities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('application_id', sa.Integer(), nullable=False),
        sa.Column('performed_by_user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('old_status', _enum('application_status'), nullable=True),
        sa.Column('new_status', _enum('application_status'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['application_id'], ['job_applications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_application_activities_application_id'), 'application_activities', ['application_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_application_activities_application_id'), table_name='application_activities')
    op.drop_table('application_activities')
    op.drop_index(op.f('ix_job_applications_applicant_profile_id'), table_name='job_applications')
    op.drop_index(op.f('ix_job_applications_job_posting_id'), table_name='job_applications')
    op.drop_table('job_applications')
    op.drop_index(op.f('ix_job_postings_employer_profile_id'), table_name='job_postings')
    op.drop_table('job_postings')
    op.drop_index(op.f('ix_employer_profiles_user_id'), table_name='employer_profiles')
    op.drop_table('employer_profiles')
    op.drop_index(op.f('ix_applicant_profiles_user_id'), table_name='applicant_profiles')
    op.drop_table('applicant_profiles')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name in reversed(list(ENUMS)):
            postgresql.ENUM(name=name).drop(bind, checkfirst=True)
