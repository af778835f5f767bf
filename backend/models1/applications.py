from sqlalchemy import Column, Integer, Text, String, DateTime, Enum as SAEnum, func, UniqueConstraint, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from db import Base
import enum


class ApplicationStatus(str, enum.Enum):
    SUBMITTED = "SUBMITTED"
    REVIEWED = "REVIEWED"
    SHORTLISTED = "SHORTLISTED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    INTERVIEWED = "INTERVIEWED"
    OFFERED = "OFFERED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


TERMINAL_STATUSES = frozenset({
    ApplicationStatus.ACCEPTED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.WITHDRAWN,
})

UNIQUE_APPLICATION_CONSTRAINT = "uq_application_job_applicant"


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        # one application per applicant per job, enforced by the db so concurrent submits cannot both land
        UniqueConstraint("job_posting_id", "applicant_profile_id", name=UNIQUE_APPLICATION_CONSTRAINT),
        Index("ix_job_applications_job_status_applied_at", "job_posting_id", "status", "applied_at"),
        Index("ix_job_applications_applicant_applied_at", "applicant_profile_id", "applied_at"),
    )

    id = Column(Integer, primary_key=True)
    job_posting_id = Column(Integer, ForeignKey("job_postings.id", ondelete="CASCADE"), index=True, nullable=False)
    applicant_profile_id = Column(
        Integer, ForeignKey("applicant_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )

    cover_letter = Column(Text)
    resume_url = Column(String(1024))
    screening_answers = Column(JSON, default=list, nullable=False)
    status = Column(SAEnum(ApplicationStatus, name="application_status"), default=ApplicationStatus.SUBMITTED, nullable=False)

    applied_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    job_posting = relationship("JobPosting", back_populates="applications")
    applicant_profile = relationship("ApplicantProfile", back_populates="applications")
    activities = relationship(
        "ApplicationActivity",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ApplicationActivity(Base):
    """Append-only audit row; one per state-changing call on an application."""
    __tablename__ = "application_activities"

    id = Column(Integer, primary_key=True)
    application_id = Column(Integer, ForeignKey("job_applications.id", ondelete="CASCADE"), index=True, nullable=False)
    # null means the system did it
    performed_by_user_id = Column(Integer, nullable=True)

    # e.g. application_submitted, status_changed, note_added, application_withdrawn
    action = Column(String(50), nullable=False)
    old_status = Column(SAEnum(ApplicationStatus, name="application_status"), nullable=True)
    new_status = Column(SAEnum(ApplicationStatus, name="application_status"), nullable=True)
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("JobApplication", back_populates="activities")
