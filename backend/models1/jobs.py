from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Enum as SAEnum, func, ForeignKey, JSON, CheckConstraint
from sqlalchemy.orm import relationship
from db import Base
import enum


class JobStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class EmploymentType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"
    TEMPORARY = "TEMPORARY"


class WorkplaceType(str, enum.Enum):
    ON_SITE = "ON_SITE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"


class JobPosting(Base):
    __tablename__ = "job_postings"
    __table_args__ = (
        CheckConstraint("application_count >= 0", name="ck_job_postings_application_count_nonneg"),
    )

    id = Column(Integer, primary_key=True)
    employer_profile_id = Column(
        Integer, ForeignKey("employer_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )

    job_title = Column(String(255), nullable=False)
    employment_type = Column(SAEnum(EmploymentType, name="employment_type"), default=EmploymentType.FULL_TIME, nullable=False)
    workplace_type = Column(SAEnum(WorkplaceType, name="workplace_type"), default=WorkplaceType.ON_SITE, nullable=False)
    location = Column(String(255))
    experience_level = Column(String(50))
    job_summary = Column(Text)
    screening_questions = Column(JSON, default=list)

    status = Column(SAEnum(JobStatus, name="job_status"), default=JobStatus.DRAFT, nullable=False)
    application_deadline = Column(Date, nullable=True)
    view_count = Column(Integer, default=0, nullable=False)
    # running total kept by ApplicationService on submit/withdraw
    application_count = Column(Integer, default=0, nullable=False)
    posted_date = Column(DateTime(timezone=True), nullable=True)
    closed_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    employer_profile = relationship("EmployerProfile", back_populates="job_postings")
    applications = relationship(
        "JobApplication",
        back_populates="job_posting",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
