# models.py
import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, Boolean, ForeignKey, Numeric, Date, Text, func
)
from sqlalchemy.orm import relationship
from db import Base


class Role(str, enum.Enum):
    APPLICANT = "APPLICANT"
    EMPLOYER = "EMPLOYER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    applicant_profile = relationship("ApplicantProfile", back_populates="user", uselist=False)
    employer_profile = relationship("EmployerProfile", back_populates="user", uselist=False)


class ApplicantProfile(Base):
    __tablename__ = "applicant_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)

    # Basic
    full_name = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    current_location = Column(String(255), nullable=True)

    # Professional
    current_title = Column(String(255), nullable=True)
    professional_summary = Column(Text, nullable=True)
    years_of_experience = Column(Integer, nullable=True)
    experience_level = Column(String(20), nullable=True)
    expected_salary_min = Column(Numeric(10, 2), nullable=True)
    resume_url = Column(String, nullable=True)

    is_profile_complete = Column(Boolean, default=False, nullable=False)
    completion_percentage = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="applicant_profile")
    applications = relationship(
        "JobApplication",
        back_populates="applicant_profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EmployerProfile(Base):
    __tablename__ = "employer_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)

    company_name = Column(String(255), nullable=True)
    company_size = Column(String(50), nullable=True)
    industry = Column(String(100), nullable=True)
    company_website = Column(String, nullable=True)
    company_description = Column(Text, nullable=True)
    company_logo_url = Column(String, nullable=True)
    contact_person_name = Column(String(255), nullable=True)
    company_phone = Column(String(20), nullable=True)

    is_verified = Column(Boolean, default=False, nullable=False)
    is_profile_complete = Column(Boolean, default=False, nullable=False)
    completion_percentage = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="employer_profile")
    job_postings = relationship(
        "JobPosting",
        back_populates="employer_profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# Ensure the job/application tables register on Base alongside the profiles.
from models1 import jobs, applications  # noqa: E402,F401
