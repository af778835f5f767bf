# profiles.py (schemas)
from pydantic import BaseModel, ConfigDict
from datetime import date
from decimal import Decimal
from typing import Optional


class ApplicantProfileUpsert(BaseModel):
    # basic
    full_name: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    current_location: Optional[str] = None

    # professional
    current_title: Optional[str] = None
    professional_summary: Optional[str] = None
    years_of_experience: Optional[int] = None
    experience_level: Optional[str] = None
    expected_salary_min: Optional[Decimal] = None
    resume_url: Optional[str] = None
    model_config = ConfigDict(extra="ignore")


class ApplicantProfileOut(ApplicantProfileUpsert):
    id: int
    user_id: int
    is_profile_complete: bool
    completion_percentage: int
    model_config = ConfigDict(from_attributes=True)


class EmployerProfileUpsert(BaseModel):
    company_name: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = None
    company_logo_url: Optional[str] = None
    contact_person_name: Optional[str] = None
    company_phone: Optional[str] = None
    model_config = ConfigDict(extra="ignore")


class EmployerProfileOut(EmployerProfileUpsert):
    id: int
    user_id: int
    is_verified: bool
    is_profile_complete: bool
    completion_percentage: int
    model_config = ConfigDict(from_attributes=True)
