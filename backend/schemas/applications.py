from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from models1.applications import ApplicationStatus


class ApplicationCreate(BaseModel):   # for POST
    job_posting_id: int
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None  # overrides the profile's resume
    screening_answers: List[str] = []
    model_config = ConfigDict(extra="ignore")


class ApplicationStatusUpdate(BaseModel):  # for PATCH
    status: ApplicationStatus
    notes: Optional[str] = None
    model_config = ConfigDict(extra="ignore")


class NoteIn(BaseModel):
    notes: str = Field(min_length=1)


class ApplicationOut(BaseModel):
    id: int
    job_posting_id: int
    applicant_profile_id: int
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    screening_answers: List[str] = []
    status: ApplicationStatus
    applied_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ActivityOut(BaseModel):
    id: int
    application_id: int
    performed_by_user_id: Optional[int] = None
    action: str
    old_status: Optional[ApplicationStatus] = None
    new_status: Optional[ApplicationStatus] = None
    notes: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ApplicationEnvelope(BaseModel):
    message: str
    application: ApplicationOut


class ApplicationDetail(BaseModel):
    application: ApplicationOut


class ApplicationList(BaseModel):
    applications: List[ApplicationOut]
    count: int


class ActivityList(BaseModel):
    activities: List[ActivityOut]
    count: int


class NoteEnvelope(BaseModel):
    message: str
    activity: ActivityOut


class HasApplied(BaseModel):
    hasApplied: bool
