from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date, datetime

from models1.jobs import EmploymentType, JobStatus, WorkplaceType


class JobPostingIn(BaseModel):   # for POST
    job_title: str = Field(min_length=1, max_length=255)
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    workplace_type: WorkplaceType = WorkplaceType.ON_SITE
    location: Optional[str] = None
    experience_level: Optional[str] = Field(default=None, max_length=50)
    job_summary: Optional[str] = None
    screening_questions: List[str] = []
    application_deadline: Optional[date] = None
    status: JobStatus = JobStatus.DRAFT
    model_config = ConfigDict(extra="ignore")


class JobPostingUpdate(BaseModel):  # for PATCH, status has its own route
    job_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    employment_type: Optional[EmploymentType] = None
    workplace_type: Optional[WorkplaceType] = None
    location: Optional[str] = None
    experience_level: Optional[str] = Field(default=None, max_length=50)
    job_summary: Optional[str] = None
    screening_questions: Optional[List[str]] = None
    application_deadline: Optional[date] = None
    model_config = ConfigDict(extra="ignore")

    @field_validator("job_title", "employment_type", "workplace_type", "screening_questions")
    @classmethod
    def not_null(cls, v):
        # these columns are NOT NULL, omit them instead of sending null
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class JobStatusUpdate(BaseModel):  # for PATCH /status
    status: JobStatus


class JobPostingOut(JobPostingIn):
    id: int
    employer_profile_id: int
    view_count: int
    application_count: int
    posted_date: Optional[datetime] = None
    closed_date: Optional[datetime] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class JobEnvelope(BaseModel):
    message: Optional[str] = None
    job: JobPostingOut


class JobList(BaseModel):
    jobs: List[JobPostingOut]
    count: int
