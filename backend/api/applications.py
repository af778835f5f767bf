# api/applications.py
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from db import get_db
from dependencies import get_current_user, require_roles
from models import Role
from models1.applications import ApplicationStatus
from schemas.applications import (
    ActivityList, ApplicationCreate, ApplicationDetail, ApplicationEnvelope,
    ApplicationList, ApplicationStatusUpdate, HasApplied, NoteEnvelope, NoteIn,
)
from services.applications import ApplicationService, DEFAULT_LIMIT

router = APIRouter(prefix="/api/applications", tags=["applications"])

applicant_only = require_roles(Role.APPLICANT)
employer_only = require_roles(Role.EMPLOYER)


def get_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def _listing(rows) -> dict:
    return {"applications": rows, "count": len(rows)}


# ---------- APPLICANT ----------
@router.post("", response_model=ApplicationEnvelope, status_code=status.HTTP_201_CREATED)
def submit_application(
    app_in: ApplicationCreate,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(applicant_only),
):
    application = service.submit(
        user["user_id"],
        app_in.job_posting_id,
        cover_letter=app_in.cover_letter,
        resume_url=app_in.resume_url,
        screening_answers=app_in.screening_answers,
    )
    return {"message": "Application submitted successfully", "application": application}


@router.get("/my-applications", response_model=ApplicationList)
def my_applications(
    status: Optional[ApplicationStatus] = Query(default=None),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(applicant_only),
):
    return _listing(service.get_my_applications(user["user_id"], status=status, limit=limit, offset=offset))


@router.get("/my-applications/statistics")
def my_statistics(
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(applicant_only),
) -> Dict[str, int]:
    return service.get_applicant_statistics(user["user_id"])


@router.get("/check/{job_id}", response_model=HasApplied)
def check_application(
    job_id: int,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(applicant_only),
):
    return {"hasApplied": service.has_applied(user["user_id"], job_id)}


# ---------- EMPLOYER ----------
@router.get("/employer/all", response_model=ApplicationList)
def employer_applications(
    job_posting_id: Optional[int] = Query(default=None),
    status: Optional[ApplicationStatus] = Query(default=None),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(employer_only),
):
    rows = service.get_employer_applications(
        user["user_id"], job_posting_id=job_posting_id, status=status, limit=limit, offset=offset
    )
    return _listing(rows)


@router.get("/job/{job_id}", response_model=ApplicationList)
def job_applications(
    job_id: int,
    status: Optional[ApplicationStatus] = Query(default=None),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(employer_only),
):
    return _listing(service.get_job_applications(job_id, user["user_id"], status=status, limit=limit, offset=offset))


# ---------- SHARED (ownership checked in the service) ----------
@router.get("/{application_id}", response_model=ApplicationDetail)
def get_application(
    application_id: int,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(get_current_user),
):
    return {"application": service.get_application(application_id, user["user_id"])}


@router.get("/{application_id}/activities", response_model=ActivityList)
def get_activities(
    application_id: int,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(get_current_user),
):
    activities = service.get_activities(application_id, user["user_id"])
    return {"activities": activities, "count": len(activities)}


@router.patch("/{application_id}/status", response_model=ApplicationEnvelope)
def update_status(
    application_id: int,
    body: ApplicationStatusUpdate,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(employer_only),
):
    application = service.update_status(application_id, user["user_id"], body.status, notes=body.notes)
    return {"message": "Application status updated successfully", "application": application}


@router.post("/{application_id}/notes", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
def add_note(
    application_id: int,
    body: NoteIn,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(employer_only),
):
    activity = service.add_note(application_id, user["user_id"], body.notes)
    return {"message": "Note added successfully", "activity": activity}


@router.delete("/{application_id}", response_model=ApplicationEnvelope)
def withdraw_application(
    application_id: int,
    service: ApplicationService = Depends(get_service),
    user: dict = Depends(applicant_only),
):
    application = service.withdraw(application_id, user["user_id"])
    return {"message": "Application withdrawn successfully", "application": application}
