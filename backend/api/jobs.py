# api/jobs.py
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from db import get_db
from dependencies import require_roles
from models import EmployerProfile, Role
from models1.jobs import EmploymentType, JobPosting, JobStatus, WorkplaceType
from schemas.jobs import JobEnvelope, JobList, JobPostingIn, JobPostingUpdate, JobStatusUpdate

import logging

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

employer_only = require_roles(Role.EMPLOYER)


def _employer_profile(db: Session, user_id: int) -> EmployerProfile:
    profile = db.query(EmployerProfile).filter(EmployerProfile.user_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Employer profile not found")
    return profile


def _owned_job(db: Session, job_id: int, user_id: int, action: str) -> JobPosting:
    job = db.get(JobPosting, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.employer_profile.user_id != user_id:
        raise HTTPException(status_code=403, detail=f"You can only {action} your own jobs")
    return job


# ---------- LIST ACTIVE (public, supports /api/jobs and /api/jobs/) ----------
@router.get("", response_model=JobList)
@router.get("/", response_model=JobList)
def list_jobs(
    keyword: Optional[str] = Query(default=None, description="matches job title, case-insensitive"),
    location: Optional[str] = Query(default=None, description="substring of location, case-insensitive"),
    employment_type: Optional[EmploymentType] = Query(default=None),
    workplace_type: Optional[WorkplaceType] = Query(default=None),
    experience_level: Optional[str] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    q = db.query(JobPosting).filter(JobPosting.status == JobStatus.ACTIVE)
    if keyword:
        q = q.filter(JobPosting.job_title.ilike(f"%{keyword}%"))
    if location:
        q = q.filter(JobPosting.location.ilike(f"%{location}%"))
    if employment_type:
        q = q.filter(JobPosting.employment_type == employment_type)
    if workplace_type:
        q = q.filter(JobPosting.workplace_type == workplace_type)
    if experience_level:
        q = q.filter(func.lower(JobPosting.experience_level) == experience_level.lower())
    rows = (
        q.order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
         .offset(offset)
         .limit(limit)
         .all()
    )
    return {"jobs": rows, "count": len(rows)}


# ---------- CREATE ----------
@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
def create_job(
    job_in: JobPostingIn,
    db: Session = Depends(get_db),
    user: dict = Depends(employer_only),
):
    employer = _employer_profile(db, user["user_id"])
    if not employer.is_profile_complete:
        raise HTTPException(status_code=403, detail="Please complete your employer profile before posting jobs")

    data = job_in.model_dump()
    job = JobPosting(**data, employer_profile_id=employer.id)
    if job.status == JobStatus.ACTIVE:
        job.posted_date = datetime.now(timezone.utc)
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info(f"Job {job.id} created by employer {employer.id} as {job.status.value}")
    return {"message": "Job posted successfully", "job": job}


# ---------- MY JOBS (declared before /{job_id}) ----------
@router.get("/my-jobs", response_model=JobList)
def my_jobs(
    db: Session = Depends(get_db),
    user: dict = Depends(employer_only),
):
    employer = _employer_profile(db, user["user_id"])
    rows = (
        db.query(JobPosting)
        .filter(JobPosting.employer_profile_id == employer.id)
        .order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
        .all()
    )
    return {"jobs": rows, "count": len(rows)}


# ---------- GET ONE (public, counts a view) ----------
@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    updated = (
        db.query(JobPosting)
        .filter(JobPosting.id == job_id)
        .update({JobPosting.view_count: JobPosting.view_count + 1}, synchronize_session=False)
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Job not found")
    db.commit()
    return {"job": db.get(JobPosting, job_id)}


# ---------- UPDATE (partial) ----------
@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    job_in: JobPostingUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(employer_only),
):
    job = _owned_job(db, job_id, user["user_id"], "update")
    for k, v in job_in.model_dump(exclude_unset=True).items():
        setattr(job, k, v)
    db.commit()
    db.refresh(job)
    logger.info(f"Job {job.id} edited by user {user['user_id']}")
    return {"message": "Job updated successfully", "job": job}


# ---------- UPDATE STATUS ----------
@router.patch("/{job_id}/status", response_model=JobEnvelope)
def update_job_status(
    job_id: int,
    body: JobStatusUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(employer_only),
):
    job = _owned_job(db, job_id, user["user_id"], "update")
    now = datetime.now(timezone.utc)
    job.status = body.status
    # first activation / first close are stamped once
    if body.status == JobStatus.ACTIVE and job.posted_date is None:
        job.posted_date = now
    if body.status == JobStatus.CLOSED and job.closed_date is None:
        job.closed_date = now
    db.commit()
    db.refresh(job)
    return {"message": "Job status updated successfully", "job": job}


# ---------- DELETE ----------
@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(employer_only),
):
    job = _owned_job(db, job_id, user["user_id"], "delete")
    # applications and their activities go with it (ON DELETE CASCADE)
    db.delete(job)
    db.commit()
    logger.info(f"Job {job_id} deleted by user {user['user_id']}")
    return  # 204
