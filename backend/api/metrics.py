# api/metrics.py
from typing import Dict, List, Tuple
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import func
from db import get_db
from dependencies import require_roles
from models import EmployerProfile, Role
from models1.jobs import JobPosting, JobStatus

router = APIRouter(prefix="/api/jobs", tags=["jobs-metrics"])


@router.get("/my-jobs/statistics")
def employer_statistics(
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(Role.EMPLOYER)),
) -> Dict[str, int]:
    employer = db.query(EmployerProfile).filter(EmployerProfile.user_id == user["user_id"]).first()
    if not employer:
        raise HTTPException(status_code=404, detail="Employer profile not found")

    # Totals by status
    rows: List[Tuple[JobStatus, int]] = (
        db.query(JobPosting.status, func.count())
        .filter(JobPosting.employer_profile_id == employer.id)
        .group_by(JobPosting.status)
        .all()
    )
    by_status = {s: c for s, c in rows}

    applications, views = (
        db.query(
            func.coalesce(func.sum(JobPosting.application_count), 0),
            func.coalesce(func.sum(JobPosting.view_count), 0),
        )
        .filter(JobPosting.employer_profile_id == employer.id)
        .one()
    )

    return {
        "totalJobs": sum(by_status.values()),
        "activeJobs": by_status.get(JobStatus.ACTIVE, 0),
        "draftJobs": by_status.get(JobStatus.DRAFT, 0),
        "closedJobs": by_status.get(JobStatus.CLOSED, 0),
        "totalApplications": int(applications),
        "totalViews": int(views),
    }
