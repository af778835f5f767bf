# services/applications.py
"""Application lifecycle: who may submit, move, annotate, withdraw and read an application.

Every mutation runs in one transaction together with its audit row and, for
submit/withdraw, the job's application counter. Precondition failures raise
the errors in errors.py before anything is written.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import ConflictError, ForbiddenError, InvalidStateError, NotFoundError
from models import ApplicantProfile, EmployerProfile
from models1.applications import (
    ApplicationActivity, ApplicationStatus, JobApplication, TERMINAL_STATUSES, UNIQUE_APPLICATION_CONSTRAINT,
)
from models1.jobs import JobPosting, JobStatus
from notifications import send_notification

logger = logging.getLogger("uvicorn.error")

DEFAULT_LIMIT = 20

ACTION_SUBMITTED = "application_submitted"
ACTION_STATUS_CHANGED = "status_changed"
ACTION_NOTE_ADDED = "note_added"
ACTION_WITHDRAWN = "application_withdrawn"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _utctoday() -> date:
    return _utcnow().date()


def _is_duplicate_application(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    if UNIQUE_APPLICATION_CONSTRAINT in message:
        return True
    # SQLite reports the columns instead of the constraint name
    return "UNIQUE constraint failed: job_applications.job_posting_id, job_applications.applicant_profile_id" in message


class ApplicationService:
    def __init__(self, db: Session,
                 notify: Callable[..., None] = send_notification,
                 today: Callable[[], date] = _utctoday):
        self.db = db
        self.notify = notify
        self.today = today

    # ---------- helpers ----------
    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _applicant_profile(self, user_id: int) -> Optional[ApplicantProfile]:
        return self.db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user_id).one_or_none()

    def _require_applicant_profile(self, user_id: int) -> ApplicantProfile:
        profile = self._applicant_profile(user_id)
        if profile is None:
            raise NotFoundError("Applicant profile not found")
        return profile

    def _get_application(self, application_id: int) -> JobApplication:
        application = self.db.get(JobApplication, application_id)
        if application is None:
            raise NotFoundError("Application not found")
        return application

    @staticmethod
    def _employer_user_id(application: JobApplication) -> int:
        return application.job_posting.employer_profile.user_id

    @staticmethod
    def _applicant_user_id(application: JobApplication) -> int:
        return application.applicant_profile.user_id

    def _require_job_owner(self, application: JobApplication, user_id: int, message: str) -> None:
        if self._employer_user_id(application) != user_id:
            raise ForbiddenError(message)

    def _require_participant(self, application: JobApplication, user_id: int) -> None:
        if user_id not in (self._applicant_user_id(application), self._employer_user_id(application)):
            raise ForbiddenError("You do not have access to this application")

    def _page(self, q, limit: int, offset: int) -> List[JobApplication]:
        return (
            q.order_by(JobApplication.applied_at.desc(), JobApplication.id.desc())
             .offset(offset)
             .limit(limit)
             .all()
        )

    # ---------- submit ----------
    def submit(self, applicant_user_id: int, job_posting_id: int,
               cover_letter: Optional[str] = None,
               resume_url: Optional[str] = None,
               screening_answers: Optional[List[str]] = None) -> JobApplication:
        profile = self._require_applicant_profile(applicant_user_id)
        if not profile.is_profile_complete:
            raise ForbiddenError("Please complete your profile before applying to jobs")

        job = self.db.get(JobPosting, job_posting_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.status != JobStatus.ACTIVE:
            raise InvalidStateError("This job is no longer accepting applications")
        # deadline must still be in the future; the deadline day itself is closed
        if job.application_deadline is not None and job.application_deadline <= self.today():
            raise InvalidStateError("Application deadline has passed")

        if self._find_existing(job.id, profile.id) is not None:
            raise ConflictError("You have already applied to this job")
        if job.employer_profile.user_id == applicant_user_id:
            raise InvalidStateError("You cannot apply to your own job posting")

        application = JobApplication(
            job_posting_id=job.id,
            applicant_profile_id=profile.id,
            cover_letter=cover_letter,
            resume_url=resume_url or profile.resume_url,
            screening_answers=list(screening_answers or []),
            status=ApplicationStatus.SUBMITTED,
        )
        try:
            with self._transaction():
                self.db.add(application)
                # unique (job, applicant) constraint fires here if a concurrent submit won
                self.db.flush()
                self.db.add(ApplicationActivity(
                    application_id=application.id,
                    performed_by_user_id=applicant_user_id,
                    action=ACTION_SUBMITTED,
                    new_status=ApplicationStatus.SUBMITTED,
                    notes="Application submitted successfully",
                ))
                self.db.query(JobPosting).filter(JobPosting.id == job.id).update(
                    {JobPosting.application_count: JobPosting.application_count + 1},
                    synchronize_session=False,
                )
        except IntegrityError as e:
            if not _is_duplicate_application(e):
                logger.error(f"Application insert failed for job={job_posting_id} applicant={profile.id}: {e.orig}")
                raise
            logger.warning(f"Duplicate application rejected by constraint: job={job_posting_id} applicant={profile.id}")
            raise ConflictError("You have already applied to this job")

        self.db.refresh(application)
        logger.info(f"Application {application.id} submitted to job {job.id} by user {applicant_user_id}")
        employer = job.employer_profile.user
        self.notify(
            ACTION_SUBMITTED,
            employer.email if employer else None,
            f"New application for {job.job_title}",
            f"{profile.full_name or 'An applicant'} applied to {job.job_title}.",
        )
        return application

    def _find_existing(self, job_posting_id: int, applicant_profile_id: int) -> Optional[JobApplication]:
        return (
            self.db.query(JobApplication)
            .filter(JobApplication.job_posting_id == job_posting_id,
                    JobApplication.applicant_profile_id == applicant_profile_id)
            .first()
        )

    # ---------- employer actions ----------
    def update_status(self, application_id: int, employer_user_id: int,
                      new_status: ApplicationStatus, notes: Optional[str] = None) -> JobApplication:
        """Set any enumerated status; no ordering between statuses is enforced."""
        application = self._get_application(application_id)
        self._require_job_owner(application, employer_user_id,
                                "You can only update applications for your own jobs")

        new_status = ApplicationStatus(new_status)
        old_status = application.status
        with self._transaction():
            application.status = new_status
            application.updated_at = _utcnow()
            self.db.add(ApplicationActivity(
                application_id=application.id,
                performed_by_user_id=employer_user_id,
                action=ACTION_STATUS_CHANGED,
                old_status=old_status,
                new_status=new_status,
                notes=notes or f"Status changed from {old_status.value} to {new_status.value}",
            ))

        self.db.refresh(application)
        logger.info(f"Application {application.id} moved {old_status.value} -> {new_status.value} by user {employer_user_id}")
        applicant = application.applicant_profile.user
        self.notify(
            ACTION_STATUS_CHANGED,
            applicant.email if applicant else None,
            f"Your application for {application.job_posting.job_title} was updated",
            f"Status changed from {old_status.value} to {new_status.value}.",
        )
        return application

    def add_note(self, application_id: int, employer_user_id: int, notes: str) -> ApplicationActivity:
        application = self._get_application(application_id)
        self._require_job_owner(application, employer_user_id,
                                "You can only add notes to applications for your own jobs")

        activity = ApplicationActivity(
            application_id=application.id,
            performed_by_user_id=employer_user_id,
            action=ACTION_NOTE_ADDED,
            notes=notes,
        )
        with self._transaction():
            self.db.add(activity)
        self.db.refresh(activity)
        return activity

    # ---------- applicant actions ----------
    def withdraw(self, application_id: int, applicant_user_id: int) -> JobApplication:
        application = self._get_application(application_id)
        if self._applicant_user_id(application) != applicant_user_id:
            raise ForbiddenError("You can only withdraw your own applications")
        if application.status in TERMINAL_STATUSES:
            raise InvalidStateError(f"Cannot withdraw application with status: {application.status.value}")

        old_status = application.status
        job_id = application.job_posting_id
        with self._transaction():
            application.status = ApplicationStatus.WITHDRAWN
            application.updated_at = _utcnow()
            self.db.add(ApplicationActivity(
                application_id=application.id,
                performed_by_user_id=applicant_user_id,
                action=ACTION_WITHDRAWN,
                old_status=old_status,
                new_status=ApplicationStatus.WITHDRAWN,
                notes="Application withdrawn by applicant",
            ))
            decremented = (
                self.db.query(JobPosting)
                .filter(JobPosting.id == job_id, JobPosting.application_count > 0)
                .update({JobPosting.application_count: JobPosting.application_count - 1},
                        synchronize_session=False)
            )
            if not decremented:
                logger.warning(f"application_count for job {job_id} already 0, not decremented on withdraw of {application.id}")

        self.db.refresh(application)
        logger.info(f"Application {application.id} withdrawn by user {applicant_user_id}")
        employer = application.job_posting.employer_profile.user
        self.notify(
            ACTION_WITHDRAWN,
            employer.email if employer else None,
            f"Application withdrawn for {application.job_posting.job_title}",
            f"Application {application.id} was withdrawn by the applicant.",
        )
        return application

    # ---------- reads ----------
    def get_application(self, application_id: int, user_id: int) -> JobApplication:
        application = self._get_application(application_id)
        self._require_participant(application, user_id)
        return application

    def get_activities(self, application_id: int, user_id: int) -> List[ApplicationActivity]:
        application = self.get_application(application_id, user_id)
        return (
            self.db.query(ApplicationActivity)
            .filter(ApplicationActivity.application_id == application.id)
            .order_by(ApplicationActivity.created_at.desc(), ApplicationActivity.id.desc())
            .all()
        )

    def get_my_applications(self, applicant_user_id: int, status: Optional[ApplicationStatus] = None,
                            limit: int = DEFAULT_LIMIT, offset: int = 0) -> List[JobApplication]:
        profile = self._require_applicant_profile(applicant_user_id)
        q = self.db.query(JobApplication).filter(JobApplication.applicant_profile_id == profile.id)
        if status is not None:
            q = q.filter(JobApplication.status == ApplicationStatus(status))
        return self._page(q, limit, offset)

    def get_job_applications(self, job_id: int, employer_user_id: int,
                             status: Optional[ApplicationStatus] = None,
                             limit: int = DEFAULT_LIMIT, offset: int = 0) -> List[JobApplication]:
        job = self.db.get(JobPosting, job_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.employer_profile.user_id != employer_user_id:
            raise ForbiddenError("You can only view applications for your own jobs")

        q = self.db.query(JobApplication).filter(JobApplication.job_posting_id == job.id)
        if status is not None:
            q = q.filter(JobApplication.status == ApplicationStatus(status))
        return self._page(q, limit, offset)

    def get_employer_applications(self, employer_user_id: int, job_posting_id: Optional[int] = None,
                                  status: Optional[ApplicationStatus] = None,
                                  limit: int = DEFAULT_LIMIT, offset: int = 0) -> List[JobApplication]:
        employer = (
            self.db.query(EmployerProfile)
            .filter(EmployerProfile.user_id == employer_user_id)
            .one_or_none()
        )
        if employer is None:
            raise NotFoundError("Employer profile not found")

        # scoped to the employer's own postings even when a job id is passed
        q = (
            self.db.query(JobApplication)
            .join(JobPosting, JobApplication.job_posting_id == JobPosting.id)
            .filter(JobPosting.employer_profile_id == employer.id)
        )
        if job_posting_id is not None:
            q = q.filter(JobApplication.job_posting_id == job_posting_id)
        if status is not None:
            q = q.filter(JobApplication.status == ApplicationStatus(status))
        return self._page(q, limit, offset)

    def has_applied(self, applicant_user_id: int, job_id: int) -> bool:
        profile = self._applicant_profile(applicant_user_id)
        if profile is None:
            return False
        return self._find_existing(job_id, profile.id) is not None

    def get_applicant_statistics(self, applicant_user_id: int) -> Dict[str, int]:
        profile = self._require_applicant_profile(applicant_user_id)
        rows = (
            self.db.query(JobApplication.status, func.count())
            .filter(JobApplication.applicant_profile_id == profile.id)
            .group_by(JobApplication.status)
            .all()
        )
        by_status = {s: c for s, c in rows}
        stats = {"totalApplications": sum(by_status.values())}
        for s in ApplicationStatus:
            stats[s.value.lower()] = by_status.get(s, 0)
        return stats
