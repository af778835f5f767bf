# Seed a demo employer, applicant and active job, then print bearer tokens for them.
import logging
from datetime import date, datetime, timedelta, timezone

from db import SessionLocal, Base, engine
from dependencies import create_jwt_token
from models import ApplicantProfile, EmployerProfile, Role, User
from models1.jobs import EmploymentType, JobPosting, JobStatus, WorkplaceType

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn.error")


def seed(db) -> dict:
    employer_user = db.query(User).filter(User.email == "employer@example.com").first()
    if employer_user:
        logger.info("Seed data already present, skipping inserts")
        applicant_user = db.query(User).filter(User.email == "applicant@example.com").one()
        return {"employer": employer_user, "applicant": applicant_user}

    employer_user = User(email="employer@example.com", username="acme-hr")
    applicant_user = User(email="applicant@example.com", username="jane")
    db.add_all([employer_user, applicant_user])
    db.flush()

    employer = EmployerProfile(
        user_id=employer_user.id,
        company_name="Acme Corp",
        company_size="51-200",
        industry="Software",
        company_description="We build things.",
        contact_person_name="Pat Doe",
        company_phone="+1-555-0100",
        is_profile_complete=True,
        completion_percentage=85,
    )
    db.add(employer)
    db.add(ApplicantProfile(
        user_id=applicant_user.id,
        full_name="Jane Applicant",
        phone="+1-555-0101",
        current_location="Remote",
        current_title="Backend Developer",
        professional_summary="Python and SQL.",
        years_of_experience=4,
        resume_url="http://r.example/cv.pdf",
        is_profile_complete=True,
        completion_percentage=85,
    ))
    db.flush()

    db.add(JobPosting(
        employer_profile_id=employer.id,
        job_title="Senior Python Engineer",
        employment_type=EmploymentType.FULL_TIME,
        workplace_type=WorkplaceType.REMOTE,
        location="Remote",
        experience_level="Senior",
        job_summary="Own the applications service.",
        screening_questions=["Are you authorized to work?", "Years with FastAPI?"],
        status=JobStatus.ACTIVE,
        application_deadline=date.today() + timedelta(days=30),
        posted_date=datetime.now(timezone.utc),
    ))
    db.commit()
    return {"employer": employer_user, "applicant": applicant_user}


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        users = seed(db)
        print("EMPLOYER token:", create_jwt_token(users["employer"].id, users["employer"].email, [Role.EMPLOYER], 24 * 60))
        print("APPLICANT token:", create_jwt_token(users["applicant"].id, users["applicant"].email, [Role.APPLICANT], 24 * 60))
    finally:
        db.close()
