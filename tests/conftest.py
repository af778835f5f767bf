"""
Shared fixtures: in-memory SQLite schema, sessions, an API client and record factories.
"""

import os
import tempfile
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_FOLDER", tempfile.mkdtemp(prefix="jobboard-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base, get_db, make_engine
from dependencies import create_jwt_token
from main import app
from models import ApplicantProfile, EmployerProfile, Role, User
from models1.jobs import JobPosting, JobStatus
from services.applications import ApplicationService

TODAY = date(2026, 10, 19)


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifications():
    """Captured (event, recipient, subject, body) tuples."""
    return []


@pytest.fixture
def service(db, notifications):
    def notify(event, recipient, subject, body):
        notifications.append((event, recipient, subject, body))
    return ApplicationService(db, notify=notify, today=lambda: TODAY)


@pytest.fixture
def client(session_factory, notifications):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class Factory:
    """Builds committed rows for tests."""

    def __init__(self, db):
        self.db = db
        self._n = 0

    def user(self, email=None) -> User:
        self._n += 1
        user = User(email=email or f"user{self._n}@example.com", username=f"user{self._n}")
        self.db.add(user)
        self.db.commit()
        return user

    def applicant(self, user=None, complete=True, resume_url="http://r.example/cv.pdf") -> ApplicantProfile:
        user = user or self.user()
        profile = ApplicantProfile(
            user_id=user.id,
            full_name=f"Applicant {user.id}",
            resume_url=resume_url,
            is_profile_complete=complete,
        )
        self.db.add(profile)
        self.db.commit()
        return profile

    def employer(self, user=None, complete=True) -> EmployerProfile:
        user = user or self.user()
        profile = EmployerProfile(user_id=user.id, company_name=f"Company {user.id}", is_profile_complete=complete)
        self.db.add(profile)
        self.db.commit()
        return profile

    def job(self, employer=None, status=JobStatus.ACTIVE, deadline=None, title="Backend Engineer", **fields) -> JobPosting:
        employer = employer or self.employer()
        job = JobPosting(
            employer_profile_id=employer.id,
            job_title=title,
            status=status,
            application_deadline=deadline,
            **fields,
        )
        self.db.add(job)
        self.db.commit()
        return job


@pytest.fixture
def factory(db):
    return Factory(db)


def auth_headers(user_id, email, *roles):
    token = create_jwt_token(user_id, email, roles or [Role.APPLICANT])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    """headers_for(profile_or_user, Role.X, ...) -> Authorization header dict."""
    def build(owner, *roles):
        user = owner.user if hasattr(owner, "user_id") else owner
        return auth_headers(user.id, user.email, *roles)
    return build
