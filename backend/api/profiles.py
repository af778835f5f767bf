# profiles.py (router)
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from sqlalchemy.orm import Session

from db import get_db
from dependencies import require_roles
from models import ApplicantProfile, EmployerProfile, Role, User

from schemas.profiles import (
    ApplicantProfileOut, ApplicantProfileUpsert, EmployerProfileOut, EmployerProfileUpsert,
)
import os, uuid
import logging

logger = logging.getLogger("uvicorn.error")
router = APIRouter(prefix="/api")

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
ALLOWED_EXT = {".pdf", ".doc", ".docx"}

REQUIRED_WEIGHT = 85
OPTIONAL_WEIGHT = 15

APPLICANT_REQUIRED = (
    "full_name", "phone", "current_location", "current_title",
    "professional_summary", "years_of_experience", "resume_url",
)
APPLICANT_OPTIONAL = ("date_of_birth", "experience_level", "expected_salary_min")

EMPLOYER_REQUIRED = (
    "company_name", "industry", "company_size", "company_description",
    "contact_person_name", "company_phone",
)
EMPLOYER_OPTIONAL = ("company_website", "company_logo_url")


def _filled(value) -> bool:
    return value is not None and value != ""


def refresh_completion(profile, required, optional) -> None:
    """Recompute completion_percentage; the profile is complete once every required field is set."""
    got_required = sum(1 for f in required if _filled(getattr(profile, f)))
    got_optional = sum(1 for f in optional if _filled(getattr(profile, f)))
    percentage = (got_required / len(required)) * REQUIRED_WEIGHT + (got_optional / len(optional)) * OPTIONAL_WEIGHT
    profile.completion_percentage = round(percentage)
    profile.is_profile_complete = got_required == len(required)


def _ensure_user(db: Session, current_user: dict) -> User:
    user = db.get(User, current_user["user_id"])
    if not user:
        user = User(id=current_user["user_id"], email=current_user["email"])
        db.add(user)
        db.flush()
    return user


def _commit(db: Session, what: str) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Error saving {what}")
        raise HTTPException(status_code=500, detail=f"Error saving {what}")


# ---------- APPLICANT ----------
@router.get("/applicant-profile", response_model=ApplicantProfileOut)
def get_applicant_profile(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_roles(Role.APPLICANT)),
):
    profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == current_user["user_id"]).first()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Applicant profile not found")
    return profile


@router.post("/applicant-profile", response_model=ApplicantProfileOut)
def upsert_applicant_profile(
    payload: ApplicantProfileUpsert,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_roles(Role.APPLICANT)),
):
    user = _ensure_user(db, current_user)
    profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user.id).first()
    if not profile:
        profile = ApplicantProfile(user_id=user.id)
        db.add(profile)

    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(profile, k, v)
    refresh_completion(profile, APPLICANT_REQUIRED, APPLICANT_OPTIONAL)

    _commit(db, "applicant profile")
    db.refresh(profile)
    return profile


@router.post("/applicant-profile/resume", response_model=ApplicantProfileOut)
async def upload_resume(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_roles(Role.APPLICANT)),
):
    profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == current_user["user_id"]).first()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Applicant profile not found")

    name, ext = os.path.splitext(file.filename or "")
    ext = ext.lower()
    if ext not in ALLOWED_EXT:
        raise HTTPException(status_code=400, detail="Unsupported file type")
    os.makedirs(UPLOAD_FOLDER, exist_ok=True)
    filename = f"{uuid.uuid4().hex}{ext}"
    path = os.path.join(UPLOAD_FOLDER, filename)

    with open(path, "wb") as f:
        f.write(await file.read())

    profile.resume_url = f"/uploads/{filename}"
    refresh_completion(profile, APPLICANT_REQUIRED, APPLICANT_OPTIONAL)
    _commit(db, "resume")
    db.refresh(profile)
    return profile


# ---------- EMPLOYER ----------
@router.get("/employer-profile", response_model=EmployerProfileOut)
def get_employer_profile(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_roles(Role.EMPLOYER)),
):
    profile = db.query(EmployerProfile).filter(EmployerProfile.user_id == current_user["user_id"]).first()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employer profile not found")
    return profile


@router.post("/employer-profile", response_model=EmployerProfileOut)
def upsert_employer_profile(
    payload: EmployerProfileUpsert,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_roles(Role.EMPLOYER)),
):
    user = _ensure_user(db, current_user)
    profile = db.query(EmployerProfile).filter(EmployerProfile.user_id == user.id).first()
    if not profile:
        profile = EmployerProfile(user_id=user.id)
        db.add(profile)

    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(profile, k, v)
    refresh_completion(profile, EMPLOYER_REQUIRED, EMPLOYER_OPTIONAL)

    _commit(db, "employer profile")
    db.refresh(profile)
    return profile
