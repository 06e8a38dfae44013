from datetime import datetime
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.application import Application
from ..models.job import Job
from ..models.user import User
from ..utils.dependencies import get_current_user
from ..utils.error_handlers import (
    NotFoundError,
    ValidationError,
    get_error_message,
    handle_database_error,
)
from ..utils.validation import validate_job_id, validate_string_field

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

TITLE_MAX = 150
LOCATION_MAX = 100
DESCRIPTION_MAX = 10000


def _isoformat(value):
    return value.isoformat() if isinstance(value, datetime) else value


def job_to_public(job: Job) -> dict:
    # Keys follow the job board frontend (camelCase).
    return {
        "id": job.id,
        "jobTitle": job.job_title,
        "location": job.location,
        "description": job.description,
        "createdOn": _isoformat(job.created_on),
    }


class JobCreate(BaseModel):
    jobTitle: str | None = None
    location: str | None = None
    description: str | None = None


class JobRef(BaseModel):
    jobId: int | str | None = None


class JobUpdate(JobRef):
    jobTitle: str | None = None
    location: str | None = None
    description: str | None = None


def _get_job_or_404(db: Session, job_id: int) -> Job:
    try:
        job = db.query(Job).filter(Job.id == job_id).first()
    except SQLAlchemyError as e:
        raise handle_database_error(e, "fetching job")

    if not job:
        raise NotFoundError(get_error_message("job_not_found"))
    return job


@router.post("", status_code=201)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not (payload.jobTitle and payload.location and payload.description):
        raise ValidationError(get_error_message("invalid_job_data"))

    job = Job(
        job_title=validate_string_field(payload.jobTitle, "Job title", max_length=TITLE_MAX),
        location=validate_string_field(payload.location, "Location", max_length=LOCATION_MAX),
        description=validate_string_field(payload.description, "Description", max_length=DESCRIPTION_MAX),
    )
    try:
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating job")

    logger.info("User %s created job %s", user.id, job.id)
    return {"success": True, "job": job_to_public(job)}


@router.get("")
def list_jobs(db: Session = Depends(get_db)):
    jobs = db.query(Job).order_by(Job.created_on.desc(), Job.id.desc()).all()
    return {"success": True, "jobs": [job_to_public(j) for j in jobs]}


@router.get("/new")
def list_new_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Jobs the caller has not applied to yet."""
    applied_job_ids = db.query(Application.job_id).filter(Application.applicant_id == user.id)
    jobs = (
        db.query(Job)
        .filter(Job.id.not_in(applied_job_ids.scalar_subquery()))
        .order_by(Job.created_on.desc(), Job.id.desc())
        .all()
    )
    return {"success": True, "jobs": [job_to_public(j) for j in jobs]}


@router.post("/details")
def job_details(
    payload: JobRef,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job = _get_job_or_404(db, validate_job_id(payload.jobId))
    return {"success": True, "job": job_to_public(job)}


@router.put("/update")
def update_job(
    payload: JobUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job = _get_job_or_404(db, validate_job_id(payload.jobId))

    # Empty or missing fields keep their current value.
    title = validate_string_field(payload.jobTitle, "Job title", max_length=TITLE_MAX, required=False)
    location = validate_string_field(payload.location, "Location", max_length=LOCATION_MAX, required=False)
    description = validate_string_field(
        payload.description, "Description", max_length=DESCRIPTION_MAX, required=False
    )
    if title:
        job.job_title = title
    if location:
        job.location = location
    if description:
        job.description = description

    try:
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "updating job")

    return {"success": True, "job": job_to_public(job)}


@router.delete("/delete")
def delete_job(
    payload: JobRef,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job_id = validate_job_id(payload.jobId)
    job = _get_job_or_404(db, job_id)

    try:
        db.delete(job)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "deleting job")

    logger.info("User %s deleted job %s", user.id, job_id)
    return {"success": True, "message": "Job removed", "deleted_job_id": job_id}
