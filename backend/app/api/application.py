from datetime import datetime
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session, joinedload

from ..database import get_db
from ..models.application import Application
from ..models.user import User
from ..services.applications import apply_to_job
from ..utils.dependencies import get_current_user
from ..utils.error_handlers import raise_for_error
from ..utils.validation import validate_job_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Applications"])


class ApplyRequest(BaseModel):
    jobId: int | str | None = None


def _isoformat(value):
    return value.isoformat() if isinstance(value, datetime) else value


def _application_payload(application: Application) -> dict:
    return {
        "id": application.id,
        "job": application.job_id,
        "applicant": application.applicant_id,
        "createdOn": _isoformat(application.created_on),
    }


def _application_row(application: Application, *, include_applicant: bool) -> dict:
    job = application.job
    row = {
        "applicationId": application.id,
        "jobId": job.id,
        "jobTitle": job.job_title,
        "location": job.location,
        "description": job.description,
        "createdOn": _isoformat(job.created_on),
    }
    if include_applicant:
        applicant = application.applicant
        row.update(
            {
                "userId": applicant.id,
                "username": applicant.name,
                "email": applicant.email,
            }
        )
    row["appliedOn"] = _isoformat(application.created_on)
    return row


@router.post("/apply", status_code=201)
def apply(
    payload: ApplyRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job_id = validate_job_id(payload.jobId)

    result = apply_to_job(db, job_id=job_id, applicant_id=user.id)
    if not result.ok:
        raise_for_error(result)

    return {"success": True, "application": _application_payload(result.value)}


@router.get("/applications")
def list_applications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Every application with its job and applicant details."""
    applications = (
        db.query(Application)
        .options(joinedload(Application.job), joinedload(Application.applicant))
        .order_by(Application.created_on.desc(), Application.id.desc())
        .all()
    )
    return {
        "success": True,
        "applications": [_application_row(a, include_applicant=True) for a in applications],
    }


@router.get("/applications/user")
def list_my_applications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    applications = (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.applicant_id == user.id)
        .order_by(Application.created_on.desc(), Application.id.desc())
        .all()
    )
    return {
        "success": True,
        "applications": [_application_row(a, include_applicant=False) for a in applications],
    }
