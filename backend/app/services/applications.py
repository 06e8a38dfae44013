import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.job import Job
from ..utils.error_handlers import get_error_message
from ..utils.result import CONFLICT, NOT_FOUND, Err, Ok, Result

logger = logging.getLogger(__name__)


def find_application(db: Session, *, job_id: int, applicant_id: int) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.job_id == int(job_id), Application.applicant_id == int(applicant_id))
        .first()
    )


def apply_to_job(db: Session, *, job_id: int, applicant_id: int) -> Result[Application]:
    """
    Record that `applicant_id` applied to `job_id`, at most once per pair.

    The lookup below only gives duplicate submits a quick answer. Two requests
    racing past it are settled by the uq_applications_job_applicant constraint:
    the loser's commit raises IntegrityError and is reported as the same
    conflict.
    """
    job = db.query(Job).filter(Job.id == int(job_id)).first()
    if not job:
        return Err(NOT_FOUND, get_error_message("job_not_found"))

    if find_application(db, job_id=job_id, applicant_id=applicant_id):
        return Err(CONFLICT, get_error_message("already_applied"))

    application = Application(job_id=job.id, applicant_id=int(applicant_id))
    try:
        db.add(application)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(
            "Duplicate application for job %s by user %s rejected by constraint: %s",
            job_id,
            applicant_id,
            e.orig,
        )
        return Err(CONFLICT, get_error_message("already_applied"))

    db.refresh(application)
    logger.info("User %s applied to job %s (application %s)", applicant_id, job_id, application.id)
    return Ok(application)
