"""Job endpoints."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from jobpool.api.auth import get_current_user
from jobpool.api.limiter import limiter
from jobpool.api.responses import dump, envelope
from jobpool.api.schemas import ApplyRequest, CVMetadata, JobCreate, JobDetail, JobListItem
from jobpool.config import settings
from jobpool.db import User, get_db
from jobpool.services import Applicant, JobFilters, JobService

router = APIRouter()


@router.get("")
def list_jobs(
    profession: str | None = None,
    city: str | None = None,
    country: str | None = None,
    job_type: str | None = Query(None, alias="jobType"),
    status: str | None = None,
    company: str | None = None,
    db: Session = Depends(get_db),
):
    """List jobs, optionally filtered, newest first."""
    filters = JobFilters(
        profession=profession,
        city=city,
        country=country,
        job_type=job_type,
        status=status,
        company=company,
    )
    jobs = JobService(db).list_jobs(filters)
    return envelope(data=[dump(JobListItem, j) for j in jobs], count=len(jobs))


@router.get("/cv/download", dependencies=[Depends(get_current_user)])
def download_cv(
    professional_id: str | None = Query(None, alias="professionalId"),
    trainee_id: str | None = Query(None, alias="traineeId"),
    db: Session = Depends(get_db),
):
    """Return where an applicant's CV is stored."""
    info = JobService(db).find_cv(professional_id=professional_id, trainee_id=trainee_id)
    return envelope(data=dump(CVMetadata, info))


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    """Get a job by ID. Each call counts as one view."""
    job = JobService(db).get_job(job_id)
    return envelope(data=dump(JobDetail, job))


@router.post("", status_code=201)
def create_job(
    data: JobCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Post a job for the caller's company."""
    job = JobService(db).create_job(user.id, data)
    return envelope(data=dump(JobDetail, job))


@router.post("/apply", dependencies=[Depends(get_current_user)])
@limiter.limit(settings.apply_rate_limit)
def apply_to_job(
    request: Request,
    data: ApplyRequest,
    db: Session = Depends(get_db),
):
    """Submit an application for a professional or a trainee."""
    if data.professional_id:
        applicant = Applicant(kind="professional", id=data.professional_id)
    else:
        applicant = Applicant(kind="trainee", id=data.trainee_id)

    job = JobService(db).apply_to_job(data.job_id, applicant, notes=data.notes)
    return envelope(data=dump(JobDetail, job), message="Application submitted successfully")
