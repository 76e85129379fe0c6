"""
Job service: listing, detail, creation, applications and CV lookup.

Counters (views, applicationsCount, totalJobsPosted) are changed with
single UPDATE statements so concurrent requests never lose increments.
Duplicate applications are rejected by an explicit check under a row lock
and, as a backstop, by the unique constraints on the applications table.
"""

from dataclasses import dataclass
from typing import Literal

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from jobpool.db import Application, Company, Job, Profession, Professional, Trainee
from jobpool.errors import ConflictError, NotFoundError
from jobpool.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Applicant:
    """Who is applying: a professional or a trainee, never both."""

    kind: Literal["professional", "trainee"]
    id: str


@dataclass
class JobFilters:
    profession: str | None = None
    city: str | None = None
    country: str | None = None
    job_type: str | None = None
    status: str | None = None
    company: str | None = None


@dataclass
class CVInfo:
    cv_path: str
    file_name: str


class JobService:
    """Handles job reads and mutations against one database session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_jobs(self, filters: JobFilters) -> list[Job]:
        """All jobs matching every supplied filter, newest first."""
        query = self.db.query(Job).options(
            joinedload(Job.company),
            joinedload(Job.profession),
            joinedload(Job.city),
            joinedload(Job.country),
        )

        conditions = [
            (Job.profession_id, filters.profession),
            (Job.city_id, filters.city),
            (Job.country_id, filters.country),
            (Job.job_type, filters.job_type),
            (Job.status, filters.status),
            (Job.company_id, filters.company),
        ]
        for column, value in conditions:
            if value:
                query = query.filter(column == value)

        return query.order_by(Job.posted_date.desc(), Job.id).all()

    def get_job(self, job_id: str) -> Job:
        """Load a job for display, then count the view."""
        job = self._load_detail(job_id)
        self.record_view(job.id)
        return self._load_detail(job.id)

    def record_view(self, job_id: str) -> None:
        self.db.execute(
            update(Job)
            .where(Job.id == job_id)
            .values(views=Job.views + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

    def create_job(self, user_id: str, payload) -> Job:
        """Create a job for the caller's company and bump its posting counter.

        ``payload`` is a ``JobCreate``; the profession is checked before the
        company so a missing profession is reported first.
        """
        profession = self.db.query(Profession).filter(Profession.id == payload.profession).first()
        if not profession:
            raise NotFoundError("Profession not found")

        company = self.db.query(Company).filter(Company.user_id == user_id).first()
        if not company:
            raise NotFoundError("Company profile not found. Please create company profile first.")

        job = Job(
            **payload.job_fields(),
            company_id=company.id,
            profession_id=profession.id,
            profession_name=profession.name,
        )
        self.db.add(job)
        self.db.execute(
            update(Company)
            .where(Company.id == company.id)
            .values(total_jobs_posted=Company.total_jobs_posted + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

        logger.info(f"Company {company.id} posted job {job.id} ({profession.name})")
        return self._load_detail(job.id)

    def apply_to_job(self, job_id: str, applicant: Applicant, notes: str | None = None) -> Job:
        """Append an application unless this applicant already applied."""
        job = self.db.query(Job).filter(Job.id == job_id).with_for_update().first()
        if not job:
            self.db.rollback()
            raise NotFoundError("Job not found")

        if applicant.kind == "professional":
            model, column = Professional, Application.professional_id
        else:
            model, column = Trainee, Application.trainee_id

        if not self.db.query(model.id).filter(model.id == applicant.id).first():
            self.db.rollback()
            raise NotFoundError(f"{applicant.kind.capitalize()} not found")

        existing = (
            self.db.query(Application.id)
            .filter(Application.job_id == job.id, column == applicant.id)
            .first()
        )
        if existing:
            self.db.rollback()
            logger.info(f"Duplicate application by {applicant.kind} {applicant.id} on job {job_id}")
            raise ConflictError("Already applied to this job")

        application = Application(
            job_id=job.id,
            professional_id=applicant.id if applicant.kind == "professional" else None,
            trainee_id=applicant.id if applicant.kind == "trainee" else None,
            notes=notes or "",
            status="pending",
        )
        try:
            self.db.add(application)
            self.db.flush()
            self.db.execute(
                update(Job)
                .where(Job.id == job.id)
                .values(applications_count=Job.applications_count + 1)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except IntegrityError:
            # A concurrent submission by the same applicant committed first
            self.db.rollback()
            logger.info(f"Duplicate application by {applicant.kind} {applicant.id} on job {job_id}")
            raise ConflictError("Already applied to this job")

        logger.info(f"{applicant.kind.capitalize()} {applicant.id} applied to job {job_id}")
        return self._load_detail(job_id)

    def find_cv(self, professional_id: str | None = None, trainee_id: str | None = None) -> CVInfo:
        """Stored CV reference of a professional (preferred) or trainee."""
        if professional_id:
            professional = self.db.query(Professional).filter(Professional.id == professional_id).first()
            if professional and professional.cv:
                return CVInfo(cv_path=professional.cv, file_name=professional.cv_file_name or "cv.pdf")
        elif trainee_id:
            trainee = self.db.query(Trainee).filter(Trainee.id == trainee_id).first()
            if trainee and trainee.cv:
                return CVInfo(cv_path=trainee.cv, file_name="trainee-cv.pdf")

        raise NotFoundError("CV not found")

    def _load_detail(self, job_id: str) -> Job:
        job = (
            self.db.query(Job)
            .options(
                joinedload(Job.company),
                joinedload(Job.profession),
                joinedload(Job.city),
                joinedload(Job.country),
                joinedload(Job.province),
                selectinload(Job.applications),
            )
            .filter(Job.id == job_id)
            .populate_existing()
            .first()
        )
        if not job:
            raise NotFoundError("Job not found")
        return job
