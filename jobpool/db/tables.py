"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobpool.db.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """User account. Identity resolved by the auth gate."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True)
    role: Mapped[str] = mapped_column(String(20), default="professional")  # company/professional/trainee/admin
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    company: Mapped["Company | None"] = relationship(back_populates="user", uselist=False)


class Country(Base):
    __tablename__ = "countries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(120), unique=True)

    provinces: Mapped[list["Province"]] = relationship(back_populates="country")


class Province(Base):
    __tablename__ = "provinces"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    country_id: Mapped[str] = mapped_column(ForeignKey("countries.id"))
    name: Mapped[str] = mapped_column(String(120))

    country: Mapped["Country"] = relationship(back_populates="provinces")


class City(Base):
    __tablename__ = "cities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    country_id: Mapped[str] = mapped_column(ForeignKey("countries.id"))
    province_id: Mapped[str | None] = mapped_column(ForeignKey("provinces.id"), default=None)
    name: Mapped[str] = mapped_column(String(120))


class Profession(Base):
    """Reference entity looked up when posting jobs."""

    __tablename__ = "professions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(120))
    category: Mapped[str] = mapped_column(String(120), default="")


class Company(Base):
    """Company profile, one per owning user."""

    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), unique=True)
    company_name: Mapped[str] = mapped_column(String(255))
    logo: Mapped[str | None] = mapped_column(Text, default=None)
    description: Mapped[str] = mapped_column(Text, default="")
    total_jobs_posted: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    user: Mapped["User"] = relationship(back_populates="company")


class Professional(Base):
    __tablename__ = "professionals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), unique=True)
    full_name: Mapped[str] = mapped_column(String(255))
    profession_id: Mapped[str | None] = mapped_column(ForeignKey("professions.id"), default=None)
    cv: Mapped[str | None] = mapped_column(Text, default=None)  # stored file reference
    cv_file_name: Mapped[str | None] = mapped_column(String(255), default=None)


class Trainee(Base):
    __tablename__ = "trainees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), unique=True)
    full_name: Mapped[str] = mapped_column(String(255))
    cv: Mapped[str | None] = mapped_column(Text, default=None)


class Job(Base):
    """A posted position. Counters are maintained with atomic UPDATEs."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    company_id: Mapped[str] = mapped_column(ForeignKey("companies.id"), index=True)
    profession_id: Mapped[str] = mapped_column(ForeignKey("professions.id"), index=True)
    profession_name: Mapped[str] = mapped_column(String(120))  # snapshot at creation
    city_id: Mapped[str | None] = mapped_column(ForeignKey("cities.id"), default=None, index=True)
    country_id: Mapped[str | None] = mapped_column(ForeignKey("countries.id"), default=None, index=True)
    province_id: Mapped[str | None] = mapped_column(ForeignKey("provinces.id"), default=None)
    title: Mapped[str] = mapped_column(String(255), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    requirements: Mapped[str] = mapped_column(Text, default="")
    salary: Mapped[str | None] = mapped_column(String(100), default=None)
    job_type: Mapped[str] = mapped_column(String(20), default="full-time")
    status: Mapped[str] = mapped_column(String(20), default="active")  # active/closed/draft
    posted_date: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC), index=True)
    views: Mapped[int] = mapped_column(Integer, default=0)
    applications_count: Mapped[int] = mapped_column(Integer, default=0)

    company: Mapped["Company"] = relationship()
    profession: Mapped["Profession"] = relationship()
    city: Mapped["City | None"] = relationship()
    country: Mapped["Country | None"] = relationship()
    province: Mapped["Province | None"] = relationship()
    applications: Mapped[list["Application"]] = relationship(
        back_populates="job", order_by="Application.applied_at"
    )


class Application(Base):
    """A single applicant's submission against a job. Append-only."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "professional_id", name="uq_application_job_professional"),
        UniqueConstraint("job_id", "trainee_id", name="uq_application_job_trainee"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"), index=True)
    professional_id: Mapped[str | None] = mapped_column(ForeignKey("professionals.id"), default=None)
    trainee_id: Mapped[str | None] = mapped_column(ForeignKey("trainees.id"), default=None)
    notes: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending/reviewed/accepted/rejected
    applied_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    job: Mapped["Job"] = relationship(back_populates="applications")
