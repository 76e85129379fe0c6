"""Programmatic Alembic upgrades and a check of the migrated schema."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from jobpool.db.base import Base

SCRIPT_LOCATION = Path(__file__).resolve().parent.parent / "alembic"

# Constraints that duplicate-application handling depends on
APPLICATION_UNIQUE_CONSTRAINTS = {
    "uq_application_job_professional": ["job_id", "professional_id"],
    "uq_application_job_trainee": ["job_id", "trainee_id"],
}

# Columns the job listing filters and sorts on
JOB_INDEXES = {
    "ix_jobs_company_id",
    "ix_jobs_profession_id",
    "ix_jobs_city_id",
    "ix_jobs_country_id",
    "ix_jobs_posted_date",
}


def alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", SCRIPT_LOCATION.as_posix())
    return config


def upgrade(engine: Engine, revision: str = "head") -> None:
    with engine.begin() as connection:
        config = alembic_config()
        config.attributes["connection"] = connection
        command.upgrade(config, revision)


def downgrade(engine: Engine, revision: str = "base") -> None:
    with engine.begin() as connection:
        config = alembic_config()
        config.attributes["connection"] = connection
        command.downgrade(config, revision)


def schema_problems(engine: Engine) -> list[str]:
    """Differences between the database and what the service relies on.

    An empty list means every mapped table exists, the applications table
    carries both duplicate-prevention constraints and the job filter columns
    are indexed.
    """
    inspector = inspect(engine)
    problems = []

    existing = set(inspector.get_table_names())
    for table in sorted(set(Base.metadata.tables) - existing):
        problems.append(f"missing table {table}")
    if problems:
        return problems

    unique = {c["name"]: c["column_names"] for c in inspector.get_unique_constraints("applications")}
    for name, columns in APPLICATION_UNIQUE_CONSTRAINTS.items():
        if unique.get(name) != columns:
            problems.append(f"applications lacks unique constraint {name} on {', '.join(columns)}")

    indexes = {ix["name"] for ix in inspector.get_indexes("jobs")}
    for name in sorted(JOB_INDEXES - indexes):
        problems.append(f"jobs lacks index {name}")

    return problems
