"""Database package."""

from jobpool.db.base import Base, get_db, init_db
from jobpool.db.tables import (
    Application,
    City,
    Company,
    Country,
    Job,
    Profession,
    Professional,
    Province,
    Trainee,
    User,
)

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "User",
    "Country",
    "Province",
    "City",
    "Profession",
    "Company",
    "Professional",
    "Trainee",
    "Job",
    "Application",
]
