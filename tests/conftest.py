"""Shared fixtures: a throwaway SQLite database and an API client bound to it."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from jobpool.api.app import app
from jobpool.api.limiter import limiter
from jobpool.db import City, Company, Country, Job, Profession, Professional, Province, Trainee, User
from jobpool.db.base import build_engine, get_db, init_db


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'jobpool.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


class Seeder:
    """Creates committed rows for tests."""

    def __init__(self, db):
        self.db = db
        self._emails = 0

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, role: str = "professional") -> User:
        self._emails += 1
        return self._save(User(email=f"user{self._emails}@example.com", role=role))

    def country(self, name: str = "Canada") -> Country:
        return self._save(Country(name=name))

    def province(self, country: Country, name: str = "Ontario") -> Province:
        return self._save(Province(name=name, country_id=country.id))

    def city(self, country: Country, name: str = "Toronto", province: Province | None = None) -> City:
        return self._save(City(name=name, country_id=country.id, province_id=province.id if province else None))

    def profession(self, name: str = "Electrician", category: str = "Construction") -> Profession:
        return self._save(Profession(name=name, category=category))

    def company(self, user: User | None = None, name: str = "Acme Builders") -> Company:
        user = user or self.user(role="company")
        return self._save(
            Company(user_id=user.id, company_name=name, logo="uploads/company-logos/acme.png", description="Builders")
        )

    def professional(self, user: User | None = None, cv: str | None = None, cv_file_name: str | None = None):
        user = user or self.user(role="professional")
        return self._save(Professional(user_id=user.id, full_name="Sam Carter", cv=cv, cv_file_name=cv_file_name))

    def trainee(self, user: User | None = None, cv: str | None = None) -> Trainee:
        user = user or self.user(role="trainee")
        return self._save(Trainee(user_id=user.id, full_name="Alex Kim", cv=cv))

    def job(
        self,
        company: Company,
        profession: Profession,
        posted_date: datetime | None = None,
        **fields,
    ) -> Job:
        return self._save(
            Job(
                company_id=company.id,
                profession_id=profession.id,
                profession_name=profession.name,
                posted_date=posted_date or datetime.now(UTC),
                **fields,
            )
        )


@pytest.fixture
def seed(db):
    return Seeder(db)
