"""
Seed demo data: locations, professions, a company, a professional and a trainee.

Requires: DATABASE_URL configured.
Usage: python scripts/seed_demo_data.py [--jobs N]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from jobpool.api.schemas import JobCreate
from jobpool.db.base import get_db, init_db
from jobpool.db.tables import City, Company, Country, Profession, Professional, Province, Trainee, User
from jobpool.services import JobService

PROFESSIONS = [
    ("Electrician", "Construction"),
    ("Plumber", "Construction"),
    ("Welder", "Manufacturing"),
    ("Nurse", "Healthcare"),
]


def seed(job_count: int) -> None:
    init_db()
    db = next(get_db())

    country = Country(name="Canada")
    db.add(country)
    db.flush()
    province = Province(name="Ontario", country_id=country.id)
    db.add(province)
    db.flush()
    city = City(name="Toronto", country_id=country.id, province_id=province.id)
    professions = [Profession(name=name, category=category) for name, category in PROFESSIONS]
    db.add(city)
    db.add_all(professions)

    company_user = User(email="hiring@demo-builders.example", role="company")
    professional_user = User(email="sam@demo.example", role="professional")
    trainee_user = User(email="alex@demo.example", role="trainee")
    db.add_all([company_user, professional_user, trainee_user])
    db.flush()

    db.add(Company(user_id=company_user.id, company_name="Demo Builders", description="Commercial construction"))
    professional = Professional(user_id=professional_user.id, full_name="Sam Carter", profession_id=professions[0].id)
    trainee = Trainee(user_id=trainee_user.id, full_name="Alex Kim")
    db.add_all([professional, trainee])
    db.commit()
    print(f"[OK] Company user: {company_user.id}")
    print(f"[OK] Professional: {professional.id} (user {professional_user.id})")
    print(f"[OK] Trainee: {trainee.id} (user {trainee_user.id})")

    service = JobService(db)
    for i in range(job_count):
        profession = professions[i % len(professions)]
        job = service.create_job(
            company_user.id,
            JobCreate(
                profession=profession.id,
                title=f"{profession.name} ({i + 1})",
                description=f"Demo {profession.name.lower()} position",
                city=city.id,
                country=country.id,
                province=province.id,
            ),
        )
        print(f"[OK] Job: {job.id} {job.title}")

    db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--jobs", type=int, default=4)
    args = parser.parse_args()
    seed(args.jobs)
