"""
Run the migrations against DATABASE_URL and check the resulting schema.

Upgrades to head, verifies the applications unique constraints and the jobs
indexes, then downgrades to base and upgrades again to prove the cycle is
repeatable. Destroys data: point it at a scratch database.

Usage: python scripts/check_migrations.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from jobpool.db.base import get_engine
from jobpool.db.migrations import downgrade, schema_problems, upgrade


def verify(engine, step: str) -> bool:
    problems = schema_problems(engine)
    if problems:
        print(f"[FAIL] {step}")
        for problem in problems:
            print(f"  - {problem}")
        return False
    print(f"[OK] {step}")
    return True


def main() -> int:
    engine = get_engine()

    print("=== Upgrade to head ===")
    upgrade(engine)
    if not verify(engine, "schema after upgrade"):
        return 1

    print("\n=== Downgrade to base ===")
    downgrade(engine)
    if not schema_problems(engine):
        print("[FAIL] tables still present after downgrade")
        return 1
    print("[OK] tables dropped")

    print("\n=== Upgrade to head again ===")
    upgrade(engine)
    if not verify(engine, "schema after second upgrade"):
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
