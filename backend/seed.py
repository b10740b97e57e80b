"""Create the administrator account and the default courses.

Usage:
    python -m backend.seed
"""
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.passwords import hash_password
from backend.core import config
from backend.database import Database
from backend.models.course import Course
from backend.models.user import Role, User


def seed(db: Session, admin_email: str, admin_password: str, course_names: list[str]) -> list[str]:
    """Insert missing seed rows and return a line per action taken."""
    report: list[str] = []
    normalized_email = admin_email.strip().lower()

    admin = db.query(User).filter(User.email == normalized_email).first()
    if admin is None:
        admin = User(
            email=normalized_email,
            hashed_password=hash_password(admin_password),
            role=Role.ADMIN.value,
        )
        db.add(admin)
        report.append(f"Admin created: {normalized_email}")
    else:
        report.append(f"Admin already present: {normalized_email}")

    existing = {name for (name,) in db.query(Course.name).filter(Course.name.in_(course_names))}
    for name in course_names:
        if name in existing:
            continue
        db.add(Course(name=name))
        existing.add(name)
        report.append(f"Course seeded: {name}")

    db.commit()
    return report


def main() -> None:
    database = Database(config.DATABASE_URL)
    try:
        database.create_schema()
        with database.session() as db:
            for line in seed(db, config.SEED_ADMIN_EMAIL, config.SEED_ADMIN_PASSWORD, config.SEED_COURSES):
                print(line)
    except SQLAlchemyError as exc:
        print("Seeding failed:", exc, file=sys.stderr)
        sys.exit(1)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
