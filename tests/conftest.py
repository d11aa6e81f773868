"""
Shared fixtures: an in-memory SQLite database per test, seeded users and a
cohort, and a notifier that records instead of sending.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models import Cohort, User
from app.services.effort_service import AuditContext, EffortService

# Monday Jan 15, 2024 .. Sunday Jan 21, 2024
MONDAY = date(2024, 1, 15)
WEDNESDAY = date(2024, 1, 17)
FRIDAY = date(2024, 1, 19)
SUNDAY = date(2024, 1, 21)


class RecordingNotifier:
    """Stands in for EmailNotifier; keeps every call."""

    def __init__(self):
        self.daily = []
        self.weekly = []

    def send_daily_effort_notification(self, effort, stakeholder, cohort):
        self.daily.append((effort.id, stakeholder.id, cohort.id))
        return True

    def send_weekly_summary_notification(self, summary, cohort, stakeholders):
        self.weekly.append((summary.week_start_date, cohort.id, sorted(u.id for u in stakeholders)))
        return True


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    import app.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def users(db):
    """Admin, trainer, mentor and buddy mentor."""
    people = {
        "admin": User(email="admin@academy.local", full_name="Ada Admin", role="Admin"),
        "trainer": User(email="trainer@academy.local", full_name="Tara Trainer", role="Trainer"),
        "mentor": User(email="mentor@academy.local", full_name="Milo Mentor", role="Mentor"),
        "buddy": User(email="buddy@academy.local", full_name="Bea Buddy", role="BuddyMentor"),
    }
    db.add_all(people.values())
    db.commit()
    return people


@pytest.fixture
def cohort(db, users):
    cohort = Cohort(
        code="JAVA-24-01",
        name="Java Full Stack Jan 2024",
        primary_trainer_id=users["trainer"].id,
        primary_mentor_id=users["mentor"].id,
        buddy_mentor_id=users["buddy"].id,
    )
    db.add(cohort)
    db.commit()
    return cohort


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def today():
    """Mutable wall-clock date; defaults to a Wednesday so no weekly email fires."""
    class Clock:
        value = WEDNESDAY

        def __call__(self):
            return self.value

    return Clock()


@pytest.fixture
def service(db, notifier, today):
    return EffortService(db, notifier=notifier, today=today)


@pytest.fixture
def audit(users):
    return AuditContext(users["admin"].id)
