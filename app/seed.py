#!/usr/bin/env python3
"""
Database Seeding for the Academy Effort Tracker

Usage:
    python -m app.seed              # Create admin user if no users exist
    SEED_DEMO=true python -m app.seed   # Also create demo stakeholders and a demo cohort

Behavior:
    - If NO users exist: Creates one Admin user
    - SEED_DEMO=true: Creates trainer/mentor/buddy mentor users and a cohort
      with them assigned, if missing
    - Safe to run multiple times (idempotent)
"""

import os

from app.database import SessionLocal
from app.models import Cohort, User


# =============================================================================
# CONFIGURATION
# =============================================================================

ADMIN_USER = {
    "email": "admin@academy.local",
    "full_name": "Academy Admin",
    "role": "Admin",
}

DEMO_USERS = [
    {"email": "trainer@academy.local", "full_name": "Tara Trainer", "role": "Trainer"},
    {"email": "mentor@academy.local", "full_name": "Milo Mentor", "role": "Mentor"},
    {"email": "buddy@academy.local", "full_name": "Bea Buddy", "role": "BuddyMentor"},
]

DEMO_COHORT = {"code": "DEMO-01", "name": "Demo Cohort"}


# =============================================================================
# SEEDING FUNCTIONS
# =============================================================================


def get_or_create_user(db, user_data: dict):
    """Return (user, created)."""
    user = db.query(User).filter(User.email == user_data["email"]).first()
    if user:
        return user, False
    user = User(is_active=True, **user_data)
    db.add(user)
    db.flush()
    return user, True


def seed_admin_user(db) -> bool:
    """
    Create admin user if no users exist in the database.
    Returns True if user was created, False if skipped.
    """
    user_count = db.query(User).count()

    if user_count > 0:
        print(f"  [SKIP] {user_count} user(s) already exist - admin user not needed")
        return False

    print(f"  [CREATE] Admin user: {ADMIN_USER['email']}")
    get_or_create_user(db, ADMIN_USER)
    return True


def seed_demo_cohort(db) -> int:
    """
    Create demo stakeholders and a cohort that has them assigned.
    Returns count of rows created.
    """
    created_count = 0
    by_role = {}

    for user_data in DEMO_USERS:
        user, created = get_or_create_user(db, user_data)
        by_role[user.role] = user
        if created:
            print(f"  [CREATE] Demo user: {user.email} ({user.role})")
            created_count += 1
        else:
            print(f"  [SKIP] Demo user exists: {user.email}")

    cohort = db.query(Cohort).filter(Cohort.code == DEMO_COHORT["code"]).first()
    if cohort:
        print(f"  [SKIP] Demo cohort exists: {cohort.code}")
    else:
        cohort = Cohort(
            primary_trainer_id=by_role["Trainer"].id,
            primary_mentor_id=by_role["Mentor"].id,
            buddy_mentor_id=by_role["BuddyMentor"].id,
            **DEMO_COHORT,
        )
        db.add(cohort)
        print(f"  [CREATE] Demo cohort: {cohort.code}")
        created_count += 1

    return created_count


def main():
    """Main seeding entry point."""
    print("=" * 60)
    print("ACADEMY EFFORT TRACKER - DATABASE SEEDING")
    print("=" * 60)

    seed_demo = os.getenv("SEED_DEMO", "false").lower() == "true"

    db = SessionLocal()
    try:
        print("Phase 1: Admin User")
        admin_created = seed_admin_user(db)

        demo_created = 0
        if seed_demo:
            print("\nPhase 2: Demo Cohort")
            demo_created = seed_demo_cohort(db)
        else:
            print("\nPhase 2: Demo Cohort [SKIPPED - set SEED_DEMO=true to enable]")

        db.commit()

        print("\n" + "=" * 60)
        print("SEEDING COMPLETE")
        print("=" * 60)
        total_created = (1 if admin_created else 0) + demo_created
        if total_created > 0:
            print(f"Created {total_created} row(s)")
        else:
            print("No changes made")

    except Exception as e:
        db.rollback()
        print(f"\n[ERROR] Seeding failed: {e}")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    main()
