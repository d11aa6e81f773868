"""
Tests for the Friday weekly summary job.
"""

from datetime import date
from decimal import Decimal

from app.background_jobs import BackgroundJobScheduler, weekly_summary_job
from app.models import Cohort, StakeholderEffort
from app.services.effort_service import EffortService

from tests.conftest import FRIDAY, MONDAY


def add_effort(db, cohort, user, effort_date, hours):
    db.add(StakeholderEffort(
        cohort_id=cohort.id,
        trainer_mentor_id=user.id,
        role="TRAINER",
        mode="IN_PERSON",
        effort_hours=Decimal(hours),
        effort_date=effort_date,
        month="JANUARY",
    ))
    db.commit()


class TestWeeklySummaryJob:
    """Tests for weekly_summary_job."""

    def _run(self, db, notifier, on):
        return weekly_summary_job(
            session_factory=lambda: db,
            service_factory=lambda session, today: EffortService(session, notifier=notifier, today=today),
            today=lambda: on,
        )

    def test_refreshes_cohorts_with_effort_this_week(self, db, cohort, users, notifier):
        """Only cohorts with effort in the current week are refreshed and emailed."""
        idle = Cohort(code="IDLE-01", name="Idle")
        db.add(idle)
        db.commit()
        add_effort(db, cohort, users["trainer"], MONDAY, "3")
        add_effort(db, cohort, users["trainer"], FRIDAY, "2")
        add_effort(db, idle, users["trainer"], date(2024, 1, 8), "9")
        # The job closes the session, detaching these
        cohort_id, idle_id = cohort.id, idle.id

        refreshed = self._run(db, notifier, FRIDAY)

        assert refreshed == 1
        service = EffortService(db, notifier=notifier)
        assert service.get_weekly_summary(cohort_id, MONDAY).total_hours == Decimal("5.00")
        assert service.get_weekly_summary(idle_id, MONDAY) is None
        assert [(week, cid) for week, cid, _ in notifier.weekly] == [(MONDAY, cohort_id)]

    def test_no_effort_no_work(self, db, cohort, notifier):
        assert self._run(db, notifier, FRIDAY) == 0
        assert notifier.weekly == []


class TestBackgroundJobScheduler:
    """Scheduler wiring."""

    def test_job_registered_when_enabled(self, monkeypatch):
        monkeypatch.setenv("WEEKLY_SUMMARY_JOB_ENABLED", "true")
        scheduler = BackgroundJobScheduler()
        scheduler.start()
        try:
            job = scheduler.scheduler.get_job("weekly_summary_job")
            assert job is not None
            assert job.next_run_time.weekday() == 4
        finally:
            scheduler.stop()

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("WEEKLY_SUMMARY_JOB_ENABLED", raising=False)
        scheduler = BackgroundJobScheduler()
        scheduler.start()
        try:
            assert scheduler.scheduler.get_job("weekly_summary_job") is None
        finally:
            scheduler.stop()
