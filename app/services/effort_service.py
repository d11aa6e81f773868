"""
Effort Service

Records stakeholder effort against cohorts and keeps the weekly summary
cache in step with the underlying effort rows.

Rules:
- A week runs Monday through Sunday.
- A weekly summary's total is recomputed from stakeholder_efforts every time
  a record in its window changes; it is never patched incrementally.
- A weekly submission overwrites the whole submitted date range for the
  cohort: existing records in the range are deleted first.
- Weekly summary emails go out only when the recompute happens on a Friday
  (wall-clock date in APP_TIMEZONE, not the effort date).

Every public write is one unit of work: commit on success, rollback and
re-raise on failure. Writes lock the cohort row first so concurrent writers
for the same cohort serialize.
"""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config import app_today, utc_now_naive
from app.models import Cohort, StakeholderEffort, User, WeeklySummary
from app.schemas.effort import EffortCreate, WeeklyEffortSubmission
from app.services.errors import NotFoundError
from app.services.notifications import EmailNotifier

logger = logging.getLogger(__name__)

DEFAULT_AREA_OF_WORK = "Daily effort logging"
FRIDAY = 4
TWO_PLACES = Decimal("0.01")

MONTH_NAMES = (
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE",
    "JULY", "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
)


def get_week_start_monday(for_date: date) -> date:
    """Get the Monday of the week containing a date."""
    # weekday() returns 0 for Monday, 6 for Sunday
    return for_date - timedelta(days=for_date.weekday())


def get_week_bounds(for_date: date) -> Tuple[date, date]:
    """Get start (Monday) and end (Sunday) of the week containing a date."""
    week_start = get_week_start_monday(for_date)
    return week_start, week_start + timedelta(days=6)


def weeks_in_range(start_date: date, end_date: date) -> List[date]:
    """Mondays of every week overlapping [start_date, end_date]."""
    mondays = []
    week_start = get_week_start_monday(start_date)
    while week_start <= end_date:
        mondays.append(week_start)
        week_start += timedelta(days=7)
    return mondays


def month_label(for_date: date) -> str:
    """Upper-case English month name, independent of locale."""
    return MONTH_NAMES[for_date.month - 1]


class AuditContext:
    """Who is writing, and when. Passed explicitly into every write."""

    def __init__(self, user_id: int, at: Optional[datetime] = None):
        self.user_id = user_id
        self.at = at or utc_now_naive()

    def __repr__(self):
        return f"<AuditContext user:{self.user_id} at:{self.at.isoformat()}>"


class EffortService:
    """Effort submission, weekly reconciliation and queries."""

    def __init__(
        self,
        db: Session,
        notifier: Optional[EmailNotifier] = None,
        today: Callable[[], date] = app_today,
    ):
        self.db = db
        self.notifier = notifier or EmailNotifier()
        self.today = today

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def submit_effort(self, data: EffortCreate, audit: AuditContext) -> StakeholderEffort:
        """
        Record a single effort entry.

        Raises:
            NotFoundError: cohort, stakeholder or acting user does not exist
        """
        try:
            cohort = self._lock_cohort(data.cohort_id)
            stakeholder = self._get_user(data.trainer_mentor_id, entity="Stakeholder")
            self._get_user(audit.user_id)

            effort = StakeholderEffort(
                cohort_id=cohort.id,
                trainer_mentor_id=stakeholder.id,
                role=data.role,
                mode=data.mode,
                area_of_work=data.area_of_work,
                effort_hours=data.effort_hours,
                effort_date=data.effort_date,
                month=month_label(data.effort_date),
                updated_by_id=audit.user_id,
                updated_date=audit.at,
                created_at=audit.at,
            )
            self.db.add(effort)
            self.db.flush()

            summary = self._recompute_weekly_summary(cohort.id, data.effort_date, audit.at)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Effort {effort.id} logged: cohort {cohort.id}, {effort.role} "
            f"{effort.effort_hours}h on {effort.effort_date}"
        )
        self.notifier.send_daily_effort_notification(effort, stakeholder, cohort)
        self._notify_weekly_summary(summary, cohort)
        return effort

    def submit_weekly_effort(
        self, submission: WeeklyEffortSubmission, audit: AuditContext
    ) -> List[StakeholderEffort]:
        """
        Replace a cohort's effort records for a week with the submitted day logs.

        Holidays and role entries with no positive hours produce no record.
        A role with no stakeholder assigned on the cohort is skipped.

        Raises:
            NotFoundError: cohort or acting user does not exist
            ValueError: week bounds are inverted, or a day log falls outside them
        """
        validate_weekly_submission(submission)

        created = []
        try:
            cohort = self._lock_cohort(submission.cohort_id)
            self._get_user(audit.user_id)

            existing = self._efforts_in_range(
                cohort.id, submission.week_start_date, submission.week_end_date
            )
            for effort in existing:
                self.db.delete(effort)
            self.db.flush()
            if existing:
                logger.info(
                    f"Cleared {len(existing)} effort record(s) for cohort {cohort.id} "
                    f"{submission.week_start_date} - {submission.week_end_date}"
                )

            for day_log in submission.day_logs or []:
                if day_log.is_holiday:
                    continue
                for role, detail in day_log.entries():
                    if detail is None or detail.hours is None or detail.hours <= 0:
                        continue
                    stakeholder_id = cohort.stakeholder_for(role)
                    if stakeholder_id is None:
                        logger.warning(
                            f"Cohort {cohort.id} has no {role} assigned, "
                            f"skipping {detail.hours}h on {day_log.date}"
                        )
                        continue
                    effort = StakeholderEffort(
                        cohort_id=cohort.id,
                        trainer_mentor_id=stakeholder_id,
                        role=role,
                        mode="IN_PERSON",
                        area_of_work=detail.notes or DEFAULT_AREA_OF_WORK,
                        effort_hours=detail.hours,
                        effort_date=day_log.date,
                        month=month_label(day_log.date),
                        updated_by_id=audit.user_id,
                        updated_date=audit.at,
                        created_at=audit.at,
                    )
                    self.db.add(effort)
                    created.append(effort)
            self.db.flush()

            # The cleared range may span more than one Monday-Sunday week
            summaries = [
                self._recompute_weekly_summary(cohort.id, week_start, audit.at)
                for week_start in weeks_in_range(
                    submission.week_start_date, submission.week_end_date
                )
            ]
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Weekly effort submitted for cohort {cohort.id} week of "
            f"{submission.week_start_date}: {len(created)} record(s)"
        )
        for summary in summaries:
            self._notify_weekly_summary(summary, cohort)
        return created

    def delete_effort(self, effort_id: int) -> None:
        """
        Delete an effort record and recompute its week.

        Raises:
            NotFoundError: effort does not exist
        """
        try:
            effort = (
                self.db.query(StakeholderEffort)
                .filter(StakeholderEffort.id == effort_id)
                .first()
            )
            if not effort:
                raise NotFoundError("Effort", effort_id)
            cohort = self._lock_cohort(effort.cohort_id)
            effort_date = effort.effort_date

            self.db.delete(effort)
            self.db.flush()

            summary = self._recompute_weekly_summary(cohort.id, effort_date)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Effort {effort_id} deleted from cohort {cohort.id}")
        self._notify_weekly_summary(summary, cohort)

    def update_weekly_summary(self, cohort_id: int, any_date: date) -> WeeklySummary:
        """
        Recompute and store the summary for the week containing any_date.

        Raises:
            NotFoundError: cohort does not exist
        """
        try:
            cohort = self._lock_cohort(cohort_id)
            summary = self._recompute_weekly_summary(cohort.id, any_date)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self._notify_weekly_summary(summary, cohort)
        return summary

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_efforts_by_cohort(self, cohort_id: int) -> List[StakeholderEffort]:
        return (
            self.db.query(StakeholderEffort)
            .filter(StakeholderEffort.cohort_id == cohort_id)
            .order_by(StakeholderEffort.effort_date, StakeholderEffort.id)
            .all()
        )

    def get_efforts_by_cohort_and_date_range(
        self, cohort_id: int, start_date: date, end_date: date
    ) -> List[StakeholderEffort]:
        """Efforts for a cohort dated within [start_date, end_date]."""
        return self._efforts_in_range(cohort_id, start_date, end_date)

    def get_efforts_by_trainer_mentor(self, trainer_mentor_id: int) -> List[StakeholderEffort]:
        return (
            self.db.query(StakeholderEffort)
            .filter(StakeholderEffort.trainer_mentor_id == trainer_mentor_id)
            .order_by(StakeholderEffort.effort_date, StakeholderEffort.id)
            .all()
        )

    def get_effort_by_id(self, effort_id: int) -> Optional[StakeholderEffort]:
        return (
            self.db.query(StakeholderEffort)
            .filter(StakeholderEffort.id == effort_id)
            .first()
        )

    def get_weekly_summaries_by_cohort(self, cohort_id: int) -> List[WeeklySummary]:
        return (
            self.db.query(WeeklySummary)
            .filter(WeeklySummary.cohort_id == cohort_id)
            .order_by(WeeklySummary.week_start_date)
            .all()
        )

    def get_weekly_summary(self, cohort_id: int, week_start_date: date) -> Optional[WeeklySummary]:
        return (
            self.db.query(WeeklySummary)
            .filter(
                WeeklySummary.cohort_id == cohort_id,
                WeeklySummary.week_start_date == week_start_date,
            )
            .first()
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _lock_cohort(self, cohort_id: int) -> Cohort:
        # FOR UPDATE is a no-op on SQLite
        cohort = (
            self.db.query(Cohort)
            .filter(Cohort.id == cohort_id)
            .with_for_update()
            .first()
        )
        if not cohort:
            raise NotFoundError("Cohort", cohort_id)
        return cohort

    def _get_user(self, user_id: int, entity: str = "User") -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(entity, user_id)
        return user

    def _efforts_in_range(
        self, cohort_id: int, start_date: date, end_date: date
    ) -> List[StakeholderEffort]:
        return (
            self.db.query(StakeholderEffort)
            .filter(
                StakeholderEffort.cohort_id == cohort_id,
                StakeholderEffort.effort_date >= start_date,
                StakeholderEffort.effort_date <= end_date,
            )
            .order_by(StakeholderEffort.effort_date, StakeholderEffort.id)
            .all()
        )

    def _sum_hours(self, cohort_id: int, start_date: date, end_date: date) -> Decimal:
        total = (
            self.db.query(func.coalesce(func.sum(StakeholderEffort.effort_hours), 0))
            .filter(
                StakeholderEffort.cohort_id == cohort_id,
                StakeholderEffort.effort_date >= start_date,
                StakeholderEffort.effort_date <= end_date,
            )
            .scalar()
        )
        return Decimal(str(total or 0)).quantize(TWO_PLACES)

    def _recompute_weekly_summary(
        self, cohort_id: int, any_date: date, at: Optional[datetime] = None
    ) -> WeeklySummary:
        """Upsert the summary row for the week containing any_date. Caller commits."""
        at = at or utc_now_naive()
        week_start, week_end = get_week_bounds(any_date)
        total_hours = self._sum_hours(cohort_id, week_start, week_end)

        summary = self.get_weekly_summary(cohort_id, week_start)
        if summary:
            summary.total_hours = total_hours
            summary.week_end_date = week_end
            summary.summary_date = at
        else:
            summary = WeeklySummary(
                cohort_id=cohort_id,
                week_start_date=week_start,
                week_end_date=week_end,
                total_hours=total_hours,
                summary_date=at,
                created_at=at,
            )
            self.db.add(summary)
        self.db.flush()

        logger.info(f"Weekly summary for cohort {cohort_id} week of {week_start}: {total_hours}h")
        return summary

    def _notify_weekly_summary(self, summary: WeeklySummary, cohort: Cohort) -> None:
        if self.today().weekday() != FRIDAY:
            return
        stakeholder_ids = cohort.stakeholder_ids()
        stakeholders = []
        if stakeholder_ids:
            stakeholders = self.db.query(User).filter(User.id.in_(stakeholder_ids)).all()
        self.notifier.send_weekly_summary_notification(summary, cohort, stakeholders)


def validate_weekly_submission(submission: WeeklyEffortSubmission) -> None:
    """Raise ValueError if the submission's dates are inconsistent."""
    if submission.week_end_date < submission.week_start_date:
        raise ValueError("Week end date cannot be before week start date")
    for day_log in submission.day_logs or []:
        if not (submission.week_start_date <= day_log.date <= submission.week_end_date):
            raise ValueError(
                f"Day {day_log.date.isoformat()} is outside the submitted week "
                f"{submission.week_start_date.isoformat()} - {submission.week_end_date.isoformat()}"
            )
