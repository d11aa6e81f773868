"""
Background job scheduler for periodic tasks.
Uses APScheduler to refresh weekly effort summaries every Friday.
"""
import os
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import APP_TIMEZONE, app_today
from app.database import SessionLocal
from app.models import StakeholderEffort
from app.services.effort_service import EffortService, get_week_bounds

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class BackgroundJobScheduler:
    """Manages background jobs for the application."""

    def __init__(self):
        self.scheduler = BackgroundScheduler(timezone=APP_TIMEZONE)
        self.weekly_summary_enabled = os.getenv('WEEKLY_SUMMARY_JOB_ENABLED', 'false').lower() == 'true'

    def start(self):
        """Start the background job scheduler."""
        if not self.scheduler.running:
            if self.weekly_summary_enabled:
                # Fridays at 17:00 local time
                self.scheduler.add_job(
                    func=weekly_summary_job,
                    trigger=CronTrigger(day_of_week='fri', hour=17, minute=0),
                    id='weekly_summary_job',
                    name='Recompute and send weekly effort summaries',
                    replace_existing=True
                )
                logger.info("Weekly summary job scheduled for Fridays at 17:00")

            self.scheduler.start()
            logger.info("Background job scheduler started")

    def stop(self):
        """Stop the background job scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Background job scheduler stopped")

    def run_weekly_summary_now(self):
        """Manually trigger the weekly summary job."""
        return weekly_summary_job()


def weekly_summary_job(session_factory=SessionLocal, service_factory=EffortService, today=app_today):
    """
    Recompute this week's summary for every cohort with effort logged this week.
    On a Friday each recompute also sends the weekly summary email.

    Returns:
        Number of summaries refreshed.
    """
    logger.info("Starting weekly summary job...")

    db = session_factory()
    refreshed = 0
    try:
        week_start, week_end = get_week_bounds(today())
        cohort_ids = [
            row[0]
            for row in (
                db.query(StakeholderEffort.cohort_id)
                .filter(
                    StakeholderEffort.effort_date >= week_start,
                    StakeholderEffort.effort_date <= week_end,
                )
                .distinct()
                .all()
            )
        ]

        service = service_factory(db, today=today)
        for cohort_id in sorted(cohort_ids):
            try:
                service.update_weekly_summary(cohort_id, week_start)
                refreshed += 1
            except Exception as e:
                logger.error(f"Weekly summary failed for cohort {cohort_id}: {str(e)}")

        logger.info(f"Weekly summary job completed: {refreshed} summaries refreshed")

    except Exception as e:
        logger.error(f"Weekly summary job failed: {str(e)}")

    finally:
        db.close()

    return refreshed


# Global scheduler instance
scheduler = BackgroundJobScheduler()
