"""
Weekly Summary Model

Cached total effort hours per cohort per Monday-start week.
Always recomputed from stakeholder_efforts, never patched incrementally.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from app.config import utc_now_naive
from app.database import Base


class WeeklySummary(Base):
    __tablename__ = "weekly_effort_summary"

    id = Column(Integer, primary_key=True)
    cohort_id = Column(
        Integer, ForeignKey("cohorts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_start_date = Column(Date, nullable=False)
    week_end_date = Column(Date, nullable=False)
    total_hours = Column(Numeric(10, 2), nullable=False)
    summary_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)

    # Relationship
    cohort = relationship("Cohort", back_populates="weekly_summaries")

    __table_args__ = (
        UniqueConstraint("cohort_id", "week_start_date", name="uq_weekly_effort_summary_cohort_week"),
    )

    def __repr__(self):
        return f"<WeeklySummary {self.cohort_id} {self.week_start_date} {self.total_hours}h>"
