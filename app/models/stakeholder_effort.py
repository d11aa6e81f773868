"""
Stakeholder Effort Model

One stakeholder's logged hours for one cohort on one date.
Unique in practice per (cohort, stakeholder, date, role); not enforced.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from app.config import utc_now_naive
from app.database import Base


class StakeholderEffort(Base):
    __tablename__ = "stakeholder_efforts"

    id = Column(Integer, primary_key=True)
    cohort_id = Column(
        Integer, ForeignKey("cohorts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trainer_mentor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # TRAINER, MENTOR, BUDDY_MENTOR
    mode = Column(String(20), nullable=False, default="IN_PERSON")  # IN_PERSON, VIRTUAL
    area_of_work = Column(Text, nullable=True)
    effort_hours = Column(Numeric(5, 2), nullable=False)
    effort_date = Column(Date, nullable=False, index=True)
    month = Column(String(10), nullable=False)  # "JANUARY"
    updated_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)

    # Relationships
    cohort = relationship("Cohort", back_populates="efforts")
    trainer_mentor = relationship(
        "User", back_populates="efforts", foreign_keys=[trainer_mentor_id]
    )
    updated_by = relationship("User", foreign_keys=[updated_by_id])

    __table_args__ = (
        Index("ix_stakeholder_efforts_cohort_date", "cohort_id", "effort_date"),
    )

    ROLES = ["TRAINER", "MENTOR", "BUDDY_MENTOR"]
    MODES = ["IN_PERSON", "VIRTUAL"]

    def __repr__(self):
        return f"<StakeholderEffort {self.cohort_id} {self.effort_date} {self.role} {self.effort_hours}h>"
