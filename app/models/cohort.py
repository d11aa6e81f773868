from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.config import utc_now_naive
from app.database import Base


class Cohort(Base):
    __tablename__ = "cohorts"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    # Assigned stakeholders; any of them may be unset
    primary_trainer_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    primary_mentor_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    buddy_mentor_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    updated_at = Column(
        DateTime, nullable=False, default=utc_now_naive, onupdate=utc_now_naive
    )

    # Relationships
    primary_trainer = relationship("User", foreign_keys=[primary_trainer_id])
    primary_mentor = relationship("User", foreign_keys=[primary_mentor_id])
    buddy_mentor = relationship("User", foreign_keys=[buddy_mentor_id])
    efforts = relationship("StakeholderEffort", back_populates="cohort")
    weekly_summaries = relationship("WeeklySummary", back_populates="cohort")

    def stakeholder_for(self, role: str):
        """Return the user id assigned to an effort role (TRAINER, MENTOR, BUDDY_MENTOR)."""
        return {
            "TRAINER": self.primary_trainer_id,
            "MENTOR": self.primary_mentor_id,
            "BUDDY_MENTOR": self.buddy_mentor_id,
        }.get(role)

    def stakeholder_ids(self):
        return [
            uid
            for uid in (self.primary_trainer_id, self.primary_mentor_id, self.buddy_mentor_id)
            if uid is not None
        ]

    def __repr__(self):
        return f"<Cohort {self.code}>"
