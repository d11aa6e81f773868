from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from app.config import utc_now_naive
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, index=True)  # Admin, Trainer, Mentor, BuddyMentor
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    updated_at = Column(
        DateTime, nullable=False, default=utc_now_naive, onupdate=utc_now_naive
    )

    # Relationships
    efforts = relationship(
        "StakeholderEffort",
        back_populates="trainer_mentor",
        foreign_keys="StakeholderEffort.trainer_mentor_id",
    )

    ROLES = ["Admin", "Trainer", "Mentor", "BuddyMentor"]

    def __repr__(self):
        return f"<User {self.email}>"
