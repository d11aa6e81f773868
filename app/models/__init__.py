from app.models.user import User
from app.models.cohort import Cohort
from app.models.stakeholder_effort import StakeholderEffort
from app.models.weekly_summary import WeeklySummary

__all__ = [
    "User",
    "Cohort",
    "StakeholderEffort",
    "WeeklySummary",
]
