"""
Effort request/response schemas.

Field names are snake_case in Python and camelCase on the wire
(cohortId, weekStartDate, isHoliday, buddyMentor, ...).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# stakeholder_efforts.effort_hours is Numeric(5, 2)
MAX_HOURS = Decimal("999.99")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------
class EffortDetail(CamelModel):
    """Hours and optional notes for one role on one day."""
    hours: Optional[Decimal] = Field(default=None, ge=0, le=MAX_HOURS, decimal_places=2)
    notes: Optional[str] = None


class DayLog(CamelModel):
    date: date
    is_holiday: bool = False
    trainer: Optional[EffortDetail] = None
    mentor: Optional[EffortDetail] = None
    buddy_mentor: Optional[EffortDetail] = None

    def entries(self):
        """(role, detail) pairs in trainer, mentor, buddy mentor order."""
        return [
            ("TRAINER", self.trainer),
            ("MENTOR", self.mentor),
            ("BUDDY_MENTOR", self.buddy_mentor),
        ]


class WeeklyEffortSubmission(CamelModel):
    cohort_id: int
    week_start_date: date
    week_end_date: date
    day_logs: Optional[List[DayLog]] = None
    location: Optional[str] = None


class EffortCreate(CamelModel):
    cohort_id: int
    trainer_mentor_id: int
    role: str = Field(pattern="^(TRAINER|MENTOR|BUDDY_MENTOR)$")
    mode: str = Field(default="IN_PERSON", pattern="^(IN_PERSON|VIRTUAL)$")
    area_of_work: Optional[str] = None
    effort_hours: Decimal = Field(ge=0, le=MAX_HOURS, decimal_places=2)
    effort_date: date


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class EffortRead(CamelModel):
    id: int
    cohort_id: int
    trainer_mentor_id: int
    role: str
    mode: str
    area_of_work: Optional[str] = None
    effort_hours: Decimal
    effort_date: date
    month: str
    updated_by_id: Optional[int] = None
    updated_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class WeeklySummaryRead(CamelModel):
    id: int
    cohort_id: int
    week_start_date: date
    week_end_date: date
    total_hours: Decimal
    summary_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
