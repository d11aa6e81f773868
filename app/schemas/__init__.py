from app.schemas.effort import (
    EffortDetail,
    DayLog,
    WeeklyEffortSubmission,
    EffortCreate,
    EffortRead,
    WeeklySummaryRead,
)

__all__ = [
    'EffortDetail',
    'DayLog',
    'WeeklyEffortSubmission',
    'EffortCreate',
    'EffortRead',
    'WeeklySummaryRead',
]
