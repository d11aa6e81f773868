from app.services.errors import NotFoundError
from app.services.notifications import EmailNotifier
from app.services.effort_service import (
    AuditContext,
    EffortService,
    get_week_start_monday,
    get_week_bounds,
    weeks_in_range,
    month_label,
    validate_weekly_submission,
)

__all__ = [
    'NotFoundError',
    'EmailNotifier',
    'AuditContext',
    'EffortService',
    'get_week_start_monday',
    'get_week_bounds',
    'weeks_in_range',
    'month_label',
    'validate_weekly_submission',
]
