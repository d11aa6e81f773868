"""
Effort Router

JSON API over EffortService. The acting user comes from the session cookie
and is passed to the service as the audit context for every write.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.auth import get_current_user
from app.database import get_db
from app.models import User
from app.schemas.effort import (
    EffortCreate,
    EffortRead,
    WeeklyEffortSubmission,
    WeeklySummaryRead,
)
from app.services.effort_service import AuditContext, EffortService, get_week_start_monday

router = APIRouter(prefix="/efforts", tags=["efforts"])


def get_effort_service(db: Session = Depends(get_db)) -> EffortService:
    return EffortService(db)


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------
@router.post("", response_model=EffortRead, status_code=status.HTTP_201_CREATED)
async def submit_effort(
    payload: EffortCreate,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    """Log one stakeholder's hours for one cohort on one date."""
    return service.submit_effort(payload, AuditContext(user.id))


@router.post("/weekly", response_model=List[EffortRead], status_code=status.HTTP_201_CREATED)
async def submit_weekly_effort(
    payload: WeeklyEffortSubmission,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    """Overwrite a cohort's week with the submitted day logs."""
    try:
        return service.submit_weekly_effort(payload, AuditContext(user.id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{effort_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_effort(
    effort_id: int,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    service.delete_effort(effort_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@router.get("/cohort/{cohort_id}", response_model=List[EffortRead])
async def efforts_by_cohort(
    cohort_id: int,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    """All efforts for a cohort, or those within [startDate, endDate] when both are given."""
    if (start_date is None) != (end_date is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate and endDate must be given together",
        )
    if start_date and end_date:
        return service.get_efforts_by_cohort_and_date_range(cohort_id, start_date, end_date)
    return service.get_efforts_by_cohort(cohort_id)


@router.get("/stakeholder/{trainer_mentor_id}", response_model=List[EffortRead])
async def efforts_by_stakeholder(
    trainer_mentor_id: int,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    return service.get_efforts_by_trainer_mentor(trainer_mentor_id)


@router.get("/summaries/{cohort_id}", response_model=List[WeeklySummaryRead])
async def weekly_summaries(
    cohort_id: int,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    return service.get_weekly_summaries_by_cohort(cohort_id)


@router.get("/summaries/{cohort_id}/{week_start}", response_model=WeeklySummaryRead)
async def weekly_summary(
    cohort_id: int,
    week_start: date,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    """Summary for the week containing week_start (normalized to its Monday)."""
    summary = service.get_weekly_summary(cohort_id, get_week_start_monday(week_start))
    if not summary:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Weekly summary not found")
    return summary


@router.get("/{effort_id}", response_model=EffortRead)
async def get_effort(
    effort_id: int,
    service: EffortService = Depends(get_effort_service),
    user: User = Depends(get_current_user),
):
    effort = service.get_effort_by_id(effort_id)
    if not effort:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Effort not found")
    return effort
