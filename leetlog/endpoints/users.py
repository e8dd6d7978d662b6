# leetlog/endpoints/users.py
from typing import Dict, List, Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator

from leetlog.models.enums import StatsRange
from leetlog.models.log import LogEntry
from leetlog.models.stats import ChartPoint, DayStats, ProfileSummary, WindowStats
from leetlog.services.catalog_service import problem_url
from leetlog.state_manager import ActivityService, get_activity_service
from leetlog.utils.config import settings
from leetlog.utils.logger import logger

router = APIRouter(
    tags=["Users"]
)

class LogRequest(BaseModel):
    problem_id: Union[str, int]
    time_taken: Union[float, str] = Field(description="Minutes spent on the problem.")
    looked_up: bool = Field(description="Whether the solution was looked up. Accepts 'yes'/'no'.")

    @field_validator("looked_up", mode="before")
    @classmethod
    def parse_yes_no(cls, v):
        if isinstance(v, str) and v.strip().lower() in ("yes", "no"):
            return v.strip().lower() == "yes"
        return v

class LogResponse(BaseModel):
    entry: LogEntry
    url: str

class StreakResponse(BaseModel):
    user_id: str
    streak: int

def _window_days(range_: StatsRange) -> int:
    return settings.MONTH_DAYS if range_ == StatsRange.MONTH else settings.WEEK_DAYS

@router.post("/{user_id}/log", response_model=LogResponse, status_code=201)
async def log_problem(user_id: str, request: LogRequest, service: ActivityService = Depends(get_activity_service)):
    """Logs a solved problem for today. Each problem can be logged once per day."""
    entry = await service.log_problem(user_id, request.problem_id, request.time_taken, request.looked_up)
    return LogResponse(entry=entry, url=problem_url(entry.slug))

@router.get("/{user_id}/log", response_model=Dict[str, List[LogEntry]])
async def get_log(user_id: str, service: ActivityService = Depends(get_activity_service)):
    return await service.get_log(user_id)

@router.get("/{user_id}/stats", response_model=Union[DayStats, WindowStats])
async def get_stats(
    user_id: str,
    date: Optional[str] = None,
    range_: StatsRange = Query(StatsRange.TODAY, alias="range"),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Stats for a single day (`date`, or today when `range` is "today"), or
    totals over the last week/month.
    """
    if date or range_ == StatsRange.TODAY:
        stats = await service.day_stats(user_id, date)
        if stats is None:
            raise HTTPException(status_code=404, detail=f"No data for {user_id} on {date or 'today'}.")
        return stats
    logger.debug(f"Fetching {range_.value} stats for user_id: {user_id}")
    return await service.window_stats(user_id, _window_days(range_))

@router.get("/{user_id}/streak", response_model=StreakResponse)
async def get_streak(user_id: str, service: ActivityService = Depends(get_activity_service)):
    return StreakResponse(user_id=user_id, streak=await service.streak(user_id))

@router.get("/{user_id}/breakdown", response_model=Dict[str, int])
async def get_breakdown(user_id: str, service: ActivityService = Depends(get_activity_service)):
    """Problems solved over the user's whole history, by catalog difficulty."""
    return await service.difficulty_breakdown(user_id)

@router.get("/{user_id}/chart", response_model=List[ChartPoint])
async def get_chart(
    user_id: str,
    range_: StatsRange = Query(StatsRange.WEEK, alias="range"),
    service: ActivityService = Depends(get_activity_service),
):
    """Daily points for the week/month chart, oldest first."""
    if range_ == StatsRange.TODAY:
        raise HTTPException(status_code=422, detail="Chart range must be 'week' or 'month'.")
    return await service.chart_series(user_id, _window_days(range_))

@router.get("/{user_id}/profile", response_model=ProfileSummary)
async def get_profile(user_id: str, service: ActivityService = Depends(get_activity_service)):
    return await service.profile(user_id)
