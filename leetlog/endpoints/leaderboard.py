# leetlog/endpoints/leaderboard.py
from typing import List, Optional
from fastapi import APIRouter, Depends

from leetlog.models.stats import LeaderboardRow
from leetlog.state_manager import ActivityService, get_activity_service

router = APIRouter()

@router.get("/", response_model=List[LeaderboardRow])
async def get_leaderboard(date: Optional[str] = None, service: ActivityService = Depends(get_activity_service)):
    """
    Daily leaderboard: users ranked by problems logged on `date` (today by
    default). An empty list means nobody has logged anything yet.
    """
    return await service.leaderboard(date)
