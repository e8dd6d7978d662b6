# Derived, read-only views over an activity log
from typing import Dict, Optional
from datetime import datetime
from pydantic import BaseModel

from leetlog.models.problem import Problem

class WindowStats(BaseModel):
    window_days: int
    total_problems: int
    total_time: float

class DayStats(BaseModel):
    date: str
    problems_solved: int
    total_time: float

class ChartPoint(BaseModel):
    date: str
    problem_count: int
    time_minutes: float

class ProfileSummary(BaseModel):
    first_logged_date: Optional[str] = None
    total_problems: int
    average_time: float
    current_streak: int

class LeaderboardRow(BaseModel):
    identity: str
    count_today: int

class FeaturedProblem(BaseModel):
    problem: Problem
    selected_at: datetime

DifficultyBreakdown = Dict[str, int]
