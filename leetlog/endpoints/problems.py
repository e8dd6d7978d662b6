# Endpoints for looking up catalog problems

# leetlog/endpoints/problems.py
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from leetlog.models.enums import DifficultyLevel
from leetlog.models.problem import Problem
from leetlog.services.catalog_service import catalog_service, problem_url
from leetlog.services.featured_problem import featured_problem_service
from leetlog.state_manager import ActivityService, get_activity_service

router = APIRouter()

class ProblemResponse(BaseModel):
    id: int
    title: str
    slug: str
    difficulty: str
    paid_only: bool
    url: str

    @classmethod
    def from_problem(cls, problem: Problem) -> "ProblemResponse":
        return cls(
            id=problem.id,
            title=problem.title,
            slug=problem.slug,
            difficulty=problem.difficulty_label,
            paid_only=problem.paid_only,
            url=problem_url(problem.slug),
        )

class FeaturedProblemResponse(BaseModel):
    problem: ProblemResponse
    selected_at: datetime

@router.get("/random", response_model=ProblemResponse)
async def get_random_problem(
    difficulty: Optional[str] = None,
    user_id: Optional[str] = None,
    service: ActivityService = Depends(get_activity_service),
):
    """A random free problem the user has not logged yet."""
    if difficulty is not None:
        # Validate up front so a typo reads as 422 rather than "none left"
        try:
            DifficultyLevel.from_label(difficulty)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
    problem = await service.random_unsolved(user_id, difficulty)
    if problem is None:
        raise HTTPException(status_code=404, detail="No problems found. You may have solved them all!")
    return ProblemResponse.from_problem(problem)

@router.get("/featured", response_model=FeaturedProblemResponse)
async def get_featured_problem():
    featured = featured_problem_service.current()
    if featured is None:
        raise HTTPException(status_code=404, detail="No problem is currently featured.")
    return FeaturedProblemResponse(
        problem=ProblemResponse.from_problem(featured.problem),
        selected_at=featured.selected_at,
    )

@router.get("/{problem_id}", response_model=ProblemResponse)
async def get_problem(problem_id: str):
    problem = catalog_service.get_problem_by_id(problem_id)
    if not problem:
        raise HTTPException(status_code=404, detail=f"Problem ID {problem_id} not found.")
    return ProblemResponse.from_problem(problem)
