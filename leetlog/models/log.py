# Data model for logged problems and the per-user activity log
# leetlog/models/log.py
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field

class LogEntry(BaseModel):
    """
    One solved problem. Title and slug are copied from the catalog at log time
    so the entry stays readable if the catalog changes later.
    Field aliases match the persisted record layout.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    problem_id: str = Field(alias="problemId")
    title: str
    slug: str
    time_taken: float = Field(alias="timeTaken")
    looked_up: bool = Field(alias="lookedUp")

# Date key (YYYY-MM-DD) -> entries in logging order
ActivityLog = Dict[str, List[LogEntry]]
