# Data model for catalog problems
from pydantic import BaseModel, ConfigDict

from leetlog.models.enums import DifficultyLevel

class Problem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    slug: str
    difficulty_level: DifficultyLevel
    paid_only: bool = False

    @property
    def difficulty_label(self) -> str:
        return self.difficulty_level.label
