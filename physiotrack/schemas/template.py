from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

from physiotrack.schemas.session import ExerciseIn

TemplateName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class TemplateCreate(BaseModel):
    name: TemplateName
    exercises: Annotated[list[ExerciseIn], Field(min_length=1, max_length=30)]

class TemplateExerciseRead(BaseModel):
    position: int
    name: str
    description: str

    model_config = {"from_attributes": True}

class TemplateRead(BaseModel):
    id: int
    name: str
    estimated_duration: str
    is_ai_generated: bool
    created_at: datetime
    exercises: list[TemplateExerciseRead]

    model_config = {"from_attributes": True}
