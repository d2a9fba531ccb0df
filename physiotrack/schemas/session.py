from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints, model_validator

from physiotrack.schemas.badge import BadgeRead

ExerciseName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class ExerciseIn(BaseModel):
    name: ExerciseName
    # Empty means "look it up in the catalog"
    description: Annotated[str, Field(max_length=500)] = ""

class ExerciseRead(BaseModel):
    id: str | None = None
    name: str
    description: str
    completed: bool = False

    model_config = {"from_attributes": True}

class SessionStart(BaseModel):
    """Either an ad hoc selection or a saved template."""
    exercises: list[ExerciseIn] | None = None
    template_id: int | None = None

    @model_validator(mode="after")
    def one_source(self):
        if (self.exercises is None) == (self.template_id is None):
            raise ValueError("provide exactly one of 'exercises' or 'template_id'")
        return self

class ActiveSessionRead(BaseModel):
    id: str
    template_id: int | None = None
    template_name: str
    exercises: list[ExerciseRead]
    start_date: datetime
    cursor: int
    current_exercise: ExerciseRead | None = None
    current_completed: bool
    all_completed: bool

class SessionExerciseRead(BaseModel):
    position: int
    name: str
    description: str
    completed: bool

    model_config = {"from_attributes": True}

class SessionRead(BaseModel):
    id: int
    uid: str
    template_id: int | None = None
    template_name: str
    started_at: datetime
    ended_at: datetime | None = None
    points_earned: int
    exercises: list[SessionExerciseRead]

    model_config = {"from_attributes": True}

class TotalsRead(BaseModel):
    sessions: int
    points: int

class SessionCompletion(BaseModel):
    session_id: str
    template_name: str
    end_date: datetime
    points_earned: int
    exercises: list[ExerciseRead]
    totals: TotalsRead
    persisted: bool
    new_badges: list[BadgeRead] = []
