from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from physiotrack.models.pain_entry import BodyPart, Mood

PainLevel = Annotated[int, Field(ge=0, le=10)]
NotesStr = Annotated[str, Field(max_length=1000)]

class PainEntryCreate(BaseModel):
    pain_level: PainLevel
    body_part: BodyPart
    mood: Mood | None = None
    notes: NotesStr | None = None
    session_uid: str | None = None

class PainEntryUpdate(BaseModel):
    pain_level: PainLevel | None = None
    body_part: BodyPart | None = None
    mood: Mood | None = None
    notes: NotesStr | None = None

    # omitted means "keep"; null is only meaningful for the optional columns
    @field_validator("pain_level", "body_part", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

class PainEntryRead(BaseModel):
    id: int
    pain_level: int
    body_part: BodyPart
    mood: Mood | None = None
    notes: str | None = None
    session_uid: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
