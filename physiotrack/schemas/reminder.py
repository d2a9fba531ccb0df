from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints, field_validator

from physiotrack.models.reminder import ReminderType

TimeStr = Annotated[str, StringConstraints(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
Weekday = Annotated[int, Field(ge=1, le=7)]

def _unique_days(v):
    if v is None:
        return v
    if len(set(v)) != len(v):
        raise ValueError("days_of_week must not repeat")
    return sorted(v)

class ReminderCreate(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
    message: Annotated[str, Field(max_length=500)] = ""
    time: TimeStr
    days_of_week: Annotated[list[Weekday], Field(min_length=1, max_length=7)]
    is_enabled: bool = True
    reminder_type: ReminderType = ReminderType.exercise

    @field_validator("days_of_week")
    @classmethod
    def days_unique(cls, v):
        return _unique_days(v)

class ReminderUpdate(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)] | None = None
    message: Annotated[str, Field(max_length=500)] | None = None
    time: TimeStr | None = None
    days_of_week: Annotated[list[Weekday], Field(min_length=1, max_length=7)] | None = None
    is_enabled: bool | None = None
    reminder_type: ReminderType | None = None

    # every reminder column is NOT NULL: fields may be omitted, never nulled
    @field_validator("title", "message", "time", "days_of_week", "is_enabled", "reminder_type", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("days_of_week")
    @classmethod
    def days_unique(cls, v):
        return _unique_days(v)

class ReminderRead(BaseModel):
    id: int
    title: str
    message: str
    time: str
    days_of_week: list[int]
    is_enabled: bool
    reminder_type: ReminderType
    created_at: datetime

    model_config = {"from_attributes": True}
