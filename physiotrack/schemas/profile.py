from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

from physiotrack.models.profile import ActivityLevel, AgeGroup, UserCategory

ShortText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]

class ProfileUpdate(BaseModel):
    category: UserCategory
    age_group: AgeGroup
    activity_level: ActivityLevel
    primary_complaint: ShortText = ""
    goal: ShortText = ""
    limitations: Annotated[list[ShortText], Field(max_length=20)] = []

class ProfileRead(ProfileUpdate):
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
