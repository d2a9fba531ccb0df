from datetime import datetime
from pydantic import BaseModel

class RecommendationRead(BaseModel):
    id: int
    session_name: str
    description: str
    exercises: list[str]
    estimated_duration: str
    special_notes: str
    confidence: float
    is_accepted: bool
    accepted_template_id: int | None = None
    generated_at: datetime

    model_config = {"from_attributes": True}

class ImprovementsRead(BaseModel):
    suggestions: list[str]
