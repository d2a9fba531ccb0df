from datetime import datetime
from pydantic import BaseModel

class DailyProgressRead(BaseModel):
    sessions_completed: int
    session_target: int
    points_earned: int
    point_target: int
    session_progress: float
    point_progress: float

    model_config = {"from_attributes": True}

class WeeklyProgressRead(BaseModel):
    week_start: datetime
    sessions_completed: int
    points_earned: int
    avg_pain_level: float

    model_config = {"from_attributes": True}

class ProgressReportRead(BaseModel):
    start: datetime
    end: datetime
    total_sessions: int
    total_points: int
    avg_pain_level: float
    most_frequent_exercises: list[str]
    streak_days: int
    weekly: list[WeeklyProgressRead]

    model_config = {"from_attributes": True}
