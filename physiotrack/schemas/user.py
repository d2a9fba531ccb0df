from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from datetime import datetime

from physiotrack.models.user import UserRole

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class UserBase(BaseModel):
    email: EmailStr = Field(max_length=255)
    name: NameStr

class UserCreate(UserBase):
    pass  # admin-created accounts; the user sets a password later

class UserRegister(UserBase):
    # no regex here: Pydantic v2 core regex doesn't support look-arounds
    password: Annotated[str, Field(min_length=12, max_length=128)]

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        if not any(c.islower() for c in v):
            raise ValueError("password must include a lowercase letter")
        if not any(c.isupper() for c in v):
            raise ValueError("password must include an uppercase letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("password must include a digit")
        if not any(not c.isalnum() for c in v):
            raise ValueError("password must include a special character")
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class UserRead(UserBase):
    id: int
    role: UserRole
    created_at: datetime
    total_sessions: int
    total_points: int
    model_config = {"from_attributes": True}

class GoalsUpdate(BaseModel):
    daily_session_target: Annotated[int, Field(ge=0, le=20)]
    daily_point_target: Annotated[int, Field(ge=0, le=1000)]

class GoalsRead(GoalsUpdate):
    model_config = {"from_attributes": True}

class VoiceSettingsSchema(BaseModel):
    enabled: bool = True
    announce_start: bool = True
    announce_complete: bool = True

class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
