from datetime import datetime
from pydantic import BaseModel, computed_field

from physiotrack.services.badges import BadgeCategory, icon_for

class BadgeRead(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    category: BadgeCategory

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def glyph(self) -> str:
        return icon_for(self.icon)

class EarnedBadgeRead(BadgeRead):
    unlocked_at: datetime
