from fastapi import APIRouter
from pydantic import BaseModel

from physiotrack.services import catalog

router = APIRouter(prefix="/exercises", tags=["exercises"])

class CatalogEntryRead(BaseModel):
    key: str
    name: str
    description: str
    instruction: str

    model_config = {"from_attributes": True}

@router.get("", response_model=list[CatalogEntryRead])
def list_exercises():
    return list(catalog.CATALOG)
