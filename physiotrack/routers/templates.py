from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.models import User
from physiotrack.repositories.template_repo import TemplateRepository
from physiotrack.schemas.template import TemplateCreate, TemplateRead
from physiotrack.services import catalog
from physiotrack.services.session_controller import Exercise

router = APIRouter(prefix="/templates", tags=["templates"])

@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(payload: TemplateCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    exercises = [
        Exercise(name=e.name, description=e.description) if e.description else catalog.resolve_exercise(e.name)
        for e in payload.exercises
    ]
    return TemplateRepository(db).create(current.id, name=payload.name, exercises=exercises)

@router.get("", response_model=list[TemplateRead])
def list_templates(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return TemplateRepository(db).list_by_user(current.id)

@router.get("/{template_id}", response_model=TemplateRead)
def get_template(template_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    tpl = TemplateRepository(db).get_owned(template_id, current.id)
    if not tpl:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return tpl

@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = TemplateRepository(db)
    tpl = repo.get_owned(template_id, current.id)
    if not tpl:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    repo.delete(tpl)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
