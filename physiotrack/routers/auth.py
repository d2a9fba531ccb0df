import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from physiotrack.db import get_db
from physiotrack.models import User
from physiotrack.schemas.user import TokenRead, UserRegister, UserLogin, UserRead
from physiotrack.security import hash_password, verify_password, create_access_token
from physiotrack.deps.auth import get_current_user
from physiotrack.repositories.user_repo import UserRepository

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

def _already_registered() -> HTTPException:
    return HTTPException(status_code=400, detail="email already registered")

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        raise _already_registered()
    try:
        user = repo.create(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
        )
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise _already_registered()
        raise
    log.info("registered user %s", user.id)
    return user

@router.post("/login", response_model=TokenRead)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        log.info("failed login for %s", payload.email)
        raise HTTPException(status_code=401, detail="invalid credentials")
    return TokenRead(access_token=create_access_token(sub=str(user.id)))

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
