"""
Account endpoints: registration, login and the caller's own profile.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zencure.db import get_db
from zencure.models import User
from zencure.services import auth_service

from ..auth.dependencies import get_current_user
from ..auth.jwt import create_user_token
from ..schemas import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=create_user_token(user.id),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return a token for it."""
    user = auth_service.register_user(db, payload.email, payload.password, payload.name)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate_user(db, payload.email, payload.password)
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=AuthResponse)
def update_me(
    payload: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the caller's profile. A fresh token is issued."""
    user = auth_service.update_profile(db, current_user, payload.model_dump(exclude_unset=True))
    return _auth_response(user)
