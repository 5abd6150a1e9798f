from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from storefront.api.deps import get_db, get_current_user
from storefront.models.user import User
from storefront.schemas.user import (
    RegisterRequest, LoginRequest, AuthResponse, ProfileResponse, UserResponse
)
from storefront.services.auth import register_user, authenticate

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    token, user = register_user(db, data)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    token, user = authenticate(db, data.email, data.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=ProfileResponse)
def me(current_user: User = Depends(get_current_user)):
    return ProfileResponse(user=UserResponse.model_validate(current_user))
