from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from storefront.api.deps import get_db, get_current_user, admin_required
from storefront.models.user import User
from storefront.schemas.common import DataResponse, MessageResponse
from storefront.schemas.user import (
    ProfileUpdate, ProfileResponse, RoleUpdate, UserResponse, UserListResponse
)
from storefront.services import admin as admin_service
from storefront.services.auth import update_profile

router = APIRouter(tags=["users"])


# === User: own profile ===

@router.get("/api/user/profile", response_model=ProfileResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return ProfileResponse(user=UserResponse.model_validate(current_user))


@router.patch("/api/user/profile", response_model=ProfileResponse)
def update_my_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update name, phone, address or avatar"""
    user = update_profile(db, current_user, data)
    return ProfileResponse(user=UserResponse.model_validate(user))


# === Admin: user management ===

@router.get("/api/admin/users", response_model=DataResponse[UserListResponse])
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(""),
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    """Users, newest first, with name/email search"""
    return DataResponse(data=admin_service.list_users(db, page, limit, search))


@router.get("/api/admin/users/{user_id}", response_model=DataResponse[UserResponse])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    user = admin_service.get_user(db, user_id)
    return DataResponse(data=UserResponse.model_validate(user))


@router.patch("/api/admin/users/{user_id}/role", response_model=DataResponse[UserResponse])
def update_user_role(
    user_id: int,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    user = admin_service.set_user_role(db, user_id, data.role)
    return DataResponse(data=UserResponse.model_validate(user))


@router.patch("/api/admin/users/{user_id}/toggle-status", response_model=DataResponse[UserResponse])
def toggle_user_status(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    user = admin_service.toggle_user_active(db, user_id)
    state = "activated" if user.is_active else "deactivated"
    return DataResponse(
        data=UserResponse.model_validate(user),
        message=f"User {state} successfully"
    )


@router.delete("/api/admin/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(admin_required)
):
    admin_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
