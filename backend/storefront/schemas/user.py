from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email
from typing import Optional, List
from datetime import datetime
from storefront.models.user import UserRole


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None

    class Config:
        extra = "forbid"

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        # Validated only; kept exactly as typed so login matches it
        if value:
            validate_email(value)
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    class Config:
        extra = "forbid"


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None

    class Config:
        extra = "forbid"


class RoleUpdate(BaseModel):
    role: str

    class Config:
        extra = "forbid"


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None
    role: UserRole
    is_active: bool
    login_count: int = 0
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]
    total: int
    total_pages: int
    current_page: int
