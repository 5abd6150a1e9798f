import logging
from typing import Any, Dict, Optional, Tuple
from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError
from storefront.models.user import User, UserRole, utc_now
from storefront.schemas.user import RegisterRequest, ProfileUpdate
from storefront.core.security import hash_password, verify_password, create_access_token
from storefront.core.errors import (
    ValidationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    Unauthenticated,
    Forbidden,
)

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.exec(select(User).where(User.email == email)).first()


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.role.value)


def register_user(db: Session, data: RegisterRequest) -> Tuple[str, User]:
    """Self-service registration, always with the ``user`` role"""
    if not (data.name and data.name.strip()) or not data.email or not data.password:
        raise ValidationError("Name, email, and password are required")

    email = str(data.email)
    if get_user_by_email(db, email):
        raise DuplicateEmailError("User already exists")

    user = User(
        name=data.name.strip(),
        email=email,
        password_hash=hash_password(data.password),
        phone=data.phone,
        address=data.address,
        profile_image=data.profile_image,
        role=UserRole.USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration of the same email
        db.rollback()
        raise DuplicateEmailError("User already exists")
    db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return issue_token(user), user


def authenticate(db: Session, email: str, password: str) -> Tuple[str, User]:
    """Check credentials and record the sign-in"""
    user = get_user_by_email(db, email)

    # Same error for unknown email and wrong password
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt")
        raise InvalidCredentialsError("Invalid credentials")

    if not user.is_active:
        raise Forbidden("Account is inactive")

    user.login_count = (user.login_count or 0) + 1
    user.last_login = utc_now()
    db.add(user)
    db.commit()
    db.refresh(user)

    return issue_token(user), user


def resolve_identity(db: Session, subject: Optional[Dict[str, Any]]) -> User:
    """Turn a verified token subject into the live user record"""
    user_id = subject.get("id") if subject else None
    if not user_id:
        raise Unauthenticated("Invalid token")

    try:
        user = db.get(User, int(user_id))
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token")

    if not user or not user.is_active:
        raise Unauthenticated("User not found or inactive")

    return user


def require_role(user: User, role: UserRole) -> User:
    if user.role != role:
        raise Forbidden(f"Not authorized as {role.value}")
    return user


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    update_data = data.model_dump(exclude_unset=True)

    if "name" in update_data and not (update_data["name"] or "").strip():
        raise ValidationError("Name cannot be empty")

    for key, value in update_data.items():
        setattr(user, key, value)
    user.updated_at = utc_now()

    db.add(user)
    db.commit()
    db.refresh(user)
    return user
