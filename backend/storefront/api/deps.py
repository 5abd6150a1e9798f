from fastapi import Depends
from fastapi_jwt import JwtAuthorizationCredentials
from sqlmodel import Session
from storefront.db.session import engine
from storefront.models.user import User, UserRole
from storefront.core.security import access_security
from storefront.core.errors import Unauthenticated
from storefront.services.auth import resolve_identity, require_role


def get_db():
    with Session(engine) as session:
        yield session


async def get_current_user(
    credentials: JwtAuthorizationCredentials | None = Depends(access_security),
    db: Session = Depends(get_db)
) -> User:
    if credentials is None:
        raise Unauthenticated("Not authorized, token missing or invalid")

    return resolve_identity(db, credentials.subject)


async def admin_required(
    current_user: User = Depends(get_current_user)
) -> User:
    return require_role(current_user, UserRole.ADMIN)
