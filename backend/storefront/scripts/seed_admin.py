"""
Seed script: create the admin account from ENV if it does not exist.
Run: python -m storefront.scripts.seed_admin
"""
from sqlmodel import Session, select
from storefront.db.session import engine, create_tables
from storefront.models.user import User, UserRole
from storefront.core.security import hash_password
from storefront.core.config import settings


def seed_admin(bind=None) -> User | None:
    """Create the admin if missing; returns the admin record or None when skipped"""
    admin_password = settings.ADMIN_PASSWORD

    if not admin_password:
        print("ADMIN_PASSWORD not set, skipping admin seed")
        return None

    with Session(bind or engine) as session:
        existing = session.exec(select(User).where(User.email == settings.ADMIN_EMAIL)).first()

        if existing:
            print(f"Admin already exists: {existing.email}")
            return existing

        admin = User(
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password_hash=hash_password(admin_password),
            role=UserRole.ADMIN,
            is_active=True
        )
        session.add(admin)
        session.commit()
        session.refresh(admin)
        print(f"Admin created: {admin.email}")
        return admin


def main():
    print("Creating tables...")
    create_tables()
    print("Seeding admin...")
    seed_admin()
    print("Done!")


if __name__ == "__main__":
    main()
