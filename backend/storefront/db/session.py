from sqlmodel import SQLModel, create_engine
from sqlalchemy.pool import StaticPool
from storefront.core.config import settings


def build_engine(database_url: str):
    """Engine for the given URL; in-memory SQLite shares one connection"""
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


engine = build_engine(settings.DATABASE_URL)


def create_tables(bind=None):
    # models must be imported so their tables are registered on the metadata
    import storefront.models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)
