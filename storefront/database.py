# storefront/database.py
from typing import Any

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings

settings = get_settings()


def _engine_kwargs(db_url: str) -> dict[str, Any]:
    """
    Pool settings per backend.

    Postgres (hosted, via pooler):
      - pool_size=1 / max_overflow=0: keep a single connection per process
      - pool_pre_ping=True: validate connections before using them

    SQLite (local dev / tests):
      - check_same_thread=False: FastAPI runs sync routes in a threadpool
      - in-memory DBs share one connection so every session sees the tables
    """
    if db_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True, "pool_size": 1, "max_overflow": 0}


def build_database_url(db_url: str) -> str:
    # Append sslmode=require for Postgres if it is not already present
    if db_url.startswith("postgres") and "sslmode=" not in db_url:
        sep = "&" if "?" in db_url else "?"
        db_url = f"{db_url}{sep}sslmode=require"
    return db_url


def make_engine(db_url: str):
    return create_engine(
        build_database_url(db_url),
        echo=False,  # set to True if you want to debug SQL queries
        **_engine_kwargs(db_url),
    )


engine = make_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
